"""
Error taxonomy for visual supports runs
"""


class VisualSupportsError(Exception):
    """Base class for every error reported to the user"""


class MalformedVocabularyEntry(VisualSupportsError):
    """A vocabulary record without a word or an emoji"""

    def __init__(self, record, reason: str):
        self.record = record
        self.reason = reason
        super().__init__(f"Malformed vocabulary entry {record!r}: {reason}")


class ReadFailure(VisualSupportsError):
    """The host could not read the selected text content"""


class SaveFailure(VisualSupportsError):
    """The host could not save the rewritten text content"""


class AlreadyRunning(VisualSupportsError):
    """A read -> annotate -> save cycle is already in flight"""


class DocumentStoreError(VisualSupportsError):
    """The document store rejected an operation"""


class VocabularyLoadError(VisualSupportsError):
    """The vocabulary data source could not be read or parsed"""
