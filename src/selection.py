"""
Text-content collaborator: what a host must provide to be annotated
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence


class TextItem(Protocol):
    text: str


class Draft(Protocol):
    """A readable snapshot of the selection whose edits are persisted by save()"""

    contents: Sequence[TextItem]

    async def save(self) -> None: ...


class Selection(Protocol):
    @property
    def count(self) -> int: ...

    async def read(self) -> Draft: ...


@dataclass
class TextContent:
    text: str


class InMemoryDraft:
    def __init__(self, selection: "InMemorySelection", contents: List[TextContent]):
        self._selection = selection
        self.contents = contents

    async def save(self) -> None:
        self._selection._commit([item.text for item in self.contents])


class InMemorySelection:
    """
    Host that keeps its document as a list of strings

    Optional hooks let callers simulate a host whose read or save fails.
    """

    def __init__(
        self,
        texts: Sequence[str],
        fail_read: Optional[Callable[[], Exception]] = None,
        fail_save: Optional[Callable[[], Exception]] = None,
    ):
        self.texts = list(texts)
        self.fail_read = fail_read
        self.fail_save = fail_save
        self.saves = 0

    @property
    def count(self) -> int:
        return len(self.texts)

    async def read(self) -> InMemoryDraft:
        if self.fail_read:
            raise self.fail_read()
        return InMemoryDraft(self, [TextContent(t) for t in self.texts])

    def _commit(self, texts: List[str]):
        if self.fail_save:
            raise self.fail_save()
        if len(texts) != len(self.texts):
            raise RuntimeError("Selection changed since it was read")
        self.texts = texts
        self.saves += 1
