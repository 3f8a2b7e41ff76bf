"""
Runs one read -> annotate -> save cycle against a host selection
"""
import logging
from typing import Optional

from src.aggregator import BatchResult, aggregate
from src.errors import AlreadyRunning, ReadFailure, SaveFailure
from src.selection import Selection
from src.vocabulary import VocabularyIndex

logger = logging.getLogger(__name__)


class VisualSupportsRunner:
    """Adds visual supports to a selection, one cycle at a time"""

    def __init__(self, index: VocabularyIndex):
        self.index = index
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def run(self, selection: Selection) -> Optional[BatchResult]:
        """
        Annotate every selected text item and save them back

        Returns None when nothing is selected. Raises ReadFailure or
        SaveFailure with the host error as the cause; on failure the host
        document is left as it was.
        """
        if self._running:
            raise AlreadyRunning("Visual supports are already being added")

        if selection.count == 0:
            logger.debug("No text selected, nothing to do")
            return None

        self._running = True
        try:
            return await self._cycle(selection)
        finally:
            self._running = False

    async def _cycle(self, selection: Selection) -> BatchResult:
        try:
            draft = await selection.read()
        except Exception as e:
            logger.error("Reading selected text failed: %s", e)
            raise ReadFailure(f"Could not read the selected text: {e}") from e

        originals = [item.text for item in draft.contents]
        result = aggregate(originals, self.index)

        for item, text in zip(draft.contents, result.items):
            item.text = text

        try:
            await draft.save()
        except Exception as e:
            for item, text in zip(draft.contents, originals):
                item.text = text
            logger.error("Saving rewritten text failed: %s", e)
            raise SaveFailure(f"Could not save the visual supports: {e}") from e

        logger.info(
            "Added %d supports across %d items (%d/%d words matched)",
            result.summary.supports_added,
            len(result.items),
            result.summary.matched_words,
            result.summary.scanned_words,
        )
        return result
