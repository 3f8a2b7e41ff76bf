import json
from typing import Optional

from semantic_kernel.functions.kernel_function_decorator import kernel_function

from src.aggregator import aggregate
from src.annotator import annotate
from src.config import load_settings
from src.vocabulary import VocabularyIndex, read_vocabulary_file


class VisualSupportsPlugin:
    """
    add_visual_supports     ➜ text with an emoji after each vocabulary word
    visual_supports_report  ➜ JSON run statistics for one or more lines
    """

    def __init__(
        self,
        vocabulary_path: Optional[str] = None,
        index: Optional[VocabularyIndex] = None,
    ):
        if index is None:
            index = read_vocabulary_file(vocabulary_path or load_settings().vocabulary_path)
        self.index = index

    @kernel_function(
        name="add_visual_supports",
        description="Append an emoji visual support after every known vocabulary word",
    )
    def add_visual_supports(self, text: str) -> str:
        return annotate(text, self.index).text

    @kernel_function(
        name="visual_supports_report",
        description="Annotate each line of the text and report vocabulary coverage as JSON",
    )
    def visual_supports_report(self, text: str) -> str:
        result = aggregate(text.splitlines(keepends=True) or [text], self.index)
        return json.dumps(
            {"text": "".join(result.items), "summary": result.summary.to_dict()},
            ensure_ascii=False,
        )
