from __future__ import annotations

import re
from enum import Enum
from typing import List, NamedTuple, Optional

# The language tag is only recognised when it is the whole rest of the opening fence line,
# so an inline block such as ```print(1)``` keeps its first word.
_fenced_block_pattern = re.compile(r'```(?:(?P<language>[\w+#.-]+)[^\S\n]*(?=\n))?\s*(?P<code>[\s\S]*?)```')


class ExtractionFallback(str, Enum):
    full_text = 'full_text'
    empty = 'empty'


class CodeBlock(NamedTuple):
    language: Optional[str]
    code: str


def find_code_blocks(text: str) -> List[CodeBlock]:
    return [
        CodeBlock(language=match.group('language'), code=match.group('code').strip())
        for match in _fenced_block_pattern.finditer(text)
    ]


def extract_code(text: str, fallback: ExtractionFallback = ExtractionFallback.full_text) -> str:
    """
    Extract the content of the first fenced code block in a model reply.

    Args:
        text (str): The free-form text returned by the model.
        fallback (ExtractionFallback, optional): What to return when there is no complete fenced block.
            ``full_text`` returns ``text`` unmodified, ``empty`` returns an empty string. Defaults to ``full_text``.

    Returns:
        str: The stripped inner content of the first block, or the fallback value.
    """
    match = _fenced_block_pattern.search(text)
    if match is not None:
        return match.group('code').strip()
    if ExtractionFallback(fallback) is ExtractionFallback.empty:
        return ''
    return text


class CodeExtractor:
    def __init__(self, fallback: ExtractionFallback | str = ExtractionFallback.full_text) -> None:
        self.fallback = ExtractionFallback(fallback)

    def __call__(self, text: str) -> str:
        return extract_code(text, fallback=self.fallback)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(fallback={self.fallback.value!r})'
