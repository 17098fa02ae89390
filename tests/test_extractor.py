import pytest

from img2code.code_generation import CodeBlock, CodeExtractor, ExtractionFallback, extract_code, find_code_blocks


def test_extract_language_tagged_block() -> None:
    text = 'Here is the code:\n```html\n<div>hi</div>\n```\nDone.'
    assert extract_code(text) == '<div>hi</div>'


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        ('```\nlet x = 1;\n```', 'let x = 1;'),
        ('```javascript\n\n  function setup() {}\n\n```', 'function setup() {}'),
        ('before ```print(1)``` after', 'print(1)'),
        ('```c++\nint main() {}\n```', 'int main() {}'),
        ('```js   \nconsole.log(1)\n```', 'console.log(1)'),
    ],
)
def test_extract_single_block_is_stripped(text: str, expected: str) -> None:
    assert extract_code(text) == expected


def test_extract_only_first_block() -> None:
    text = 'First:\n```js\nconst a = 1;\n```\nSecond:\n```css\nbody {}\n```'
    assert extract_code(text) == 'const a = 1;'


def test_no_block_returns_full_text_by_default() -> None:
    text = 'I could not produce any code for this image.'
    assert extract_code(text) == text


def test_no_block_returns_empty_when_requested() -> None:
    text = 'I could not produce any code for this image.'
    assert extract_code(text, fallback=ExtractionFallback.empty) == ''


def test_unterminated_block_uses_fallback() -> None:
    text = 'Partial answer\n```html\n<div>'
    assert extract_code(text) == text
    assert extract_code(text, fallback='empty') == ''


def test_find_code_blocks() -> None:
    text = '```html\n<p>a</p>\n```\nand\n```\nplain\n```'
    assert find_code_blocks(text) == [CodeBlock(language='html', code='<p>a</p>'), CodeBlock(language=None, code='plain')]
    assert find_code_blocks('no code here') == []


def test_code_extractor() -> None:
    extractor = CodeExtractor('empty')
    assert extractor.fallback is ExtractionFallback.empty
    assert extractor('```\nx\n```') == 'x'
    assert extractor('nothing') == ''
    assert repr(extractor) == "CodeExtractor(fallback='empty')"


def test_code_extractor_rejects_unknown_fallback() -> None:
    with pytest.raises(ValueError):
        CodeExtractor('first_line')
