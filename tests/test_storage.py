from pathlib import Path

import pytest

from img2code.config import AppSettings
from img2code.preview import OutputKind
from img2code.prompts import HTML_PROMPT, SKETCH_PROMPT
from img2code.storage import SAVED_PROMPT_KEY, DiskPromptStore, MemoryPromptStore, PromptBook, prompt_key


def test_load_seeds_default() -> None:
    store = MemoryPromptStore()
    book = PromptBook(store, default='default prompt')

    assert book.load() == 'default prompt'
    assert store.get(SAVED_PROMPT_KEY) == 'default prompt'


def test_saved_prompt_wins() -> None:
    book = PromptBook(MemoryPromptStore({SAVED_PROMPT_KEY: 'mine'}), default='default prompt')
    assert book.load() == 'mine'


def test_save_and_reset() -> None:
    book = PromptBook(MemoryPromptStore(), default='default prompt')

    assert book.save('draw a cat')
    assert book.load() == 'draw a cat'
    assert not book.save('')
    assert book.load() == 'draw a cat'

    assert book.reset() == 'default prompt'
    assert book.load() == 'default prompt'


def test_memory_store_delete() -> None:
    store = MemoryPromptStore({'a': '1'})
    store.delete('a')
    store.delete('missing')
    assert store.get('a') is None


@pytest.fixture()
def disk_store(tmp_path: Path):
    store = DiskPromptStore(tmp_path / 'prompts')
    yield store
    store.close()


def test_disk_store_persists_across_instances(tmp_path: Path) -> None:
    first = DiskPromptStore(tmp_path)
    PromptBook(first, default='d').save('persisted prompt')
    first.close()

    second = DiskPromptStore(tmp_path)
    try:
        assert PromptBook(second, default='d').load() == 'persisted prompt'
    finally:
        second.close()


def test_disk_store_roundtrip(disk_store: DiskPromptStore) -> None:
    assert disk_store.get('key') is None
    disk_store.set('key', 'value')
    assert disk_store.get('key') == 'value'
    disk_store.delete('key')
    assert disk_store.get('key') is None


def test_prompt_key_per_kind() -> None:
    assert prompt_key(OutputKind.sketch) == SAVED_PROMPT_KEY
    assert prompt_key('html') == 'savedPrompt:html'


def test_each_kind_keeps_its_own_prompt() -> None:
    store = MemoryPromptStore()
    sketch_book = AppSettings(kind='sketch').build_prompt_book(store)
    html_book = AppSettings(kind='sketch').build_prompt_book(store, kind=OutputKind.html)

    assert sketch_book.load() == SKETCH_PROMPT
    assert html_book.load() == HTML_PROMPT

    html_book.save('a landing page')
    assert sketch_book.load() == SKETCH_PROMPT
    assert AppSettings(kind='html').build_prompt_book(store).load() == 'a landing page'
