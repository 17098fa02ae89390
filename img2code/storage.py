from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from diskcache import Cache

from img2code.preview import OutputKind

logger = logging.getLogger(__name__)

SAVED_PROMPT_KEY = 'savedPrompt'


def prompt_key(kind: OutputKind | str) -> str:
    """Each output kind keeps its own saved prompt; the sketch prompt uses the bare key."""
    kind = OutputKind(kind)
    if kind is OutputKind.sketch:
        return SAVED_PROMPT_KEY
    return f'{SAVED_PROMPT_KEY}:{kind.value}'


class PromptStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:  # noqa: A003
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryPromptStore:
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:  # noqa: A003
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class DiskPromptStore:
    default_directory = Path.home() / '.cache' / 'img2code'

    def __init__(self, directory: Path | str | None = None) -> None:
        self.directory = Path(directory or self.default_directory)
        self.cache = Cache(directory=str(self.directory))

    def get(self, key: str) -> Optional[str]:
        value = self.cache.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:  # noqa: A003
        self.cache.set(key, value)

    def delete(self, key: str) -> None:
        self.cache.delete(key)

    def close(self) -> None:
        self.cache.close()


class PromptBook:
    """The editable prompt, persisted under a single key of a prompt store."""

    def __init__(self, store: PromptStore, default: str, key: str = SAVED_PROMPT_KEY) -> None:
        self.store = store
        self.default = default
        self.key = key

    def load(self) -> str:
        saved_prompt = self.store.get(self.key)
        if saved_prompt:
            return saved_prompt
        logger.debug(f'No saved prompt under {self.key!r}, seeding the default prompt')
        self.store.set(self.key, self.default)
        return self.default

    def save(self, prompt: str) -> bool:
        if not prompt:
            return False
        self.store.set(self.key, prompt)
        return True

    def reset(self) -> str:
        self.store.set(self.key, self.default)
        return self.default
