from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from img2code.code_generation import CodeExtractor, CodeGenerationModel, ExtractionFallback
from img2code.highlevel import load_code_model
from img2code.http import HttpClient
from img2code.preview import OutputKind
from img2code.prompts import default_prompt
from img2code.storage import DiskPromptStore, PromptBook, PromptStore, prompt_key
from img2code.types import NumRequests


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(extra='ignore', env_prefix='img2code_', env_file='.env')

    model_id: str = 'gemini/gemini-2.5-flash'
    num_requests: NumRequests = 5
    kind: OutputKind = OutputKind.sketch
    extraction_fallback: ExtractionFallback = ExtractionFallback.full_text
    prompt_store_dir: Path = DiskPromptStore.default_directory
    request_timeout: Optional[int] = 300
    retry: bool = False
    error_mode: Literal['isolate', 'raise'] = 'isolate'
    log_level: str = 'INFO'
    host: str = '127.0.0.1'
    port: int = 8000

    def build_model(self) -> CodeGenerationModel:
        extractor = CodeExtractor(self.extraction_fallback)
        if self.model_id.split('/', maxsplit=1)[0] == 'test':
            return load_code_model(self.model_id, extractor=extractor)
        http_client = HttpClient(retry=self.retry, timeout=self.request_timeout)
        return load_code_model(self.model_id, http_client=http_client, extractor=extractor)

    def build_prompt_store(self) -> PromptStore:
        return DiskPromptStore(self.prompt_store_dir)

    def build_prompt_book(self, store: PromptStore | None = None, kind: OutputKind | None = None) -> PromptBook:
        kind = OutputKind(kind or self.kind)
        return PromptBook(store or self.build_prompt_store(), default=default_prompt(kind), key=prompt_key(kind))
