from __future__ import annotations

import logging
from functools import partial
from typing import Dict, Optional

import anyio

from img2code.code_generation import GenerationBatch, GenerationRequest, OutputItem
from img2code.engine import GenerationEngine
from img2code.preview import OutputKind, OutputView, render_document
from img2code.storage import PromptBook
from img2code.types import NumRequests

logger = logging.getLogger(__name__)


class GenerationSession:
    """
    State behind one user of the demo: the editable prompt, the concurrency setting and the current results.

    The prompt is read from the prompt book at submission time; a new submission only replaces the current
    batch once all of its own requests have resolved.
    """

    def __init__(
        self,
        engine: GenerationEngine,
        prompt_book: PromptBook,
        num_requests: NumRequests = 5,
        kind: OutputKind = OutputKind.sketch,
    ) -> None:
        self.engine = engine
        self.prompt_book = prompt_book
        self.num_requests = num_requests
        self.kind = OutputKind(kind)
        self.batch: Optional[GenerationBatch] = None
        self.views: Dict[int, OutputView] = {}
        self.loading = False

    @property
    def prompt(self) -> str:
        return self.prompt_book.load()

    @prompt.setter
    def prompt(self, prompt: str) -> None:
        self.prompt_book.save(prompt)

    def build_request(self, image_data: str, user_input: str | None = None) -> GenerationRequest:
        request = GenerationRequest(image_data=image_data, prompt=self.prompt, user_input=user_input)
        request.validate_inputs()
        return request

    async def async_submit(self, image_data: str, user_input: str | None = None) -> GenerationBatch:
        request = self.build_request(image_data, user_input)
        self.loading = True
        try:
            batch = await self.engine.async_run(request, self.num_requests)
        finally:
            self.loading = False
        logger.debug(f'Replacing current results with a batch of {len(batch.items)} items')
        self.batch = batch
        self.views = {item.id: OutputView() for item in batch.items}
        return batch

    def submit(self, image_data: str, user_input: str | None = None) -> GenerationBatch:
        return anyio.run(partial(self.async_submit, image_data, user_input))

    def _current_batch(self) -> GenerationBatch:
        if self.batch is None:
            raise LookupError('no generation has been submitted yet')
        return self.batch

    def edit_code(self, output_id: int, code: str) -> OutputItem:
        return self._current_batch().edit_code(output_id, code)

    def view(self, output_id: int) -> OutputView:
        self._current_batch().get(output_id)
        return self.views.setdefault(output_id, OutputView())

    def copy_code(self, output_id: int) -> str:
        item = self._current_batch().get(output_id)
        return self.view(output_id).copy(item.code)

    def preview_document(self, output_id: int) -> str:
        return render_document(self._current_batch().get(output_id).code, self.kind)
