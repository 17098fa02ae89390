from __future__ import annotations

import time
from typing import List, Optional, Sequence

import anyio
from typing_extensions import Self, Unpack

from img2code.code_generation.base import CodeGenerationModel
from img2code.code_generation.extractor import CodeExtractor
from img2code.code_generation.model_output import CodeGenerationOutput
from img2code.code_generation.request import GenerationRequest
from img2code.model import ModelParameters, ModelParametersDict


class FakeCodeParameters(ModelParameters):
    language: str = 'javascript'
    template: str = 'Reasoning for call {call}.\n\n```{language}\n// sketch {call}\nfunction setup() {{}}\n```\n'


class FakeCodeParametersDict(ModelParametersDict, total=False):
    language: str
    template: str


class FakeCodeModel(CodeGenerationModel):
    """
    Offline model for tests and demos.

    Calls are numbered from 1 in the order they start. ``fail_calls`` makes the given calls raise and
    ``delays`` sets how long each call takes, which lets tests finish calls out of submission order.
    """

    model_type = 'test'

    def __init__(
        self,
        parameters: FakeCodeParameters | None = None,
        replies: Sequence[str] | None = None,
        fail_calls: Sequence[int] = (),
        delays: Sequence[float] = (),
        extractor: CodeExtractor | None = None,
    ) -> None:
        self.parameters = parameters or FakeCodeParameters()
        self.replies = list(replies) if replies is not None else None
        self.fail_calls = set(fail_calls)
        self.delays = list(delays)
        self.extractor = extractor or CodeExtractor()
        self.requests: List[GenerationRequest] = []

    @property
    def num_calls(self) -> int:
        return len(self.requests)

    def _next_call(self, request: GenerationRequest) -> int:
        request.validate_inputs()
        self.requests.append(request)
        return len(self.requests)

    def _delay(self, call: int) -> Optional[float]:
        if call <= len(self.delays):
            return self.delays[call - 1]
        return None

    def _build_output(self, request: GenerationRequest, call: int, **kwargs: Unpack[FakeCodeParametersDict]) -> CodeGenerationOutput:
        if call in self.fail_calls:
            raise RuntimeError(f'fake failure on call {call}')
        parameters = self.parameters.clone_with_changes(**kwargs)
        if self.replies is not None:
            full_response = self.replies[(call - 1) % len(self.replies)]
        else:
            full_response = parameters.template.format(call=call, language=parameters.language)
        return CodeGenerationOutput(
            model_info=self.model_info, full_response=full_response, code=self.extractor(full_response), extra={'call': call}
        )

    def generate(self, prompt: GenerationRequest, **kwargs: Unpack[FakeCodeParametersDict]) -> CodeGenerationOutput:
        call = self._next_call(prompt)
        if delay := self._delay(call):
            time.sleep(delay)
        return self._build_output(prompt, call, **kwargs)

    async def async_generate(self, prompt: GenerationRequest, **kwargs: Unpack[FakeCodeParametersDict]) -> CodeGenerationOutput:
        call = self._next_call(prompt)
        if delay := self._delay(call):
            await anyio.sleep(delay)
        return self._build_output(prompt, call, **kwargs)

    @property
    def name(self) -> str:
        return 'fake'

    @classmethod
    def from_name(cls, name: str) -> Self:
        return cls()
