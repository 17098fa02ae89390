from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, get_type_hints

from typing_extensions import Self, override

from img2code.code_generation.extractor import CodeExtractor
from img2code.code_generation.model_output import CodeGenerationOutput
from img2code.code_generation.request import GenerationRequest
from img2code.http import HttpClient, HttpxPostKwargs, UnexpectedResponseError
from img2code.model import GenerateModel, ModelParameters
from img2code.platforms import PlatformSettings

logger = logging.getLogger(__name__)


class CodeGenerationModel(GenerateModel[GenerationRequest, CodeGenerationOutput], ABC):
    model_task: ClassVar[str] = 'code_generation'
    extractor: CodeExtractor


class RemoteCodeGenerationModel(CodeGenerationModel, ABC):
    settings: PlatformSettings
    http_client: HttpClient
    available_models: ClassVar[List[str]] = []

    def __init__(
        self,
        model: str,
        parameters: ModelParameters,
        settings: PlatformSettings,
        http_client: HttpClient,
        extractor: CodeExtractor,
    ) -> None:
        self.model = model
        self.parameters = parameters
        self.settings = settings
        self.http_client = http_client
        self.extractor = extractor

    @abstractmethod
    def _get_request_parameters(self, request: GenerationRequest, **kwargs: Any) -> HttpxPostKwargs:
        ...

    @abstractmethod
    def _process_response(self, response: dict[str, Any]) -> CodeGenerationOutput:
        ...

    def list_models(self) -> List[str]:
        return self.available_models

    def _safe_process_response(self, response: dict[str, Any]) -> CodeGenerationOutput:
        try:
            return self._process_response(response)
        except (KeyError, IndexError, TypeError) as e:
            raise UnexpectedResponseError(response) from e

    @override
    def generate(self, prompt: GenerationRequest, **kwargs: Any) -> CodeGenerationOutput:
        timeout = kwargs.pop('timeout') if 'timeout' in kwargs else None
        prompt.validate_inputs()
        request_parameters = self._get_request_parameters(prompt, **kwargs)
        if timeout is not None:
            request_parameters['timeout'] = timeout
        response = self.http_client.post(request_parameters=request_parameters)
        return self._safe_process_response(response.json())

    @override
    async def async_generate(self, prompt: GenerationRequest, **kwargs: Any) -> CodeGenerationOutput:
        timeout = kwargs.pop('timeout') if 'timeout' in kwargs else None
        prompt.validate_inputs()
        request_parameters = self._get_request_parameters(prompt, **kwargs)
        if timeout is not None:
            request_parameters['timeout'] = timeout
        response = await self.http_client.async_post(request_parameters=request_parameters)
        return self._safe_process_response(response.json())

    @classmethod
    def how_to_settings(cls) -> str:
        return f'{cls.__name__} Settings\n\n' + get_type_hints(cls)['settings'].how_to_settings()

    @property
    def name(self) -> str:
        return self.model

    @classmethod
    def from_name(cls, name: str) -> Self:
        return cls(model=name)  # type: ignore
