from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import Field, PositiveInt
from typing_extensions import Annotated, Unpack, override

from img2code.code_generation.base import RemoteCodeGenerationModel
from img2code.code_generation.extractor import CodeExtractor
from img2code.code_generation.model_output import CodeGenerationOutput, FinishReason, Usage
from img2code.code_generation.request import GenerationRequest
from img2code.http import HttpClient, HttpxPostKwargs
from img2code.model import ModelInfo, ModelParameters, ModelParametersDict
from img2code.platforms import OpenAISettings
from img2code.types import Probability, Temperature


class OpenAICodeParameters(ModelParameters):
    system: Optional[str] = None
    temperature: Optional[Temperature] = None
    top_p: Optional[Probability] = None
    max_tokens: Optional[PositiveInt] = None
    stop: Union[str, List[str], None] = None
    presence_penalty: Optional[Annotated[float, Field(ge=-2, le=2)]] = None
    frequency_penalty: Optional[Annotated[float, Field(ge=-2, le=2)]] = None
    seed: Optional[int] = None
    user: Optional[str] = None


class OpenAICodeParametersDict(ModelParametersDict, total=False):
    system: Optional[str]
    temperature: Optional[Temperature]
    top_p: Optional[Probability]
    max_tokens: Optional[PositiveInt]
    stop: Union[str, List[str], None]
    presence_penalty: Optional[float]
    frequency_penalty: Optional[float]
    seed: Optional[int]
    user: Optional[str]


def convert_request_to_messages(request: GenerationRequest, system: str | None = None) -> List[Dict[str, Any]]:
    messages: List[Dict[str, Any]] = []
    if system:
        messages.append({'role': 'system', 'content': system})
    messages.append(
        {
            'role': 'user',
            'content': [
                {'type': 'text', 'text': request.final_prompt},
                {'type': 'image_url', 'image_url': {'url': request.image_data_url}},
            ],
        }
    )
    return messages


class OpenAICodeModel(RemoteCodeGenerationModel):
    model_type: ClassVar[str] = 'openai'
    available_models: ClassVar[List[str]] = ['gpt-4o', 'gpt-4o-mini', 'gpt-4.1', 'gpt-4.1-mini']

    parameters: OpenAICodeParameters
    settings: OpenAISettings

    def __init__(
        self,
        model: str = 'gpt-4o-mini',
        parameters: OpenAICodeParameters | None = None,
        settings: OpenAISettings | None = None,
        http_client: HttpClient | None = None,
        extractor: CodeExtractor | None = None,
    ) -> None:
        parameters = parameters or OpenAICodeParameters()
        settings = settings or OpenAISettings()  # type: ignore
        http_client = http_client or HttpClient()
        extractor = extractor or CodeExtractor()
        super().__init__(
            model=model,
            parameters=parameters,
            settings=settings,
            http_client=http_client,
            extractor=extractor,
        )

    @override
    def generate(self, prompt: GenerationRequest, **kwargs: Unpack[OpenAICodeParametersDict]) -> CodeGenerationOutput:
        return super().generate(prompt, **kwargs)

    @override
    async def async_generate(
        self, prompt: GenerationRequest, **kwargs: Unpack[OpenAICodeParametersDict]
    ) -> CodeGenerationOutput:
        return await super().async_generate(prompt, **kwargs)

    @override
    def _get_request_parameters(
        self, request: GenerationRequest, **kwargs: Unpack[OpenAICodeParametersDict]
    ) -> HttpxPostKwargs:
        parameters = self.parameters.clone_with_changes(**kwargs)
        headers = {
            'Authorization': f'Bearer {self.settings.api_key.get_secret_value()}',
        }
        generation_parameters = parameters.custom_model_dump()
        system = generation_parameters.pop('system', None)
        json_data = {
            'model': self.model,
            'messages': convert_request_to_messages(request, system=system),
            **generation_parameters,
        }
        return {
            'url': f'{self.settings.api_base}/chat/completions',
            'headers': headers,
            'json': json_data,
        }

    @override
    def _process_response(self, response: dict[str, Any]) -> CodeGenerationOutput:
        choice = response['choices'][0]
        full_response = choice['message'].get('content') or ''
        return CodeGenerationOutput(
            model_info=ModelInfo(task=self.model_task, type=self.model_type, name=response.get('model') or self.model),
            full_response=full_response,
            code=self.extractor(full_response),
            finish_reason=self._parse_finish_reason(choice),
            usage=self._parse_usage(response),
            extra={'response': response},
        )

    def _parse_finish_reason(self, choice: dict[str, Any]) -> FinishReason | None:
        finish_reason = choice.get('finish_reason')
        if finish_reason is None:
            return None
        try:
            return FinishReason(finish_reason)
        except ValueError:
            return FinishReason.other

    def _parse_usage(self, response: dict[str, Any]) -> Usage:
        if usage := response.get('usage'):
            return Usage(input_tokens=usage.get('prompt_tokens'), output_tokens=usage.get('completion_tokens'))
        return Usage()
