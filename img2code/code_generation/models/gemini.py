from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field, PositiveInt
from typing_extensions import Annotated, Unpack, override

from img2code.code_generation.base import RemoteCodeGenerationModel
from img2code.code_generation.extractor import CodeExtractor
from img2code.code_generation.model_output import CodeGenerationOutput, FinishReason, Usage
from img2code.code_generation.request import GenerationRequest
from img2code.http import HttpClient, HttpxPostKwargs, UnexpectedResponseError
from img2code.model import ModelParameters, ModelParametersDict
from img2code.platforms import GeminiSettings
from img2code.types import Probability, Temperature


class GeminiParameters(ModelParameters):
    temperature: Optional[Temperature] = None
    top_p: Annotated[Optional[Probability], Field(alias='topP')] = None
    top_k: Annotated[Optional[PositiveInt], Field(alias='topK')] = None
    max_output_tokens: Annotated[Optional[PositiveInt], Field(alias='maxOutputTokens')] = None
    stop: Annotated[Optional[List[str]], Field(alias='stopSequences')] = None
    seed: Optional[int] = None


class GeminiParametersDict(ModelParametersDict, total=False):
    temperature: Optional[Temperature]
    top_p: Optional[Probability]
    top_k: Optional[PositiveInt]
    max_output_tokens: Optional[PositiveInt]
    stop: Optional[List[str]]
    seed: Optional[int]


class GeminiCodeModel(RemoteCodeGenerationModel):
    model_type: ClassVar[str] = 'gemini'
    available_models: ClassVar[List[str]] = [
        'gemini-2.5-flash',
        'gemini-2.5-pro',
        'gemini-2.0-flash',
        'gemini-1.5-flash',
    ]

    parameters: GeminiParameters
    settings: GeminiSettings

    def __init__(
        self,
        model: str = 'gemini-2.5-flash',
        parameters: GeminiParameters | None = None,
        settings: GeminiSettings | None = None,
        http_client: HttpClient | None = None,
        extractor: CodeExtractor | None = None,
    ) -> None:
        parameters = parameters or GeminiParameters()
        settings = settings or GeminiSettings()  # type: ignore
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
    def generate(self, prompt: GenerationRequest, **kwargs: Unpack[GeminiParametersDict]) -> CodeGenerationOutput:
        return super().generate(prompt, **kwargs)

    @override
    async def async_generate(self, prompt: GenerationRequest, **kwargs: Unpack[GeminiParametersDict]) -> CodeGenerationOutput:
        return await super().async_generate(prompt, **kwargs)

    @override
    def _get_request_parameters(
        self, request: GenerationRequest, **kwargs: Unpack[GeminiParametersDict]
    ) -> HttpxPostKwargs:
        parameters = self.parameters.clone_with_changes(**kwargs)
        headers = {
            'Content-Type': 'application/json',
            'x-goog-api-key': self.settings.api_key.get_secret_value(),
        }
        json_data: Dict[str, Any] = {
            'contents': [
                {
                    'role': 'user',
                    'parts': [
                        {'text': request.final_prompt},
                        {'inline_data': {'mime_type': request.image_mime_type, 'data': request.image_base64}},
                    ],
                }
            ],
        }
        if generation_config := parameters.custom_model_dump():
            json_data['generationConfig'] = generation_config
        return {
            'url': f'{self.settings.api_base}/models/{self.model}:generateContent',
            'headers': headers,
            'json': json_data,
        }

    @override
    def _process_response(self, response: dict[str, Any]) -> CodeGenerationOutput:
        candidates = response.get('candidates') or []
        if not candidates:
            raise UnexpectedResponseError(response, 'no candidates in response')
        candidate = candidates[0]
        parts = (candidate.get('content') or {}).get('parts') or []
        full_response = ''.join(part.get('text', '') for part in parts if not part.get('thought'))
        return CodeGenerationOutput(
            model_info=self.model_info,
            full_response=full_response,
            code=self.extractor(full_response),
            finish_reason=self._parse_finish_reason(candidate),
            usage=self._parse_usage(response),
            extra={'response': response},
        )

    def _parse_finish_reason(self, candidate: dict[str, Any]) -> FinishReason | None:
        finish_reason_mapping = {
            'STOP': FinishReason.stop,
            'MAX_TOKENS': FinishReason.length,
            'SAFETY': FinishReason.content_filter,
            'RECITATION': FinishReason.content_filter,
            'PROHIBITED_CONTENT': FinishReason.content_filter,
        }
        finish_reason = candidate.get('finishReason')
        if finish_reason is None:
            return None
        return finish_reason_mapping.get(finish_reason, FinishReason.other)

    def _parse_usage(self, response: dict[str, Any]) -> Usage:
        if usage := response.get('usageMetadata'):
            return Usage(input_tokens=usage.get('promptTokenCount'), output_tokens=usage.get('candidatesTokenCount'))
        return Usage()
