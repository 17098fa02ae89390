from __future__ import annotations

from typing import Any, ClassVar, Dict

from typing_extensions import Self, override

from img2code.code_generation.base import RemoteCodeGenerationModel
from img2code.code_generation.extractor import CodeExtractor
from img2code.code_generation.model_output import CodeGenerationOutput
from img2code.code_generation.request import GenerationRequest
from img2code.http import HttpClient, HttpxPostKwargs
from img2code.model import ModelParameters
from img2code.platforms import EndpointSettings


class EndpointCodeModel(RemoteCodeGenerationModel):
    """
    Calls a generation server instead of the model provider.

    The server is expected to expose the ``POST /api/generate`` contract served by ``img2code serve``:
    it receives ``{imageBase64, prompt, userInput}`` and answers ``{fullResponse, code}``. The code extracted
    by the server is kept as is; it is only extracted locally when the server does not send one.
    """

    model_type: ClassVar[str] = 'endpoint'

    settings: EndpointSettings

    def __init__(
        self,
        model: str = 'default',
        parameters: ModelParameters | None = None,
        settings: EndpointSettings | None = None,
        http_client: HttpClient | None = None,
        extractor: CodeExtractor | None = None,
    ) -> None:
        parameters = parameters or ModelParameters()
        settings = settings or EndpointSettings()
        http_client = http_client or HttpClient()
        extractor = extractor or CodeExtractor()
        super().__init__(
            model=model,
            parameters=parameters,
            settings=settings,
            http_client=http_client,
            extractor=extractor,
        )

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> Self:
        return cls(settings=EndpointSettings(url=url), **kwargs)

    @override
    def _get_request_parameters(self, request: GenerationRequest, **kwargs: Any) -> HttpxPostKwargs:
        headers: Dict[str, str] = {'Content-Type': 'application/json'}
        if self.settings.api_key is not None:
            headers['Authorization'] = f'Bearer {self.settings.api_key.get_secret_value()}'
        return {
            'url': self.settings.url,
            'headers': headers,
            'json': request.model_dump(by_alias=True),
        }

    @override
    def _process_response(self, response: dict[str, Any]) -> CodeGenerationOutput:
        full_response = response['fullResponse']
        code = response.get('code')
        if code is None:
            code = self.extractor(full_response)
        return CodeGenerationOutput(
            model_info=self.model_info,
            full_response=full_response,
            code=code,
            extra={'response': response},
        )
