from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from img2code.code_generation import CodeGenerationModel, GenerationRequest, InputValidationError, OutputItem
from img2code.config import AppSettings
from img2code.engine import GenerationEngine
from img2code.image import SAMPLE_IMAGES, sample_image_url
from img2code.preview import SANDBOX_PERMISSIONS, OutputKind, render_document
from img2code.prompts import DEFAULT_PROMPTS
from img2code.storage import PromptStore
from img2code.types import NumRequests

logger = logging.getLogger(__name__)
INDEX_PAGE_PATH = Path(__file__).parent / 'static' / 'index.html'


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateBody(ApiModel):
    image_base64: Optional[str] = Field(default=None, alias='imageBase64')
    prompt: Optional[str] = None
    user_input: Optional[str] = Field(default=None, alias='userInput')


class GenerateResponse(ApiModel):
    full_response: str = Field(alias='fullResponse')
    code: str


class GenerationsBody(ApiModel):
    image_base64: Optional[str] = Field(default=None, alias='imageBase64')
    prompt: Optional[str] = None
    user_input: Optional[str] = Field(default=None, alias='userInput')
    num_requests: Optional[NumRequests] = Field(default=None, alias='numRequests')
    kind: Optional[OutputKind] = None


class OutputItemResponse(ApiModel):
    id: int  # noqa: A003
    status: Literal['succeeded', 'failed']
    code: str = ''
    full_response: str = Field(default='', alias='fullResponse')
    reason: Optional[str] = None
    preview_document: Optional[str] = Field(default=None, alias='previewDocument')

    @classmethod
    def from_item(cls, item: OutputItem, kind: OutputKind) -> 'OutputItemResponse':
        if item.succeeded:
            return cls(
                id=item.id,
                status='succeeded',
                code=item.code,
                full_response=item.full_response,
                preview_document=render_document(item.code, kind),
            )
        return cls(id=item.id, status='failed', reason=item.result.reason)


class GenerationsResponse(ApiModel):
    kind: OutputKind
    sandbox: str = SANDBOX_PERMISSIONS
    items: List[OutputItemResponse]
    error: Optional[str] = None


class PromptBody(ApiModel):
    prompt: str


class PreviewBody(ApiModel):
    code: str
    kind: OutputKind = OutputKind.sketch


def create_app(
    settings: AppSettings | None = None,
    model: CodeGenerationModel | None = None,
    prompt_store: PromptStore | None = None,
) -> FastAPI:
    """
    Build the demo application.

    The model and the prompt store are created from ``settings`` unless given explicitly.
    """
    settings = settings or AppSettings()
    model = model or settings.build_model()
    engine = GenerationEngine(model, error_mode='isolate', progress_bar_mode='never')
    store = prompt_store or settings.build_prompt_store()
    prompt_books = {kind: settings.build_prompt_book(store, kind) for kind in OutputKind}

    app = FastAPI(title='img2code')
    app.state.settings = settings
    app.state.engine = engine
    app.state.prompt_books = prompt_books

    @app.exception_handler(InputValidationError)
    async def input_validation_error_handler(request: Request, exc: InputValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={'message': str(exc), 'missing': exc.missing_fields})

    @app.get('/', response_class=HTMLResponse)
    def index() -> str:
        return INDEX_PAGE_PATH.read_text(encoding='utf-8')

    @app.get('/api/health')
    def health_check() -> Dict[str, str]:
        return {'status': 'ok', 'model': engine.model.model_id}

    @app.get('/api/samples')
    def list_samples() -> List[Dict[str, str]]:
        return [{'name': name, 'url': sample_image_url(name)} for name in SAMPLE_IMAGES]

    @app.get('/api/presets')
    def list_presets() -> Dict[str, str]:
        return {kind.value: prompt for kind, prompt in DEFAULT_PROMPTS.items()}

    @app.get('/api/prompt')
    def get_prompt(kind: Optional[OutputKind] = None) -> Dict[str, str]:
        return {'prompt': prompt_books[kind or settings.kind].load()}

    @app.put('/api/prompt')
    def put_prompt(body: PromptBody, kind: Optional[OutputKind] = None) -> Dict[str, str]:
        prompt_book = prompt_books[kind or settings.kind]
        prompt_book.save(body.prompt)
        return {'prompt': prompt_book.load()}

    @app.delete('/api/prompt')
    def reset_prompt(kind: Optional[OutputKind] = None) -> Dict[str, str]:
        return {'prompt': prompt_books[kind or settings.kind].reset()}

    @app.post('/api/generate', response_model=GenerateResponse, response_model_by_alias=True)
    async def generate(body: GenerateBody):
        request = GenerationRequest(image_data=body.image_base64 or '', prompt=body.prompt or '', user_input=body.user_input)
        try:
            request.validate_inputs()
        except InputValidationError:
            return JSONResponse(status_code=400, content={'message': 'Missing required parameters'})

        try:
            output = await engine.model.async_generate(request)
        except Exception:
            logger.exception('Error generating code')
            return JSONResponse(status_code=500, content={'message': 'Error generating code'})
        return GenerateResponse(full_response=output.full_response, code=output.code)

    @app.api_route('/api/generate', methods=['GET', 'PUT', 'PATCH', 'DELETE'], include_in_schema=False)
    def generate_method_not_allowed() -> JSONResponse:
        return JSONResponse(status_code=405, content={'message': 'Method not allowed'}, headers={'Allow': 'POST'})

    @app.post('/api/generations', response_model=GenerationsResponse, response_model_by_alias=True)
    async def create_generations(body: GenerationsBody) -> GenerationsResponse:
        kind = body.kind or settings.kind
        prompt = body.prompt if body.prompt else prompt_books[kind].load()
        num_requests = body.num_requests or settings.num_requests
        request = GenerationRequest(image_data=body.image_base64 or '', prompt=prompt, user_input=body.user_input)
        batch = await engine.async_run(request, num_requests)
        error = 'Error generating code' if batch.all_failed else None
        return GenerationsResponse(
            kind=kind,
            items=[OutputItemResponse.from_item(item, kind) for item in batch.items],
            error=error,
        )

    @app.post('/api/preview')
    def preview(body: PreviewBody) -> Dict[str, str]:
        return {'document': render_document(body.code, body.kind), 'sandbox': SANDBOX_PERMISSIONS}

    return app
