from img2code.code_generation import (
    CodeExtractor,
    CodeGenerationModel,
    CodeGenerationOutput,
    EndpointCodeModel,
    ExtractionFallback,
    FakeCodeModel,
    GeminiCodeModel,
    GeminiParameters,
    GenerationBatch,
    GenerationRequest,
    InputValidationError,
    OpenAICodeModel,
    OpenAICodeParameters,
    OutputItem,
    extract_code,
)
from img2code.config import AppSettings
from img2code.engine import GenerationEngine
from img2code.highlevel import generate_code, load_code_model
from img2code.http import HttpClient
from img2code.platforms import EndpointSettings, GeminiSettings, OpenAISettings
from img2code.preview import OutputKind, render_document, render_preview_frame
from img2code.session import GenerationSession
from img2code.storage import DiskPromptStore, MemoryPromptStore, PromptBook

__version__ = '0.1.0'

__all__ = [
    'AppSettings',
    'CodeExtractor',
    'CodeGenerationModel',
    'CodeGenerationOutput',
    'DiskPromptStore',
    'EndpointCodeModel',
    'EndpointSettings',
    'ExtractionFallback',
    'FakeCodeModel',
    'GeminiCodeModel',
    'GeminiParameters',
    'GeminiSettings',
    'GenerationBatch',
    'GenerationEngine',
    'GenerationRequest',
    'GenerationSession',
    'HttpClient',
    'InputValidationError',
    'MemoryPromptStore',
    'OpenAICodeModel',
    'OpenAICodeParameters',
    'OpenAISettings',
    'OutputItem',
    'OutputKind',
    'PromptBook',
    'extract_code',
    'generate_code',
    'load_code_model',
    'render_document',
    'render_preview_frame',
]
