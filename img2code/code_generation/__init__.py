from __future__ import annotations

from typing import Type

from img2code.code_generation.base import CodeGenerationModel, RemoteCodeGenerationModel
from img2code.code_generation.exception import FailedOutputError, GenerationError, InputValidationError
from img2code.code_generation.extractor import CodeBlock, CodeExtractor, ExtractionFallback, extract_code, find_code_blocks
from img2code.code_generation.model_output import (
    CodeGenerationOutput,
    GenerationBatch,
    GenerationFailed,
    GenerationSucceeded,
    OutputItem,
)
from img2code.code_generation.models import (
    EndpointCodeModel,
    FakeCodeModel,
    FakeCodeParameters,
    GeminiCodeModel,
    GeminiParameters,
    OpenAICodeModel,
    OpenAICodeParameters,
)
from img2code.code_generation.request import GenerationRequest
from img2code.model import ModelParameters

CodeModels: list[tuple[Type[CodeGenerationModel], Type[ModelParameters]]] = [
    (GeminiCodeModel, GeminiParameters),
    (OpenAICodeModel, OpenAICodeParameters),
    (EndpointCodeModel, ModelParameters),
    (FakeCodeModel, FakeCodeParameters),
]

CodeModelRegistry: dict[str, tuple[Type[CodeGenerationModel], Type[ModelParameters]]] = {
    model_cls.model_type: (model_cls, parameter_cls) for model_cls, parameter_cls in CodeModels
}


__all__ = [
    'CodeBlock',
    'CodeExtractor',
    'CodeGenerationModel',
    'CodeGenerationOutput',
    'CodeModelRegistry',
    'CodeModels',
    'EndpointCodeModel',
    'ExtractionFallback',
    'FailedOutputError',
    'FakeCodeModel',
    'FakeCodeParameters',
    'GeminiCodeModel',
    'GeminiParameters',
    'GenerationBatch',
    'GenerationError',
    'GenerationFailed',
    'GenerationRequest',
    'GenerationSucceeded',
    'InputValidationError',
    'OpenAICodeModel',
    'OpenAICodeParameters',
    'OutputItem',
    'RemoteCodeGenerationModel',
    'extract_code',
    'find_code_blocks',
]
