from img2code.code_generation.models.endpoint import EndpointCodeModel
from img2code.code_generation.models.gemini import GeminiCodeModel, GeminiParameters
from img2code.code_generation.models.openai import OpenAICodeModel, OpenAICodeParameters
from img2code.code_generation.models.test import FakeCodeModel, FakeCodeParameters

__all__ = [
    'EndpointCodeModel',
    'FakeCodeModel',
    'FakeCodeParameters',
    'GeminiCodeModel',
    'GeminiParameters',
    'OpenAICodeModel',
    'OpenAICodeParameters',
]
