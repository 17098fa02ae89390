from img2code.platforms.base import PlatformSettings
from img2code.platforms.endpoint import EndpointSettings
from img2code.platforms.gemini import GeminiSettings
from img2code.platforms.openai import OpenAISettings

__all__ = [
    'EndpointSettings',
    'GeminiSettings',
    'OpenAISettings',
    'PlatformSettings',
]
