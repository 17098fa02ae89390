from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from img2code.platforms.base import PlatformSettings


class GeminiSettings(PlatformSettings):
    model_config = SettingsConfigDict(extra='ignore', env_prefix='gemini_', env_file='.env')

    api_key: SecretStr
    api_base: str = 'https://generativelanguage.googleapis.com/v1beta'
    platform_url: str = 'https://ai.google.dev/gemini-api/docs'
