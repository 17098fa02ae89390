from typing import Optional

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from img2code.platforms.base import PlatformSettings


class EndpointSettings(PlatformSettings):
    """Settings for a proxied generation server exposing ``POST /api/generate``."""

    model_config = SettingsConfigDict(extra='ignore', env_prefix='img2code_endpoint_', env_file='.env')

    url: str = 'http://127.0.0.1:8000/api/generate'
    api_key: Optional[SecretStr] = None
    platform_url: str = 'http://127.0.0.1:8000/docs'
