from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from img2code.code_generation.exception import InputValidationError

DEFAULT_IMAGE_MIME_TYPE = 'image/jpeg'
_data_url_pattern = re.compile(r'^data:(?P<mime_type>[\w.+-]+/[\w.+-]+)?(?:;[\w=-]+)*?;base64,(?P<data>.*)$', re.DOTALL)


class GenerationRequest(BaseModel):
    """
    One generation request: an image, a prompt and an optional user instruction.

    The image is held as base64 text, either bare or as a ``data:`` URL, exactly as a browser
    ``FileReader``/``canvas.toDataURL()`` would produce it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    image_data: str = Field(default='', alias='imageBase64')
    prompt: str = ''
    user_input: Optional[str] = Field(default=None, alias='userInput')

    @property
    def final_prompt(self) -> str:
        if self.user_input and self.user_input.strip():
            return f'{self.prompt}\n\nUser input: {self.user_input}'
        return self.prompt

    @property
    def image_mime_type(self) -> str:
        match = _data_url_pattern.match(self.image_data)
        if match and match.group('mime_type'):
            return match.group('mime_type')
        return DEFAULT_IMAGE_MIME_TYPE

    @property
    def image_base64(self) -> str:
        match = _data_url_pattern.match(self.image_data)
        if match:
            return match.group('data')
        return self.image_data

    @property
    def image_data_url(self) -> str:
        return f'data:{self.image_mime_type};base64,{self.image_base64}'

    @property
    def image_bytes(self) -> bytes:
        try:
            return base64.b64decode(self.image_base64, validate=True)
        except binascii.Error as e:
            raise ValueError('image data is not valid base64') from e

    def validate_inputs(self) -> None:
        missing = []
        if not self.image_data:
            missing.append('image')
        if not self.prompt.strip():
            missing.append('prompt')
        if missing:
            raise InputValidationError(missing)
