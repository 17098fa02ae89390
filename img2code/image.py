from __future__ import annotations

import base64
import io
from typing import List

from PIL import Image

from img2code.utils import fetch_data

TARGET_WIDTH = 512
SAMPLE_IMAGE_BASE_URL = 'https://www.gstatic.com/aistudio/starter-apps/code/samples/'
SAMPLE_IMAGES: List[str] = [
    'beeripple.jpeg',
    'bubbles.jpeg',
    'clock.png',
    'flower.jpeg',
    'garage.jpeg',
    'sconce.jpeg',
    'steam.jpeg',
    'tree.png',
    'birds.jpeg',
    'bubblemachine.png',
]


def sample_image_url(name: str) -> str:
    if name not in SAMPLE_IMAGES:
        raise ValueError(f'Unknown sample image {name!r}, available: {SAMPLE_IMAGES}')
    return f'{SAMPLE_IMAGE_BASE_URL}{name}'


def prepare_image(data: bytes, width: int = TARGET_WIDTH) -> str:
    """Scale an image to ``width`` pixels wide, keeping its aspect ratio, and return it as a PNG data URL."""
    with Image.open(io.BytesIO(data)) as image:
        image = image.convert('RGBA')
        height = max(round(image.height * width / image.width), 1)
        resized = image.resize((width, height), Image.LANCZOS)
    buffer = io.BytesIO()
    resized.save(buffer, format='PNG')
    return 'data:image/png;base64,' + base64.b64encode(buffer.getvalue()).decode()


def load_image(source: str, width: int = TARGET_WIDTH) -> str:
    if source in SAMPLE_IMAGES:
        source = sample_image_url(source)
    return prepare_image(fetch_data(source), width=width)
