from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

import httpx


def fetch_data(url_or_file: str) -> bytes:
    parsed_url = urlparse(url_or_file)
    if not parsed_url.scheme and Path(url_or_file).exists():
        return Path(url_or_file).read_bytes()

    if parsed_url.scheme == 'file':
        if Path(parsed_url.path).exists():
            return Path(parsed_url.path).read_bytes()
        raise FileNotFoundError(f'File {parsed_url.path} not found')

    if parsed_url.scheme in ('http', 'https'):
        response = httpx.get(url_or_file)
        response.raise_for_status()
        return response.content

    if not parsed_url.scheme:
        raise FileNotFoundError(f'File {url_or_file} not found')
    raise ValueError(f'Unsupported URL scheme {parsed_url.scheme}')
