import base64
import io
from pathlib import Path

import pytest
from PIL import Image
from pytest_mock import MockerFixture

from img2code.image import SAMPLE_IMAGES, TARGET_WIDTH, load_image, prepare_image, sample_image_url


def make_png(width: int, height: int, mode: str = 'RGB') -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color='red' if mode == 'RGB' else 0).save(buffer, format='PNG')
    return buffer.getvalue()


def decode_data_url(data_url: str) -> Image.Image:
    header, data = data_url.split(',', 1)
    assert header == 'data:image/png;base64'
    return Image.open(io.BytesIO(base64.b64decode(data)))


@pytest.mark.parametrize(('size', 'expected'), [((1024, 768), (512, 384)), ((100, 50), (512, 256)), ((2000, 1), (512, 1))])
def test_prepare_image_keeps_aspect_ratio(size: tuple, expected: tuple) -> None:
    image = decode_data_url(prepare_image(make_png(*size)))
    assert image.size == expected
    assert image.mode == 'RGBA'


def test_prepare_image_custom_width() -> None:
    image = decode_data_url(prepare_image(make_png(400, 200, mode='L'), width=100))
    assert image.size == (100, 50)


def test_prepare_image_rejects_non_images() -> None:
    with pytest.raises(OSError):
        prepare_image(b'not an image')


def test_sample_image_url() -> None:
    assert sample_image_url('tree.png') == 'https://www.gstatic.com/aistudio/starter-apps/code/samples/tree.png'
    with pytest.raises(ValueError, match='Unknown sample image'):
        sample_image_url('cat.png')


def test_load_sample_image(mocker: MockerFixture) -> None:
    fetch_data = mocker.patch('img2code.image.fetch_data', return_value=make_png(64, 64))

    data_url = load_image(SAMPLE_IMAGES[0])

    fetch_data.assert_called_once_with(sample_image_url(SAMPLE_IMAGES[0]))
    assert decode_data_url(data_url).size == (TARGET_WIDTH, TARGET_WIDTH)


def test_load_local_image(tmp_path: Path) -> None:
    path = tmp_path / 'photo.png'
    path.write_bytes(make_png(256, 128))
    assert decode_data_url(load_image(str(path))).size == (512, 256)
