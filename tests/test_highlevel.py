import anyio

from img2code.code_generation import FakeCodeModel, GeminiCodeModel, GenerationRequest
from img2code.config import AppSettings
from img2code.highlevel import generate_code, load_code_model


def test_load_code_model_with_name(monkeypatch) -> None:
    monkeypatch.setenv('GEMINI_API_KEY', 'key')
    model = load_code_model('gemini/gemini-2.0-flash')
    assert isinstance(model, GeminiCodeModel)
    assert model.model_id == 'gemini/gemini-2.0-flash'


def test_generate_code() -> None:
    output = generate_code('aGk=', 'Draw it', model_id='test')
    assert output.code == '// sketch 1\nfunction setup() {}'
    assert output.extra == {'call': 1}


def test_settings_build_model() -> None:
    model = AppSettings(model_id='test', extraction_fallback='empty').build_model()
    assert isinstance(model, FakeCodeModel)
    assert model.extractor('no fence') == ''


def test_batch_generate() -> None:
    model = FakeCodeModel()
    request = GenerationRequest(image_data='aGk=', prompt='p')

    outputs = list(model.batch_generate([request, request]))

    assert [output.extra['call'] for output in outputs] == [1, 2]


def test_async_batch_generate() -> None:
    model = FakeCodeModel(delays=[0.2, 0])
    request = GenerationRequest(image_data='aGk=', prompt='p')

    async def collect() -> list:
        return [output async for output in model.async_batch_generate([request, request])]

    outputs = anyio.run(collect)

    assert [output.extra['call'] for output in outputs] == [1, 2]
