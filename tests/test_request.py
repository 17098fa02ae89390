import pytest

from img2code.code_generation import GenerationRequest, InputValidationError


def test_final_prompt_appends_user_input() -> None:
    request = GenerationRequest(image_data='aGk=', prompt='Make a sketch', user_input='make it blue')
    assert request.final_prompt == 'Make a sketch\n\nUser input: make it blue'


@pytest.mark.parametrize('user_input', [None, '', '   '])
def test_final_prompt_without_user_input(user_input) -> None:
    request = GenerationRequest(image_data='aGk=', prompt='Make a sketch', user_input=user_input)
    assert request.final_prompt == 'Make a sketch'


def test_data_url_is_split() -> None:
    request = GenerationRequest(image_data='data:image/png;base64,aGk=', prompt='p')
    assert request.image_mime_type == 'image/png'
    assert request.image_base64 == 'aGk='
    assert request.image_data_url == 'data:image/png;base64,aGk='
    assert request.image_bytes == b'hi'


def test_bare_base64_defaults_to_jpeg() -> None:
    request = GenerationRequest(image_data='aGk=', prompt='p')
    assert request.image_mime_type == 'image/jpeg'
    assert request.image_base64 == 'aGk='
    assert request.image_data_url == 'data:image/jpeg;base64,aGk='


def test_invalid_base64() -> None:
    request = GenerationRequest(image_data='not base64!', prompt='p')
    with pytest.raises(ValueError, match='not valid base64'):
        request.image_bytes


def test_request_accepts_wire_aliases() -> None:
    request = GenerationRequest.model_validate({'imageBase64': 'aGk=', 'prompt': 'p', 'userInput': 'u'})
    assert request.image_data == 'aGk='
    assert request.user_input == 'u'
    assert request.model_dump(by_alias=True) == {'imageBase64': 'aGk=', 'prompt': 'p', 'userInput': 'u'}


@pytest.mark.parametrize(
    ('image_data', 'prompt', 'missing'),
    [
        ('', 'p', ['image']),
        ('aGk=', '', ['prompt']),
        ('aGk=', '  \n', ['prompt']),
        ('', '', ['image', 'prompt']),
    ],
)
def test_validate_inputs(image_data: str, prompt: str, missing: list) -> None:
    request = GenerationRequest(image_data=image_data, prompt=prompt)
    with pytest.raises(InputValidationError) as exc_info:
        request.validate_inputs()
    assert exc_info.value.missing_fields == missing


def test_validate_inputs_passes() -> None:
    GenerationRequest(image_data='aGk=', prompt='p').validate_inputs()
