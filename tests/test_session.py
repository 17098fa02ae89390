import pytest

from img2code.code_generation import FakeCodeModel, InputValidationError
from img2code.engine import GenerationEngine
from img2code.preview import OutputKind, ViewMode
from img2code.session import GenerationSession
from img2code.storage import MemoryPromptStore, PromptBook

IMAGE = 'data:image/png;base64,aGk='


@pytest.fixture()
def model() -> FakeCodeModel:
    return FakeCodeModel()


@pytest.fixture()
def session(model: FakeCodeModel) -> GenerationSession:
    prompt_book = PromptBook(MemoryPromptStore(), default='Recreate this image')
    return GenerationSession(GenerationEngine(model), prompt_book, num_requests=3)


def test_prompt_is_read_at_submission(session: GenerationSession, model: FakeCodeModel) -> None:
    session.prompt = 'Draw it as a sketch'
    session.submit(IMAGE, user_input='slowly')

    assert model.num_calls == 3
    assert model.requests[0].final_prompt == 'Draw it as a sketch\n\nUser input: slowly'
    assert session.prompt == 'Draw it as a sketch'


def test_submit_replaces_results(session: GenerationSession) -> None:
    first = session.submit(IMAGE)
    session.view(1).select(ViewMode.code)
    session.num_requests = 2

    second = session.submit(IMAGE)

    assert session.batch is second
    assert session.batch is not first
    assert [item.id for item in second.items] == [1, 2]
    assert session.view(1).mode is ViewMode.preview
    assert not session.loading


def test_invalid_submission_keeps_previous_results(session: GenerationSession, model: FakeCodeModel) -> None:
    batch = session.submit(IMAGE)
    with pytest.raises(InputValidationError):
        session.submit('')
    assert session.batch is batch
    assert model.num_calls == 3


def test_edit_and_copy_code(session: GenerationSession) -> None:
    session.submit(IMAGE)
    session.edit_code(2, 'function draw() { background(0); }')

    assert session.copy_code(2) == 'function draw() { background(0); }'
    assert session.view(2).copied
    assert not session.view(1).copied
    assert session.batch is not None
    assert session.batch.get(1).code == '// sketch 1\nfunction setup() {}'
    assert 'function draw() { background(0); }' in session.preview_document(2)


def test_html_kind_preview(model: FakeCodeModel) -> None:
    session = GenerationSession(
        GenerationEngine(model), PromptBook(MemoryPromptStore(), default='p'), num_requests=1, kind=OutputKind.html
    )
    session.submit(IMAGE)
    assert session.preview_document(1) == session.batch.get(1).code  # type: ignore


def test_nothing_submitted(session: GenerationSession) -> None:
    with pytest.raises(LookupError):
        session.edit_code(1, 'x')
    with pytest.raises(LookupError):
        session.view(1)


def test_unknown_output_id(session: GenerationSession) -> None:
    session.submit(IMAGE)
    with pytest.raises(KeyError):
        session.view(4)
