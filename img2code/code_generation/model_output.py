from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Annotated, Self

from img2code.code_generation.exception import FailedOutputError
from img2code.model import ModelOutput


class FinishReason(str, Enum):
    stop = 'stop'
    length = 'length'
    content_filter = 'content_filter'
    other = 'other'


class Usage(BaseModel):
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


class CodeGenerationOutput(ModelOutput):
    full_response: str
    code: str
    usage: Optional[Usage] = None
    finish_reason: Optional[FinishReason] = None

    @property
    def reply(self) -> str:
        return self.full_response


class GenerationSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal['succeeded'] = 'succeeded'
    code: str
    full_response: str


class GenerationFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal['failed'] = 'failed'
    reason: str


GenerationOutcome = Annotated[Union[GenerationSucceeded, GenerationFailed], Field(discriminator='status')]


class OutputItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)  # noqa: A003
    result: GenerationOutcome

    @classmethod
    def from_output(cls, id: int, output: CodeGenerationOutput) -> Self:  # noqa: A002
        return cls(id=id, result=GenerationSucceeded(code=output.code, full_response=output.full_response))

    @classmethod
    def from_error(cls, id: int, error: BaseException) -> Self:  # noqa: A002
        reason = str(error) or error.__class__.__name__
        return cls(id=id, result=GenerationFailed(reason=reason))

    @property
    def succeeded(self) -> bool:
        return isinstance(self.result, GenerationSucceeded)

    @property
    def code(self) -> str:
        if isinstance(self.result, GenerationFailed):
            return ''
        return self.result.code

    @property
    def full_response(self) -> str:
        if isinstance(self.result, GenerationFailed):
            return ''
        return self.result.full_response

    def with_code(self, code: str) -> Self:
        if isinstance(self.result, GenerationFailed):
            raise FailedOutputError(self.id, self.result.reason)
        return self.model_copy(update={'result': self.result.model_copy(update={'code': code})})


class GenerationBatch(BaseModel):
    items: List[OutputItem] = []

    @model_validator(mode='after')
    def check_unique_ids(self) -> Self:
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError(f'output ids must be unique within a batch, got {ids}')
        return self

    def get(self, id: int) -> OutputItem:  # noqa: A002
        for item in self.items:
            if item.id == id:
                return item
        raise KeyError(id)

    @property
    def succeeded(self) -> List[OutputItem]:
        return [item for item in self.items if item.succeeded]

    @property
    def failed(self) -> List[OutputItem]:
        return [item for item in self.items if not item.succeeded]

    @property
    def all_failed(self) -> bool:
        return bool(self.items) and not self.succeeded

    def edit_code(self, id: int, code: str) -> OutputItem:  # noqa: A002
        for index, item in enumerate(self.items):
            if item.id == id:
                edited = item.with_code(code)
                self.items[index] = edited
                return edited
        raise KeyError(id)
