from __future__ import annotations

import logging
from functools import partial
from typing import ClassVar, Literal, NoReturn

import anyio
import asyncer
import tqdm
from pydantic import TypeAdapter
from typing_extensions import Self, TypedDict, Unpack

from img2code.code_generation import CodeGenerationModel, GenerationBatch, GenerationRequest, OutputItem
from img2code.highlevel import load_code_model
from img2code.types import NumRequests

logger = logging.getLogger(__name__)
num_requests_validator = TypeAdapter(NumRequests)


class GenerationEngineKwargs(TypedDict, total=False):
    error_mode: Literal['isolate', 'raise']
    progress_bar_mode: Literal['auto', 'never', 'always']


class GenerationEngine:
    """
    Fans one generation request out to a code generation model.

    All requests of a batch are issued at once, without throttling or retry, and the engine waits for every
    one of them. Items come back ordered by submission index, not by completion time.

    Args:
        model (CodeGenerationModel): The model used for every request of a batch.
        error_mode (Literal['isolate', 'raise'], optional): The error handling mode. If 'isolate', a failed request
            becomes a failed item and the other items are kept. If 'raise', the first failure is raised and no
            partial batch is returned. Defaults to 'isolate'.
        progress_bar_mode (Literal['auto', 'never', 'always'], optional): The progress bar mode. If 'always', it
            always shows the progress bar, if 'auto', it shows the progress bar when the number of requests exceeds
            a certain threshold. Defaults to 'auto'.
    """

    PROGRESS_BAR_THRESHOLD: ClassVar[int] = 5

    def __init__(
        self,
        model: CodeGenerationModel,
        error_mode: Literal['isolate', 'raise'] = 'isolate',
        progress_bar_mode: Literal['auto', 'never', 'always'] = 'auto',
    ) -> None:
        if error_mode not in ('isolate', 'raise'):
            raise ValueError(f'Unknown error mode: {error_mode}')
        self.model = model
        self.error_mode = error_mode
        self.progress_bar_mode = progress_bar_mode

    @classmethod
    def from_model_id(cls, model_id: str, **kwargs: Unpack[GenerationEngineKwargs]) -> Self:
        return cls(load_code_model(model_id), **kwargs)

    def run(self, request: GenerationRequest, num_requests: int) -> GenerationBatch:
        return anyio.run(partial(self.async_run, request, num_requests))

    async def async_run(self, request: GenerationRequest, num_requests: int) -> GenerationBatch:
        num_requests = num_requests_validator.validate_python(num_requests)
        request.validate_inputs()
        progress_bar = self._get_progress_bar(num_tasks=num_requests)
        logger.info(f'Submitting {num_requests} requests to {self.model.model_id}')

        try:
            async with asyncer.create_task_group() as task_group:
                soon_func = task_group.soonify(self._async_run_single_task)
                soon_values = [
                    soon_func(request=request, output_id=output_id, progress_bar=progress_bar)
                    for output_id in range(1, num_requests + 1)
                ]
        except Exception as e:
            # task groups wrap task errors in an exception group
            raise _first_leaf_exception(e) from None
        finally:
            progress_bar.close()

        batch = GenerationBatch(items=[soon_value.value for soon_value in soon_values])
        if batch.failed:
            logger.warning(f'{len(batch.failed)} of {num_requests} requests failed')
        return batch

    async def _async_run_single_task(
        self,
        request: GenerationRequest,
        output_id: int,
        progress_bar: tqdm.tqdm[NoReturn],
    ) -> OutputItem:
        try:
            output = await self.model.async_generate(request)
        except Exception as e:
            if self.error_mode == 'raise':
                raise
            logger.warning(f'Request {output_id} failed: {e!r}')
            return OutputItem.from_error(output_id, e)
        else:
            return OutputItem.from_output(output_id, output)
        finally:
            progress_bar.update(1)

    def _get_progress_bar(self, num_tasks: int) -> tqdm.tqdm[NoReturn]:
        use_progress_bar = (self.progress_bar_mode == 'always') or (
            self.progress_bar_mode == 'auto' and num_tasks > self.PROGRESS_BAR_THRESHOLD
        )
        return tqdm.tqdm(desc=f'{self.model.__class__.__name__}', total=num_tasks, disable=not use_progress_bar)


def _first_leaf_exception(error: BaseException) -> BaseException:
    while exceptions := getattr(error, 'exceptions', None):
        error = exceptions[0]
    return error
