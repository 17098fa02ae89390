from typing import Sequence


class GenerationError(Exception):
    ...


class InputValidationError(GenerationError):
    def __init__(self, missing_fields: Sequence[str], *args: object) -> None:
        self.missing_fields = list(missing_fields)
        message = f'missing required input: {", ".join(self.missing_fields)}'
        super().__init__(message, *args)


class FailedOutputError(GenerationError):
    def __init__(self, output_id: int, reason: str, *args: object) -> None:
        self.output_id = output_id
        self.reason = reason
        super().__init__(f'output {output_id} failed: {reason}', *args)
