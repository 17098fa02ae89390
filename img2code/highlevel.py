from __future__ import annotations

from typing import Any

from img2code.code_generation import (
    CodeGenerationModel,
    CodeGenerationOutput,
    CodeModelRegistry,
    GenerationRequest,
    RemoteCodeGenerationModel,
)


def load_code_model(model_id: str, **kwargs: Any) -> CodeGenerationModel:
    """
    Build a code generation model from an id such as ``gemini`` or ``gemini/gemini-2.5-flash``.

    Extra keyword arguments (``http_client``, ``extractor``, ...) are passed to the model constructor.
    """
    if '/' not in model_id:
        model_type, name = model_id, None
    else:
        model_type, name = model_id.split('/', maxsplit=1)
    if model_type not in CodeModelRegistry:
        raise ValueError(f'Unknown model type {model_type!r}, available: {sorted(CodeModelRegistry)}')
    model_cls = CodeModelRegistry[model_type][0]
    if name is not None and issubclass(model_cls, RemoteCodeGenerationModel):
        return model_cls(model=name, **kwargs)  # type: ignore
    return model_cls(**kwargs)  # type: ignore


def generate_code(
    image_data: str, prompt: str, user_input: str | None = None, model_id: str = 'gemini', **kwargs: Any
) -> CodeGenerationOutput:
    model = load_code_model(model_id)
    request = GenerationRequest(image_data=image_data, prompt=prompt, user_input=user_input)
    return model.generate(request, **kwargs)
