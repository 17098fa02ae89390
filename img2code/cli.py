from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from img2code.code_generation import CodeModelRegistry, GenerationBatch, GenerationRequest, find_code_blocks
from img2code.config import AppSettings
from img2code.engine import GenerationEngine
from img2code.image import load_image
from img2code.preview import OutputKind, render_document, render_preview_frame, render_reasoning

app = typer.Typer(name='img2code', help='Turn an image into runnable code with a multimodal model.')
prompt_app = typer.Typer(help='Show or edit the saved prompt.')
app.add_typer(prompt_app, name='prompt')

logger = logging.getLogger(__name__)
CODE_FILE_NAMES = {OutputKind.sketch: 'sketch.js', OutputKind.html: 'index.html'}


def setup_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format='%(asctime)s %(levelname)s %(name)s: %(message)s')


@app.command()
def serve(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Start the web demo."""
    import uvicorn

    from img2code.server import create_app

    settings = AppSettings()
    setup_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=host or settings.host, port=port or settings.port)


@app.command()
def generate(
    image: str = typer.Argument(..., help='Image path, URL or sample image name.'),
    num_requests: Optional[int] = typer.Option(None, '--num-requests', '-n', min=1, max=10),
    kind: Optional[OutputKind] = typer.Option(None, '--kind', '-k'),
    user_input: Optional[str] = typer.Option(None, '--user-input', '-u'),
    prompt: Optional[str] = typer.Option(None, '--prompt', '-p', help='Use this prompt instead of the saved one.'),
    model_id: Optional[str] = typer.Option(None, '--model-id', '-m'),
    output_dir: Path = typer.Option(Path('img2code-output'), '--output-dir', '-o'),
) -> None:
    """Generate several candidate programs for one image and write them to OUTPUT_DIR."""
    settings = AppSettings()
    if model_id is not None:
        settings.model_id = model_id
    if kind is not None:
        settings.kind = kind
    setup_logging(settings.log_level)

    prompt_book = settings.build_prompt_book()
    request = GenerationRequest(image_data=load_image(image), prompt=prompt or prompt_book.load(), user_input=user_input)
    engine = GenerationEngine(settings.build_model(), error_mode=settings.error_mode)
    batch = engine.run(request, num_requests or settings.num_requests)
    write_batch(batch, settings.kind, output_dir)

    for item in batch.items:
        if item.succeeded:
            typer.echo(f'[{item.id}] ok -> {output_dir / str(item.id)}')
        else:
            typer.echo(f'[{item.id}] failed: {item.result.reason}', err=True)  # type: ignore
    if batch.all_failed:
        typer.echo('Error generating code', err=True)
        raise typer.Exit(code=1)


def write_batch(batch: GenerationBatch, kind: OutputKind, output_dir: Path) -> List[Path]:
    """Write every successful item to its own directory, plus a ``report.html`` showing all previews."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    sections: List[str] = []
    for item in batch.succeeded:
        item_dir = output_dir / str(item.id)
        item_dir.mkdir(exist_ok=True)
        if len(find_code_blocks(item.full_response)) > 1:
            logger.info(f'Response {item.id} contains several code blocks, only the first one is kept')
        (item_dir / CODE_FILE_NAMES[kind]).write_text(item.code, encoding='utf-8')
        (item_dir / 'preview.html').write_text(render_document(item.code, kind), encoding='utf-8')
        (item_dir / 'reasoning.md').write_text(item.full_response, encoding='utf-8')
        sections.append(
            f'<section><h2>#{item.id}</h2>{render_preview_frame(item.code, kind, title=f"Result {item.id}")}'
            f'<details><summary>Reasoning</summary>{render_reasoning(item.full_response)}</details></section>'
        )
        written.append(item_dir)
    if sections:
        report = '<!doctype html><html><head><meta charset="utf-8"><title>img2code</title></head><body>'
        report += ''.join(sections) + '</body></html>'
        (output_dir / 'report.html').write_text(report, encoding='utf-8')
    return written


@prompt_app.command('show')
def show_prompt(kind: Optional[OutputKind] = typer.Option(None, '--kind', '-k')) -> None:
    typer.echo(AppSettings().build_prompt_book(kind=kind).load())


@prompt_app.command('set')
def set_prompt(prompt: str, kind: Optional[OutputKind] = typer.Option(None, '--kind', '-k')) -> None:
    if not AppSettings().build_prompt_book(kind=kind).save(prompt):
        typer.echo('Prompt must not be empty', err=True)
        raise typer.Exit(code=1)


@prompt_app.command('reset')
def reset_prompt(kind: Optional[OutputKind] = typer.Option(None, '--kind', '-k')) -> None:
    typer.echo(AppSettings().build_prompt_book(kind=kind).reset())


@app.command()
def settings(model_type: str) -> None:
    """Show the environment variables a model type reads."""
    if model_type not in CodeModelRegistry:
        typer.echo(f'Unknown model type {model_type!r}, available: {sorted(CodeModelRegistry)}', err=True)
        raise typer.Exit(code=1)
    model_cls = CodeModelRegistry[model_type][0]
    how_to_settings = getattr(model_cls, 'how_to_settings', None)
    if how_to_settings is None:
        typer.echo(f'{model_cls.__name__} needs no settings')
        return
    typer.echo(how_to_settings())


if __name__ == '__main__':
    app()
