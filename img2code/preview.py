"""
Rendering of generation results.

Generated markup and scripts are only ever shown inside an ``<iframe>`` carrying a ``sandbox`` attribute
without ``allow-same-origin``: the generated code runs in an opaque origin and can neither reach the host
page nor its storage.
"""

from __future__ import annotations

import html
from enum import Enum

from pydantic import BaseModel

P5_SCRIPT_URL = 'https://cdnjs.cloudflare.com/ajax/libs/p5.js/1.4.0/p5.js'
SANDBOX_PERMISSIONS = 'allow-scripts'

SKETCH_DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=512, initial-scale=1.0">
  <script src="{p5_script_url}"></script>
  <title>p5.js Sketch</title>
  <style> body {{padding: 0; margin: 0;}} </style>
</head>
<body>
<script>
  window.onerror = function(message, source, lineno, colno, error) {{
    document.body.innerHTML += '<h3>Error:</h3><pre>' + message + '</pre>';
  }};
{code}
</script>
</body>
</html>
"""


class OutputKind(str, Enum):
    sketch = 'sketch'
    html = 'html'


class ViewMode(str, Enum):
    preview = 'preview'
    reasoning = 'reasoning'
    code = 'code'


class OutputView(BaseModel):
    """Display state of one result. Views of different results never affect each other."""

    mode: ViewMode = ViewMode.preview
    copied: bool = False

    def select(self, mode: ViewMode | str) -> None:
        self.mode = ViewMode(mode)

    def copy(self, code: str) -> str:
        self.copied = True
        return code


def render_document(code: str, kind: OutputKind | str) -> str:
    if OutputKind(kind) is OutputKind.sketch:
        # a closing script tag inside the sketch would end the wrapper script early
        safe_code = code.replace('</script', '<\\/script')
        return SKETCH_DOCUMENT_TEMPLATE.format(p5_script_url=P5_SCRIPT_URL, code=safe_code)
    return code


def render_preview_frame(code: str, kind: OutputKind | str, title: str = 'Preview', height: int = 500) -> str:
    document = render_document(code, kind)
    return (
        f'<iframe sandbox="{SANDBOX_PERMISSIONS}" srcdoc="{html.escape(document, quote=True)}" '
        f'title="{html.escape(title, quote=True)}" width="100%" height="{height}" style="border: none"></iframe>'
    )


def render_reasoning(text: str) -> str:
    return f'<pre class="reasoning">{html.escape(text)}</pre>'
