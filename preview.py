"""
Turns raw model output into a document that can be rendered in a sandbox.

normalize() strips markdown fences; build_preview() wraps the cleaned code in an
HTML shell that loads whatever runtime the target framework needs.
The generated code is untrusted: documents built here are only ever served
under a sandbox: SANDBOX_POLICY in client iframes, SERVED_SANDBOX_POLICY over HTTP.
"""

import re
from dataclasses import dataclass

from models import Framework

SANDBOX_POLICY = "allow-same-origin allow-scripts"
# Documents served from our own origin get an opaque origin instead
SERVED_SANDBOX_POLICY = "allow-scripts"

# Any other language tag is only taken when it sits alone on the fence line
FENCE_RE = re.compile(r"```(?:[\w-]+(?=\n)|html|javascript|jsx)?\n?")
COMPLETE_DOC_RE = re.compile(r"<!doctype\s+html|<html", re.IGNORECASE)

TAILWIND_CDN = "https://cdn.tailwindcss.com"
REACT_SCRIPTS = (
    "https://unpkg.com/react@18/umd/react.development.js",
    "https://unpkg.com/react-dom@18/umd/react-dom.development.js",
    "https://unpkg.com/@babel/standalone/babel.min.js",
)
VUE_SCRIPT = "https://unpkg.com/vue@3/dist/vue.global.js"

BASE_STYLE = "body { font-family: Arial, sans-serif; padding: 20px; }"


@dataclass(frozen=True)
class NormalizedCode:
    code: str
    complete: bool


@dataclass(frozen=True)
class PreviewDocument:
    html: str


# ═══════════════════════════════════════════════════════════
# RESULT NORMALIZER
# ═══════════════════════════════════════════════════════════

def strip_fences(text: str) -> str:
    # Repeat until stable: removing one fence can splice stray backticks into a new one
    previous = None
    while previous != text:
        previous = text
        text = FENCE_RE.sub("", text)
    return text


def normalize(raw: str) -> NormalizedCode:
    code = strip_fences(raw or "").strip()
    return NormalizedCode(code=code, complete=bool(COMPLETE_DOC_RE.search(code)))


# ═══════════════════════════════════════════════════════════
# PREVIEW DOCUMENT BUILDER
# ═══════════════════════════════════════════════════════════

IMPORT_RE = re.compile(
    r"""^[ \t]*import\s(?:[\s\S]*?\sfrom\s+)?['"][^'"]+['"];?[ \t]*$\n?""",
    re.MULTILINE,
)
EXPORT_DEFAULT_DECL_RE = re.compile(r"\bexport\s+default\s+(function|class)\b\s*(\w*)")
EXPORT_DEFAULT_NAME_RE = re.compile(r"^[ \t]*export\s+default\s+(\w+)\s*;?[ \t]*$", re.MULTILINE)
NAMED_EXPORT_RE = re.compile(r"^([ \t]*)export\s+(?=const|let|var|function|class)", re.MULTILINE)

REACT_PRELUDE = "const { useState, useEffect, useRef, useMemo, useCallback, useReducer, useContext, Fragment } = React;"
VUE_PRELUDE = "const { ref, reactive, computed, watch, onMounted } = Vue;"

SFC_TEMPLATE_RE = re.compile(r"<template>([\s\S]*)</template>")
SFC_SCRIPT_RE = re.compile(r"<script[^>]*>([\s\S]*?)</script>")
SFC_STYLE_RE = re.compile(r"<style[^>]*>([\s\S]*?)</style>")


def _shell(title: str, head: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
{head}
</head>
<body>
{body}
</body>
</html>"""


def _scripts(*urls) -> str:
    return "\n".join(f'  <script src="{url}"></script>' for url in urls)


def prepare_react_module(code: str) -> str:
    """Rewrite an ES module component so it runs as a plain Babel script that defines App."""
    code = IMPORT_RE.sub("", code)
    default_name = None

    m = EXPORT_DEFAULT_DECL_RE.search(code)
    if m:
        default_name = m.group(2) or "App"
        code = EXPORT_DEFAULT_DECL_RE.sub(lambda m: f"{m.group(1)} {m.group(2) or 'App'}", code, count=1)
    m = EXPORT_DEFAULT_NAME_RE.search(code)
    if m:
        default_name = m.group(1)
        code = EXPORT_DEFAULT_NAME_RE.sub("", code, count=1)
    code = NAMED_EXPORT_RE.sub(r"\1", code)

    if "= React" not in code:
        code = REACT_PRELUDE + "\n" + code
    if default_name and default_name != "App":
        code = code.rstrip() + f"\nconst App = {default_name};"
    return code.strip()


def _react_document(code: str) -> str:
    body = f"""  <div id="root"></div>
  <script type="text/babel">
{prepare_react_module(code)}

ReactDOM.createRoot(document.getElementById('root')).render(<App />);
  </script>"""
    head = _scripts(*REACT_SCRIPTS) + f"\n  <style>\n    {BASE_STYLE}\n  </style>"
    return _shell("Generated react Component", head, body)


def split_vue_component(code: str):
    """Return (template, script, style) from a single-file component."""
    template = SFC_TEMPLATE_RE.search(code)
    script = SFC_SCRIPT_RE.search(code)
    style = SFC_STYLE_RE.search(code)
    if template is None and script is None:
        # Bare markup is treated as the template itself
        return code, "", ""
    return (
        template.group(1).strip() if template else "",
        script.group(1).strip() if script else "",
        style.group(1).strip() if style else "",
    )


def _vue_document(code: str) -> str:
    template, script, style = split_vue_component(code)
    script = IMPORT_RE.sub("", script)
    if EXPORT_DEFAULT_NAME_RE.search(script):
        script = EXPORT_DEFAULT_NAME_RE.sub(lambda m: f"const component = {m.group(1)};", script, count=1)
    elif "export default" in script:
        script = re.sub(r"\bexport\s+default\b", "const component =", script, count=1)
    else:
        script += "\nconst component = {};"
    if "= Vue" not in script:
        script = VUE_PRELUDE + "\n" + script

    head = _scripts(VUE_SCRIPT) + f"\n  <style>\n    {BASE_STYLE}\n{style}\n  </style>"
    body = f"""  <div id="app"></div>
  <script type="text/x-template" id="app-template">
{template}
  </script>
  <script>
{script.strip()}
if (!component.template && !component.render) {{ component.template = '#app-template'; }}
Vue.createApp(component).mount('#app');
  </script>"""
    return _shell("Generated vue Component", head, body)


def _tailwind_document(code: str) -> str:
    return _shell("Generated Tailwind UI", _scripts(TAILWIND_CDN), code)


def _html_document(code: str) -> str:
    css = code if ("{" in code and "<style" not in code.lower()) else ""
    body = code if "<" in code else f"<div>{code}</div>"
    head = f"  <style>\n    {BASE_STYLE}\n{css}\n  </style>"
    return _shell("Generated UI", head, body)


BUILDERS = {
    Framework.REACT: _react_document,
    Framework.VUE: _vue_document,
    Framework.TAILWIND: _tailwind_document,
    Framework.HTML: _html_document,
}


def build_preview(code: str, complete: bool, framework) -> PreviewDocument:
    if complete:
        return PreviewDocument(html=code)
    return PreviewDocument(html=BUILDERS[Framework.parse(framework)](code))


def preview_for(raw: str, framework) -> PreviewDocument:
    normalized = normalize(raw)
    return build_preview(normalized.code, normalized.complete, framework)
