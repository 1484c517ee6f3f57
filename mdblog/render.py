from __future__ import annotations

import html
import re
from pathlib import Path

import markdown
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

CODE_BLOCK_RE = re.compile(
    r'<pre><code(?: class="(?P<classes>[^"]*)")?>(?P<code>.*?)</code></pre>',
    re.DOTALL,
)
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


def render_markdown(text: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    html_content = md.convert(text)
    md.reset()
    return html_content


def code_language(classes: str) -> str:
    for name in classes.split():
        if name.startswith("language-"):
            return name[len("language-") :]
    return ""


def get_lexer(code: str, lang: str):
    if lang:
        try:
            return get_lexer_by_name(lang, stripall=False)
        except ClassNotFound:
            pass
    try:
        return guess_lexer(code)
    except ClassNotFound:
        return TextLexer()


def highlight_code_blocks(html_text: str) -> str:
    formatter = HtmlFormatter(nowrap=True)

    def repl(match: re.Match) -> str:
        lang = code_language(match.group("classes") or "")
        code = html.unescape(match.group("code"))
        lexer = get_lexer(code, lang)
        highlighted = highlight(code, lexer, formatter)
        lang_class = f" language-{html.escape(lang)}" if lang else ""
        return f'<pre class="codehilite"><code class="highlighted{lang_class}">{highlighted}</code></pre>'

    return CODE_BLOCK_RE.sub(repl, html_text)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
