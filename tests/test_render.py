from mdblog.render import code_language, highlight_code_blocks, render_markdown, write_text


def test_render_markdown_converts_headings_and_tables():
    html = render_markdown("# Title\n\n| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<h1>Title</h1>" in html
    assert "<table>" in html


def test_highlight_code_blocks_uses_fence_language():
    html = render_markdown("```python\ndef f():\n    return 1\n```\n")
    highlighted = highlight_code_blocks(html)
    assert '<pre class="codehilite"><code class="highlighted language-python">' in highlighted
    assert '<span class="k">def</span>' in highlighted


def test_highlight_code_blocks_handles_unknown_language():
    html = '<pre><code class="language-nosuchlang">x &lt; y\n</code></pre>'
    highlighted = highlight_code_blocks(html)
    assert highlighted.startswith('<pre class="codehilite">')
    assert "nosuchlang" in highlighted


def test_highlight_code_blocks_leaves_other_markup_alone():
    html = "<p>no code here</p>"
    assert highlight_code_blocks(html) == html


def test_highlight_code_blocks_is_not_reapplied():
    once = highlight_code_blocks(render_markdown("```python\nx = 1\n```\n"))
    assert highlight_code_blocks(once) == once


def test_code_language():
    assert code_language("language-rust other") == "rust"
    assert code_language("") == ""


def test_write_text_creates_parent_dirs(tmp_path):
    path = tmp_path / "a" / "b.txt"
    write_text(path, "hi")
    assert path.read_text(encoding="utf-8") == "hi"
