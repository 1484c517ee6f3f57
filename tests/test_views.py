from mdblog.content import Post
from mdblog.views import (
    build_article,
    build_list_skeleton,
    build_load_error,
    build_not_found,
    build_post_cards,
    post_query,
)


def test_post_cards_render_one_card_per_post():
    posts = [
        Post(slug="a", title="A", date="2024-02-01", excerpt="first", tags=["x", "y"]),
        Post(slug="b", title="B", date="2024-01-01"),
    ]
    html = build_post_cards(posts)
    assert html.count('class="post-card"') == 2
    assert html.index('data-slug="a"') < html.index('data-slug="b"')
    assert html.count('class="post-tag"') == 2
    assert '<p class="post-card-excerpt"></p>' in html
    assert 'href="?post=a"' in html


def test_post_cards_escape_metadata():
    posts = [Post(slug="x", title="<script>alert(1)</script>", date="2024-01-01", excerpt="a & b", tags=["<b>"])]
    html = build_post_cards(posts)
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "a &amp; b" in html
    assert "&lt;b&gt;" in html


def test_empty_index_renders_placeholder():
    html = build_post_cards([])
    assert "placeholder-empty" in html
    assert "post-card" not in html


def test_list_skeleton_has_three_cards():
    assert build_list_skeleton().count("skeleton-card") == 3


def test_article_includes_header_and_body():
    post = Post(slug="a", title="Title & more", date="2024-03-05", tags=["econ"])
    html = build_article(post, "<p>body</p>")
    assert '<span class="post-date">2024-03-05</span>' in html
    assert '<h1 class="post-title">Title &amp; more</h1>' in html
    assert '<div class="post-tags"><span class="post-tag">econ</span></div>' in html
    assert '<div class="post-body"><p>body</p></div>' in html


def test_article_without_tags_omits_tag_block():
    html = build_article(Post(slug="a", title="T", date="2024-03-05"), "")
    assert "post-tags" not in html


def test_placeholders_are_distinct():
    assert "placeholder-not-found" in build_not_found()
    assert "placeholder-load-error" in build_load_error()


def test_post_query_encodes_slug():
    assert post_query("hello-world") == "?post=hello-world"
    assert post_query("量子") == "?post=%E9%87%8F%E5%AD%90"
