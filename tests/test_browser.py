from mdblog.browser import Event, History, Page


def test_push_state_resolves_relative_urls():
    history = History("https://example.com/blog/index.html")
    history.push_state({"post": "a"}, "?post=a")
    assert history.location == "https://example.com/blog/index.html?post=a"
    history.push_state({}, history.pathname)
    assert history.location == "https://example.com/blog/index.html"


def test_push_state_drops_forward_entries():
    history = History("/")
    history.push_state(None, "?post=a")
    history.push_state(None, "?post=b")
    assert history.back()
    history.push_state(None, "?post=c")
    assert [entry.url for entry in history.entries] == ["/", "/?post=a", "/?post=c"]
    assert not history.forward()


def test_go_stays_within_bounds():
    history = History("/")
    assert not history.back()
    assert not history.go(0)
    history.push_state(None, "?post=a")
    assert history.go(-1)
    assert history.location == "/"
    assert not history.go(5)


def test_pathname_defaults_to_root():
    assert History("https://example.com").pathname == "/"


def test_page_visibility_and_scroll():
    page = Page()
    page.list_html = "list"
    page.article_html = "article"
    assert page.visible_html == "list"
    page.show_article()
    assert page.visible_html == "article"
    page.scroll_to(top=0, behavior="smooth")
    assert page.scrolls == [(0, "smooth")]


def test_event_prevent_default():
    event = Event()
    event.prevent_default()
    assert event.default_prevented
