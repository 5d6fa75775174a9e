from clearview.core.web_search import is_likely_url, normalize_url, web_search_url


def test_is_likely_url():
    assert is_likely_url("github.com")
    assert is_likely_url("docs.python.org")
    assert is_likely_url("https://example.net/path")
    assert is_likely_url("nasa.GOV")
    assert not is_likely_url("report.txt")
    assert not is_likely_url("my notes.com")
    assert not is_likely_url("https://")
    assert not is_likely_url("")


def test_normalize_url():
    assert normalize_url("github.com") == "https://github.com"
    assert normalize_url("http://a.io") == "http://a.io"


def test_web_search_url():
    assert web_search_url(" cheap flights ") == "https://www.google.com/search?q=cheap%20flights"
