from katana.utils.helpers import (
    flatten_headers,
    is_url,
    parse_link_tag,
    parse_refresh_tag,
    parse_srcset_tag,
    replace_all_query_param,
    web_user_agent,
)


def test_parse_link_tag():
    header = (
        '<https://api.github.com/user/58276/repos?page=2>; rel="next",'
        '<https://api.github.com/user/58276/repos?page=10>; rel="last"'
    )
    values = parse_link_tag(header)
    assert sorted(values) == sorted([
        "https://api.github.com/user/58276/repos?page=2",
        "https://api.github.com/user/58276/repos?page=10",
    ])


def test_parse_refresh_tag():
    assert parse_refresh_tag("999; url=/test/headers/refresh.found") == "/test/headers/refresh.found"


def test_parse_refresh_tag_without_url():
    assert parse_refresh_tag("5") == ""


def test_parse_srcset_tag():
    assert parse_srcset_tag("a.png 1x, b.png 2x") == ["a.png", "b.png"]
    assert parse_srcset_tag("image.jpg") == ["image.jpg"]
    assert parse_srcset_tag("") == []


def test_is_url():
    assert is_url("https://example.com/x") is True
    assert is_url("/relative/path") is False
    assert is_url("http://[::1") is False


def test_flatten_headers():
    assert flatten_headers({"A": ["1", "2"], "B": ["x"]}) == {"A": "1;2", "B": "x"}


def test_replace_all_query_param():
    assert replace_all_query_param("https://example.com/p?a=1&b=2", "x") == "https://example.com/p?a=&b="
    assert replace_all_query_param("https://example.com/p", "x") == "https://example.com/p"


def test_web_user_agent_is_chrome():
    assert "Chrome/113.0.0.0" in web_user_agent()