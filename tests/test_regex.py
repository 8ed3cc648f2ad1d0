from katana.utils.regex import extract_body_endpoints, extract_relative_endpoints


def test_relative_endpoint_in_quotes():
    assert extract_relative_endpoints('var a = "/api/v1/users.json";') == ["/api/v1/users.json"]


def test_relative_absolute_url():
    data = 'fetch("https://example.com/path/x")'
    assert extract_relative_endpoints(data) == ["https://example.com/path/x"]


def test_relative_endpoints_are_deduplicated():
    data = 'a("/app/main.js"); b("/app/main.js"); c(\'/app/other.php\')'
    assert extract_relative_endpoints(data) == ["/app/main.js", "/app/other.php"]


def test_relative_requires_delimiters():
    assert extract_relative_endpoints("/app/main.js") == []


def test_body_endpoint_php():
    assert extract_body_endpoints('<a href="/login.php">x</a>') == ["/login.php"]


def test_body_endpoints_deduplicated_in_order():
    data = '<a href="/a/one.html"></a><a href="/a/one.html"></a><a href="/b/two.js"></a>'
    assert extract_body_endpoints(data) == ["/a/one.html", "/b/two.js"]


def test_body_empty():
    assert extract_body_endpoints("") == []