import os

import pytest

from katana.output.responses import (
    INDEX_FILE,
    format_stored_response,
    response_file_name,
    response_hash,
    response_host,
    update_index,
)
from katana.output.result import HttpResponse, Request, Response, Result


def _result(url="https://example.com/a"):
    return Result(
        request=Request(url=url, raw="RAWREQ"),
        response=Response(raw="RAWRESP", resp=HttpResponse(status="200 OK", url=url)),
    )


def test_response_hash_of_empty_string():
    assert response_hash("") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_response_hash_distinguishes_urls():
    first = response_hash("https://example.com/a")
    assert len(first) == 40
    assert first == response_hash("https://example.com/a")
    assert first != response_hash("https://example.com/b")


def test_format_stored_response():
    assert format_stored_response(_result()) == "https://example.com/a\n\n\nRAWREQ\n\nRAWRESP"


def test_response_host_keeps_port():
    assert response_host("https://user@example.com:8080/x") == "example.com:8080"


def test_response_host_invalid():
    with pytest.raises(ValueError):
        response_host("http://[::1/x")


def test_response_file_name_creates_host_dir(tmp_path):
    url = "https://example.com/a"
    name = response_file_name(str(tmp_path), "example.com", url)
    assert os.path.basename(name) == response_hash(url) + ".txt"
    assert os.path.isdir(os.path.dirname(name))
    assert os.path.dirname(name) == os.path.join(str(tmp_path), "example.com")


def test_update_index_appends_line(tmp_path):
    (tmp_path / INDEX_FILE).write_text("")
    result = _result()
    update_index(str(tmp_path), result)
    expected_file = response_file_name(str(tmp_path), "example.com", result.request.url)
    assert (tmp_path / INDEX_FILE).read_text() == f"{expected_file} {result.request.url} (200 OK)\n"


def test_update_index_requires_index_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        update_index(str(tmp_path), _result())