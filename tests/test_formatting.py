import json

from katana.output.formatting import format_json, format_screen
from katana.output.result import Request, Result

URL = "https://example.com/x"


def test_plain_screen_is_url():
    result = Result(request=Request(url=URL, tag="a", method="GET", body="q=1"))
    assert format_screen(result) == URL


def test_verbose_screen_without_colors():
    result = Result(request=Request(url=URL, tag="a", method="GET", body="q=1"))
    assert format_screen(result, verbose=True) == "[a] [GET] https://example.com/x [q=1]"


def test_verbose_colors_only_add_escape_codes():
    result = Result(request=Request(url=URL, tag="a", method="GET"))
    colored = format_screen(result, verbose=True, colors=True)
    stripped = colored.replace("\x1b[34m", "").replace("\x1b[32m", "").replace("\x1b[0m", "")
    assert stripped == format_screen(result, verbose=True)
    assert colored != stripped


def test_fields_screen():
    result = Result(request=Request(url=URL))
    assert format_screen(result, fields="url,path") == f"{URL}\n/x\n"


def test_fields_screen_verbose_colored():
    result = Result(request=Request(url=URL))
    assert format_screen(result, fields="url", verbose=True, colors=True) == (
        f"[\x1b[34murl\x1b[0m] {URL}\n"
    )


def test_json_round_trip():
    result = Result(request=Request(url=URL, method="GET"))
    assert json.loads(format_json(result)) == result.to_dict()


def test_json_empty_with_custom_fields():
    result = Result(request=Request(url=URL, custom_fields={"email": ["a@example.com"]}))
    assert format_json(result) == ""