import logging

import pytest

from katana.config.options import Options


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a:b", {"a": "b"}),
        ("", {}),
        ("a:", {"a": ""}),
        ("a:b,c:d", {"a": "b", "c": "d"}),
    ],
)
def test_parse_custom_headers(text, expected):
    options = Options(custom_headers=text.split(","))
    assert options.parse_custom_headers() == expected


def test_parse_custom_headers_trims_spaces_and_keeps_colons_in_value():
    options = Options(custom_headers=[" Host : example.com:8080 "])
    assert options.parse_custom_headers() == {"Host": "example.com:8080"}


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a=b", {"a": "b"}),
        ("", {}),
        ("=b", {}),
        ("a=", {}),
        ("a=b,c=d", {"a": "b", "c": "d"}),
        ("a=b,a=b", {"a": "b"}),
        (
            "--a=a/b,c/d--z--n--m/a,--c=k,--h",
            {"--a": "a/b,c/d--z--n--m/a", "--c": "k", "--h": ""},
        ),
        (
            "--h,--a=a/b,c/d--z--n--m/a,--c=k",
            {"--h": "", "--a": "a/b,c/d--z--n--m/a", "--c": "k"},
        ),
        (
            "--a=a/b,c/d--z--n--m/a,--h,--c=k",
            {"--a": "a/b,c/d--z--n--m/a", "--h": "", "--c": "k"},
        ),
    ],
)
def test_parse_headless_optional_arguments(text, expected):
    options = Options(headless_optional_arguments=text.split(","))
    assert options.parse_headless_optional_arguments() == expected


def test_should_resume_requires_existing_file(tmp_path):
    assert Options().should_resume() is False
    missing = tmp_path / "resume.cfg"
    assert Options(resume=str(missing)).should_resume() is False
    missing.write_text("state")
    assert Options(resume=str(missing)).should_resume() is True


def test_configure_output_levels():
    logger = logging.getLogger("katana")
    previous = logger.level
    try:
        silent = Options(silent=True, debug=True).configure_output()
        assert silent > logging.CRITICAL
        assert logger.level == silent
        assert Options(debug=True).configure_output() == logging.DEBUG
        assert logger.level == logging.DEBUG
        assert Options().configure_output() == logging.INFO
    finally:
        logger.setLevel(previous)