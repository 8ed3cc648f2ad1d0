import re

import pytest

from katana.output.options import OutputOptions


def test_string_patterns_are_compiled():
    options = OutputOptions(match_regex=[r"^https://"], filter_regex=[re.compile("logout")])
    assert options.match_regex[0].search("https://example.com") is not None
    assert options.match_regex[0].search("http://example.com") is None
    assert options.filter_regex[0].search("/logout") is not None


def test_invalid_pattern_raises():
    with pytest.raises(re.error):
        OutputOptions(match_regex=["("])


def test_default_lists_are_independent():
    first = OutputOptions()
    second = OutputOptions()
    first.match_regex.append(re.compile("x"))
    assert second.match_regex == []
    assert second.extension_validator is None