from katana.utils.extensions import Validator, normalize_extension


def test_match_list():
    validator = Validator([".go"], None)
    assert validator.validate_path("main.go") is True
    assert validator.validate_path("main.php") is False


def test_filter_list():
    validator = Validator(None, [".php"])
    assert validator.validate_path("main.php") is False
    assert validator.validate_path("main.go") is True


def test_match_bypasses_default_denylist():
    validator = Validator(["png"], None)
    assert validator.validate_path("main.png") is True


def test_default_denylist_applies():
    validator = Validator()
    assert validator.validate_path("https://example.com/image.PNG") is False
    assert validator.validate_path("https://example.com/index.php") is True


def test_match_requires_extension():
    validator = Validator(["js"])
    assert validator.validate_path("https://example.com/dir/") is False
    assert validator.validate_path("https://example.com/app.js?x=1") is True


def test_normalize_extension():
    assert normalize_extension("PNG") == ".png"
    assert normalize_extension(".Go") == ".go"