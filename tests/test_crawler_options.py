import time

import pytest

from katana.config.crawler_options import CrawlerOptions, RateLimiter, new_crawler_options
from katana.config.options import Options


@pytest.fixture
def field_config(tmp_path):
    path = tmp_path / "field-config.yaml"
    path.write_text("- name: email\n  type: regex\n  regex:\n    - 'x+'\n", encoding="utf-8")
    return str(path)


def test_rate_limiter_allows_burst_then_waits():
    limiter = RateLimiter(2, 0.3)
    assert limiter.max_count == 2
    assert limiter.period == 0.3
    start = time.monotonic()
    limiter.take()
    limiter.take()
    burst_elapsed = time.monotonic() - start
    limiter.take()
    total_elapsed = time.monotonic() - start
    assert burst_elapsed < 0.2
    assert total_elapsed >= 0.2


@pytest.mark.parametrize("count, period", [(0, 1.0), (-1, 1.0), (1, 0)])
def test_rate_limiter_rejects_bad_arguments(count, period):
    with pytest.raises(ValueError):
        RateLimiter(count, period)


def test_new_crawler_options_builds_helpers(field_config, tmp_path):
    output = tmp_path / "out.txt"
    options = Options(field_config=field_config, output_file=str(output), rate_limit=5)
    crawler = new_crawler_options(options)
    try:
        assert crawler.options is options
        assert output.exists()
        assert crawler.rate_limit.max_count == 5
        assert crawler.rate_limit.period == 1.0
        assert crawler.unique_filter.unique_url("https://example.com") is True
        assert crawler.unique_filter.unique_url("https://example.com") is False
    finally:
        crawler.close()


def test_rate_limit_per_minute_used_when_no_per_second(field_config):
    crawler = new_crawler_options(Options(field_config=field_config, rate_limit_minute=7))
    try:
        assert crawler.rate_limit.max_count == 7
        assert crawler.rate_limit.period == 60.0
    finally:
        crawler.close()


def test_no_rate_limit_by_default(field_config):
    crawler = new_crawler_options(Options(field_config=field_config))
    try:
        assert crawler.rate_limit is None
    finally:
        crawler.close()


def test_validate_path_uses_extension_rules(field_config):
    crawler = new_crawler_options(Options(field_config=field_config, extension_filter=["php"]))
    try:
        assert crawler.validate_path("https://example.com/logo.png") is False
        assert crawler.validate_path("https://example.com/index.php") is False
        assert crawler.validate_path("https://example.com/app.js") is True
    finally:
        crawler.close()


def test_validate_scope_with_no_scope(field_config):
    crawler = new_crawler_options(Options(field_config=field_config, no_scope=True))
    try:
        assert crawler.validate_scope("https://other.example.org/a", "example.com") is True
    finally:
        crawler.close()


def test_invalid_output_match_regex_raises(field_config):
    with pytest.raises(ValueError, match="match regex"):
        new_crawler_options(Options(field_config=field_config, output_match_regex=["("]))


def test_invalid_output_filter_regex_raises(field_config):
    with pytest.raises(ValueError, match="filter regex"):
        new_crawler_options(Options(field_config=field_config, output_filter_regex=["[a"]))


def test_crawler_options_without_helpers_accept_everything(field_config):
    writer = new_crawler_options(Options(field_config=field_config)).output_writer
    crawler = CrawlerOptions(output_writer=writer, options=Options())
    with crawler:
        assert crawler.validate_path("https://example.com/logo.png") is True
        assert crawler.validate_scope("https://anything.example.org/", "example.com") is True


def test_close_releases_filter(field_config):
    crawler = new_crawler_options(Options(field_config=field_config))
    assert crawler.unique_filter.unique_url("https://example.com/a") is True
    crawler.close()
    assert crawler.unique_filter.unique_url("https://example.com/a") is True