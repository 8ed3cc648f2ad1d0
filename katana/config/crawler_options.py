"""Shared helpers built from the user options for the crawler."""

from __future__ import annotations

import re
import threading
import time
from dataclasses import dataclass
from urllib.parse import urlsplit

from katana.config.options import Options
from katana.output.options import OutputOptions
from katana.output.writer import StandardWriter
from katana.utils.extensions import Validator
from katana.utils.filters import Filter, SimpleFilter
from katana.utils.scope import ScopeManager


class RateLimiter:
    """Allows at most ``max_count`` calls to :meth:`take` in each ``period`` seconds."""

    def __init__(self, max_count: int, period: float) -> None:
        if max_count <= 0:
            raise ValueError("rate limit count must be positive")
        if period <= 0:
            raise ValueError("rate limit period must be positive")
        self.max_count = int(max_count)
        self.period = float(period)
        self._lock = threading.Lock()
        self._window_start = time.monotonic()
        self._used = 0

    def take(self) -> None:
        """Block until another call is allowed in the current window."""
        with self._lock:
            now = time.monotonic()
            if now - self._window_start >= self.period:
                self._window_start = now
                self._used = 0
            if self._used >= self.max_count:
                wait = self._window_start + self.period - now
                if wait > 0:
                    time.sleep(wait)
                self._window_start = time.monotonic()
                self._used = 0
            self._used += 1


@dataclass
class CrawlerOptions:
    """Helpers that the crawler shares across its workers."""

    output_writer: StandardWriter
    options: Options
    extensions_validator: Validator | None = None
    unique_filter: Filter | None = None
    scope_manager: ScopeManager | None = None
    rate_limit: RateLimiter | None = None

    def close(self) -> None:
        """Release the filter and close the output writer."""
        if self.unique_filter is not None:
            self.unique_filter.close()
        self.output_writer.close()

    def validate_path(self, path: str) -> bool:
        """Return True if the extension of ``path`` is allowed."""
        if self.extensions_validator is not None:
            return self.extensions_validator.validate_path(path)
        return True

    def validate_scope(self, absolute_url: str, root_hostname: str) -> bool:
        """Return True if ``absolute_url`` is in scope for ``root_hostname``.

        Raises ValueError if the URL cannot be parsed.
        """
        urlsplit(absolute_url)
        if self.scope_manager is not None:
            return self.scope_manager.validate(absolute_url, root_hostname)
        return True

    def __enter__(self) -> "CrawlerOptions":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _compile_all(patterns: list[str], what: str) -> list[re.Pattern[str]]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise ValueError(f"Invalid value for {what} regex option: {exc}") from exc
    return compiled


def new_crawler_options(options: Options) -> CrawlerOptions:
    """Build the crawler helpers from user options."""
    options.configure_output()
    validator = Validator(options.extensions_match, options.extension_filter)
    scope_manager = ScopeManager(
        options.scope, options.out_of_scope, options.field_scope, options.no_scope
    )
    unique_filter = SimpleFilter()

    match_regex = list(options.match_regex) + _compile_all(options.output_match_regex, "match")
    filter_regex = list(options.filter_regex) + _compile_all(options.output_filter_regex, "filter")

    output_options = OutputOptions(
        colors=not options.no_colors,
        json=options.json,
        verbose=options.verbose,
        store_response=options.store_response,
        output_file=options.output_file,
        fields=options.fields,
        store_fields=options.store_fields,
        store_response_dir=options.store_response_dir,
        no_clobber=options.no_clobber,
        store_field_dir=options.store_field_dir,
        omit_raw=options.omit_raw,
        omit_body=options.omit_body,
        field_config=options.field_config,
        error_log_file=options.error_log_file,
        match_regex=match_regex,
        filter_regex=filter_regex,
        extension_validator=validator,
        output_match_condition=options.output_match_condition,
        output_filter_condition=options.output_filter_condition,
    )
    writer = StandardWriter(output_options)

    rate_limit = None
    if options.rate_limit > 0:
        rate_limit = RateLimiter(options.rate_limit, 1.0)
    elif options.rate_limit_minute > 0:
        rate_limit = RateLimiter(options.rate_limit_minute, 60.0)

    return CrawlerOptions(
        output_writer=writer,
        options=options,
        extensions_validator=validator,
        unique_filter=unique_filter,
        scope_manager=scope_manager,
        rate_limit=rate_limit,
    )