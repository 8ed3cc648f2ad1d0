"""Writes crawl results to the screen, output files and response stores."""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
import sys
import threading
from collections.abc import Mapping
from typing import Any

from katana.output.custom_field import (
    CustomFieldError,
    init_custom_field_config_file,
    load_custom_fields,
    parse_custom_field_names,
)
from katana.output.dsl import DslError, evaluate
from katana.output.fields import DEFAULT_STORE_FIELD_DIR, store_fields, validate_field_names
from katana.output.file_writer import FileWriter
from katana.output.formatting import format_json, format_screen
from katana.output.options import OutputOptions
from katana.output.responses import (
    INDEX_FILE,
    format_stored_response,
    response_file_name,
    response_host,
    update_index,
)
from katana.output.result import ErrorRecord, Result

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_DIR = "katana_response"
_DECOLORIZE = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")


class OutputError(Exception):
    """Raised when a result cannot be written or is rejected by the writer."""


def _split_dir(directory: str) -> tuple[str, str, str]:
    """Return (parent for joining, parent for listing, base name)."""
    directory = os.path.normpath(directory)
    parent = os.path.dirname(directory)
    return parent, parent or ".", os.path.basename(directory)


def create_dir_name_no_clobber(directory: str) -> str:
    """Return ``directory`` if it does not exist, else the next free numbered sibling."""
    if not os.path.isdir(directory):
        return directory
    parent, listing, name = _split_dir(directory)
    try:
        entries = list(os.scandir(listing))
    except OSError:
        return name
    pattern = re.compile(f"^{re.escape(name)}(\\d+)$")
    highest = 0
    for entry in entries:
        if entry.is_dir():
            match = pattern.match(entry.name)
            if match:
                highest = max(highest, int(match.group(1)))
    return os.path.join(parent, f"{name}{highest + 1}")


def remove_dirs_with_suffix(directory: str) -> None:
    """Remove ``directory`` and every numbered sibling of it."""
    parent, listing, name = _split_dir(directory)
    try:
        entries = list(os.scandir(listing))
    except OSError:
        return
    pattern = re.compile(f"^{re.escape(name)}(\\d*)$")
    for entry in entries:
        if entry.is_dir() and pattern.match(entry.name):
            shutil.rmtree(os.path.join(parent, entry.name), ignore_errors=True)


def flatten(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Merge nested mappings into one level, dropping the keys that held them."""
    out: dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            out.update(flatten(value))
        else:
            out[key] = value
    return out


def result_to_map(result: Result) -> dict[str, Any]:
    """Return the flat variable map of a result used by match and filter conditions."""
    return flatten(result.to_dict())


def _ignorable(error: DslError) -> bool:
    if os.environ.get("SHOW_DSL_ERRORS", "").lower() == "true":
        return False
    return error.ignorable or "No parameter" in str(error)


def _eval_condition(result: Result, expression: str) -> bool:
    values = result_to_map(result)
    try:
        return evaluate(expression, values) is True
    except DslError as exc:
        if not _ignorable(exc):
            logger.error("Could not evaluate DSL expression: %s", exc)
        return False


class StandardWriter:
    """Writes results and errors according to the output options."""

    def __init__(self, options: OutputOptions) -> None:
        self.fields = options.fields
        self.json = options.json
        self.verbose = options.verbose
        self.colors = options.colors
        self.store_response = options.store_response
        self.store_response_dir = options.store_response_dir
        self.no_clobber = options.no_clobber
        self.omit_raw = options.omit_raw
        self.omit_body = options.omit_body
        self.match_regex = list(options.match_regex)
        self.filter_regex = list(options.filter_regex)
        self.extension_validator = options.extension_validator
        self.output_match_condition = options.output_match_condition
        self.output_filter_condition = options.output_filter_condition
        self.store_field_dir = options.store_field_dir or DEFAULT_STORE_FIELD_DIR
        self.store_fields: list[str] = []
        self.output_file: FileWriter | None = None
        self.error_file: FileWriter | None = None
        self._lock = threading.Lock()

        field_config = options.field_config or str(init_custom_field_config_file())
        parse_custom_field_names(field_config)
        self.custom_fields = load_custom_fields(field_config, f"{options.fields},{options.store_fields}")

        if options.fields:
            try:
                validate_field_names(options.fields, self.custom_fields)
            except CustomFieldError as exc:
                raise OutputError(f"could not validate fields: {exc}") from exc
        if options.store_fields:
            os.makedirs(self.store_field_dir, exist_ok=True)
            try:
                validate_field_names(options.store_fields, self.custom_fields)
            except CustomFieldError as exc:
                raise OutputError(f"could not validate store fields: {exc}") from exc
            self.store_fields = options.store_fields.split(",")

        try:
            self._open_files(options)
        except OutputError:
            self.close()
            raise

    def _open_files(self, options: OutputOptions) -> None:
        if options.output_file:
            try:
                self.output_file = FileWriter(options.output_file)
            except OSError as exc:
                raise OutputError(f"could not create output file: {exc}") from exc
        if options.store_response:
            directory = options.store_response_dir or DEFAULT_RESPONSE_DIR
            if options.no_clobber:
                directory = create_dir_name_no_clobber(directory)
            else:
                remove_dirs_with_suffix(directory)
            try:
                os.makedirs(directory, exist_ok=True)
                with open(os.path.join(directory, INDEX_FILE), "w", encoding="utf-8"):
                    pass
            except OSError as exc:
                raise OutputError(f"could not create index file: {exc}") from exc
            self.store_response_dir = directory
        if options.error_log_file:
            try:
                self.error_file = FileWriter(options.error_log_file)
            except OSError as exc:
                raise OutputError(f"could not create error file: {exc}") from exc

    def _matches(self, result: Result) -> bool:
        if not self.match_regex and not self.output_match_condition:
            return True
        if any(pattern.search(result.request.url) for pattern in self.match_regex):
            return True
        if self.output_match_condition:
            return _eval_condition(result, self.output_match_condition)
        return False

    def _filtered(self, result: Result) -> bool:
        if not self.filter_regex and not self.output_filter_condition:
            return False
        if any(pattern.search(result.request.url) for pattern in self.filter_regex):
            return True
        if self.output_filter_condition:
            return _eval_condition(result, self.output_filter_condition)
        return False

    def _store_response(self, result: Result) -> None:
        url = result.response.resp.url
        try:
            path = response_file_name(self.store_response_dir, response_host(url), url)
            stored = FileWriter(path)
        except (OSError, ValueError):
            return
        with stored:
            result.response.stored_response_path = os.path.abspath(path)
            data = format_stored_response(result)
            try:
                update_index(self.store_response_dir, result)
                stored.write(data)
            except (OSError, ValueError) as exc:
                raise OutputError(f"could not store response: {exc}") from exc

    def write(self, result: Result | None) -> None:
        """Write a result to the screen and the output file.

        Raises OutputError when the result is rejected or cannot be written.
        """
        if result is None:
            raise OutputError("result is nil")
        if self.store_fields:
            store_fields(result, self.store_fields, self.custom_fields, self.store_field_dir)
        if self.extension_validator is not None and not self.extension_validator.validate_path(result.request.url):
            raise OutputError("result does not match extension filter")
        if not self._matches(result):
            raise OutputError("result does not match output")
        if self._filtered(result):
            raise OutputError("result is filtered out")

        if self.store_response and result.has_response():
            self._store_response(result)

        if self.omit_raw:
            result.request.raw = ""
            if result.response is not None:
                result.response.raw = ""
        if self.omit_body and result.has_response():
            result.response.body = ""

        if self.json:
            data = format_json(result)
        else:
            data = format_screen(result, self.fields, self.verbose, self.colors)
        if not data:
            raise OutputError("result is empty")

        with self._lock:
            print(data, file=sys.stdout, flush=True)
            if self.output_file is not None:
                if not self.json:
                    data = _DECOLORIZE.sub("", data)
                try:
                    self.output_file.write(data)
                except OSError as exc:
                    raise OutputError(f"could not write to output: {exc}") from exc

    def write_error(self, error: ErrorRecord) -> None:
        """Append an error record as JSON to the error log, if one is configured."""
        data = json.dumps(error.to_dict(), separators=(",", ":"), ensure_ascii=False)
        with self._lock:
            if self.error_file is not None:
                try:
                    self.error_file.write(data)
                except OSError as exc:
                    raise OutputError(f"write to error file: {exc}") from exc

    def close(self) -> None:
        """Flush and close the output and error files."""
        if self.output_file is not None:
            self.output_file.close()
        if self.error_file is not None:
            self.error_file.close()

    def __enter__(self) -> "StandardWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()