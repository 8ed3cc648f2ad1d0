"""Configuration of the output writer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from katana.utils.extensions import Validator

PatternLike = Union[str, "re.Pattern[str]"]


def _compiled(patterns: list) -> list[re.Pattern[str]]:
    return [p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns]


@dataclass
class OutputOptions:
    """Settings for how and where crawl results are written.

    Match and filter expressions may be given as strings; they are compiled.
    """

    colors: bool = False
    json: bool = False
    verbose: bool = False
    store_response: bool = False
    no_clobber: bool = False
    omit_raw: bool = False
    omit_body: bool = False
    output_file: str = ""
    fields: str = ""
    store_fields: str = ""
    store_response_dir: str = ""
    store_field_dir: str = ""
    field_config: str = ""
    error_log_file: str = ""
    match_regex: list = field(default_factory=list)
    filter_regex: list = field(default_factory=list)
    extension_validator: Validator | None = None
    output_match_condition: str = ""
    output_filter_condition: str = ""

    def __post_init__(self) -> None:
        self.match_regex = _compiled(list(self.match_regex))
        self.filter_regex = _compiled(list(self.filter_regex))