"""Helpers for ordered string maps."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping


def merge_data_maps(target: MutableMapping[str, str], source: Mapping[str, str]) -> MutableMapping[str, str]:
    """Copy every entry of ``source`` into ``target`` in order and return ``target``."""
    for key, value in source.items():
        target[key] = value
    return target