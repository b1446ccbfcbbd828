"""Dot-separated path resolution over nested documents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Found:
    """A path that resolved; ``value`` may be ``None`` for an explicit null."""

    value: Any


@dataclass(frozen=True, slots=True)
class Missing:
    """A path that did not resolve."""

    path: str


Resolution = Found | Missing


def resolve(document: Any, path: str) -> Resolution:
    """Walk ``path`` through nested mappings.

    Lists are leaves: a numeric segment never indexes into a list, so
    ``"tags.0"`` on ``{"tags": ["a"]}`` is missing.
    """
    current = document
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return Missing(path)
        current = current[segment]
    return Found(current)
