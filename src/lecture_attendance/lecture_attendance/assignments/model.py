from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Option:
    """Selectable id/label pair for one cascading selection step."""

    id: str
    name: str


@dataclass(frozen=True)
class SubjectOption:
    id: str
    name: str
    code: str
