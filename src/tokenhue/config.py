"""Highlighting options and their environment-variable configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

GLOBALS_ENV_VAR = "TOKENHUE_HIGHLIGHT_GLOBALS"
CLASSES_ENV_VAR = "TOKENHUE_HIGHLIGHT_CLASSES"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from environment variable *name*."""
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class HighlightOptions:
    """Which identifier groups are highlighted.

    ``highlight_globals`` lifts the filter that otherwise suppresses names that
    are tagged ``global`` or are two characters or shorter.
    ``highlight_classes`` folds class-kind tokens into the result.
    """

    highlight_globals: bool = False
    highlight_classes: bool = False

    @classmethod
    def from_env(cls) -> HighlightOptions:
        return cls(
            highlight_globals=_get_env_flag(GLOBALS_ENV_VAR, cls.highlight_globals),
            highlight_classes=_get_env_flag(CLASSES_ENV_VAR, cls.highlight_classes),
        )

    def override(
        self,
        *,
        highlight_globals: bool | None = None,
        highlight_classes: bool | None = None,
    ) -> HighlightOptions:
        """Return a copy with the explicitly given flags replaced."""
        return HighlightOptions(
            highlight_globals=(
                self.highlight_globals if highlight_globals is None else highlight_globals
            ),
            highlight_classes=(
                self.highlight_classes if highlight_classes is None else highlight_classes
            ),
        )
