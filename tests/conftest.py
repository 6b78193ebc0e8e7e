"""Shared fixtures for semantic token tests."""

import pytest

from tokenhue.config import CLASSES_ENV_VAR, GLOBALS_ENV_VAR
from tokenhue.semantic_tokens import SemanticTokenLegend


@pytest.fixture(autouse=True)
def _clear_highlight_env(monkeypatch):
    """Keep highlight configuration from leaking in from the environment."""
    monkeypatch.delenv(GLOBALS_ENV_VAR, raising=False)
    monkeypatch.delenv(CLASSES_ENV_VAR, raising=False)


@pytest.fixture()
def highlight_legend() -> SemanticTokenLegend:
    return SemanticTokenLegend(
        token_types=("variable", "parameter", "class", "function", "property"),
        token_modifiers=("declaration", "global", "label", "readonly"),
    )
