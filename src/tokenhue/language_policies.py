"""Per-language policies for analysis backend quirks.

Each policy encodes what a language's analysis backend does (or fails to do)
when reporting semantic tokens, and patches the classification state before
parameter-like names are reconciled.  Policies are resolved from the document's
``languageId``.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class LanguagePolicy(Protocol):
    """Backend-specific adjustment applied at the end of a token stream."""

    language_id: str

    def finalize_declarations(self, declared: dict[str, bool]) -> None:
        """Adjust the per-name declaration flags in place."""
        ...


class DefaultPolicy:
    """Trust declaration modifiers as reported."""

    language_id = ""

    def finalize_declarations(self, declared: dict[str, bool]) -> None:
        del declared


# ---------------------------------------------------------------------------
# clangd  (C++)
# ---------------------------------------------------------------------------
# clangd never reports the ``declaration`` modifier on parameter tokens, so
# every parameter-like name would be dropped during reconciliation.  All names
# are treated as declared, which also highlights ambiguous occurrences.
# ---------------------------------------------------------------------------


class ForceAllDeclaredPolicy:
    """Mark every parameter-like name as declared."""

    def __init__(self, language_id: str) -> None:
        self.language_id = language_id

    def finalize_declarations(self, declared: dict[str, bool]) -> None:
        for name in declared:
            declared[name] = True


_DEFAULT_POLICY = DefaultPolicy()

_POLICIES: dict[str, LanguagePolicy] = {
    "cpp": ForceAllDeclaredPolicy("cpp"),
}


def resolve_language_policy(language_id: str | None) -> LanguagePolicy:
    """Return the policy registered for *language_id*, or the default policy."""
    policy = _POLICIES.get(language_id or "")
    if policy is None:
        return _DEFAULT_POLICY
    logger.debug("Using %s for language %r", type(policy).__name__, language_id)
    return policy


def registered_languages() -> list[str]:
    """Return the language ids that carry a non-default policy."""
    return sorted(_POLICIES)
