"""Group identifier occurrences by name for consistent highlighting.

Classification runs in two stages:

1. :func:`classify_tokens` streams decoded tokens into three accumulators:
   confirmed variable ranges, provisional parameter ranges, and a per-name
   flag recording whether any parameter occurrence was a declaration.
2. :func:`reconcile` promotes declared parameter names into the variable
   grouping and drops the rest.

:func:`ranges_by_name` runs the whole pipeline for one token stream.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .config import HighlightOptions
from .language_policies import resolve_language_policy
from .semantic_tokens import SemanticToken, SemanticTokenLegend, TokenRange, decode_semantic_tokens

if TYPE_CHECKING:
    from .source import SourceTextOf

logger = logging.getLogger(__name__)

# Names this short are treated as noise unless globals are highlighted.
MIN_NAME_LENGTH = 3


@dataclass
class ClassificationState:
    """Accumulators for a single token stream."""

    variable_ranges: dict[str, list[TokenRange]] = field(default_factory=dict)
    parameter_ranges: dict[str, list[TokenRange]] = field(default_factory=dict)
    declared: dict[str, bool] = field(default_factory=dict)


def is_highlight_candidate(token: SemanticToken, options: HighlightOptions) -> bool:
    """Inclusion filter for variable and parameter tokens."""
    if options.highlight_globals:
        return True
    return "global" not in token.modifiers and len(token.text) >= MIN_NAME_LENGTH


def classify_token(
    state: ClassificationState,
    token: SemanticToken,
    options: HighlightOptions,
) -> None:
    """Add one decoded token to the accumulators in *state*."""
    name = token.text
    if is_highlight_candidate(token, options):
        if token.token_type == "variable":
            state.variable_ranges.setdefault(name, []).append(token.range)
        # Some backends reuse the parameter kind for label targets and never
        # mark them as declarations.
        elif token.token_type == "parameter" and "label" not in token.modifiers:
            state.declared.setdefault(name, False)
            if "declaration" in token.modifiers:
                state.declared[name] = True
            state.parameter_ranges.setdefault(name, []).append(token.range)

    # Classes skip the inclusion filter.
    if options.highlight_classes and token.token_type == "class":
        state.variable_ranges.setdefault(name, []).append(token.range)


def classify_tokens(
    tokens: Iterable[SemanticToken],
    options: HighlightOptions,
    state: ClassificationState | None = None,
) -> ClassificationState:
    """Run the streaming classify stage over *tokens*."""
    if state is None:
        state = ClassificationState()
    count = 0
    for token in tokens:
        classify_token(state, token, options)
        count += 1
    logger.debug("Classified %d semantic tokens", count)
    return state


def reconcile(state: ClassificationState) -> dict[str, list[TokenRange]]:
    """Merge declared parameter names into the variable grouping.

    Names never seen with a declaration are discarded.  For names present in
    both buckets, parameter ranges follow the variable ranges in their
    original order.  Returns a new mapping; *state* is left untouched.
    """
    result = {name: list(ranges) for name, ranges in state.variable_ranges.items()}
    dropped = 0
    for name, is_declared in state.declared.items():
        if not is_declared:
            dropped += 1
            continue
        result.setdefault(name, []).extend(state.parameter_ranges[name])

    logger.debug(
        "Reconciled %d parameter names (%d promoted, %d dropped)",
        len(state.declared),
        len(state.declared) - dropped,
        dropped,
    )
    return result


def ranges_by_name(
    data: list[int],
    legend: SemanticTokenLegend,
    source_text_of: SourceTextOf,
    highlight_globals: bool = False,
    highlight_classes: bool = False,
    language_id: str | None = None,
) -> dict[str, list[TokenRange]]:
    """Decode a semantic token stream into source ranges grouped by identifier name.

    Raises :class:`~tokenhue.source.SourceUnavailable` if *source_text_of*
    cannot resolve a range; no partial result is produced in that case.
    """
    options = HighlightOptions(
        highlight_globals=highlight_globals,
        highlight_classes=highlight_classes,
    )
    state = classify_tokens(decode_semantic_tokens(data, legend, source_text_of), options)
    resolve_language_policy(language_id).finalize_declarations(state.declared)
    return reconcile(state)
