"""Template order resolution from free-text alias tokens."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from core.importer.tokens import normalize_token, parse_bullet_items
from core.templates.catalog import (
    DEFAULT_TEMPLATE_ORDER,
    TEMPLATE_TOKEN_MAP,
    TemplateId,
    is_template_id,
)

logger = logging.getLogger("versus.importer")


def resolve_template_alias(value: str) -> TemplateId | None:
    """Map one human phrasing to its canonical template id."""

    token = normalize_token(value)
    if not token:
        return None
    return TEMPLATE_TOKEN_MAP.get(token)


def parse_template_order(lines: Iterable[str]) -> list[TemplateId]:
    """Resolve bullet lines to template ids; fall back to the default order.

    Unrecognized lines are skipped.
    """

    ids: list[TemplateId] = []
    for item in parse_bullet_items(lines):
        mapped = resolve_template_alias(item)
        if mapped is None:
            logger.debug("Ignoring unrecognized template token: %r", item)
            continue
        ids.append(mapped)
    return ids if ids else list(DEFAULT_TEMPLATE_ORDER)


def parse_template_order_tokens(tokens: Iterable[str]) -> list[TemplateId]:
    """Resolve stored tokens, accepting canonical ids verbatim.

    Unlike ``parse_template_order`` this never substitutes the default order.
    """

    ids: list[TemplateId] = []
    for token in tokens:
        mapped = resolve_template_alias(token)
        if mapped is not None:
            ids.append(mapped)
        elif is_template_id(token):
            ids.append(token)  # type: ignore[arg-type]
    return ids
