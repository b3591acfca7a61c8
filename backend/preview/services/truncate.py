"""Markup-preserving truncation entry point.

Usage::

    truncate("<p>hello <b>world</b></p>", 8)
    truncate(html, {"length": 3, "byWords": True})
    truncate(html, 20, {"keepWords": True, "excludes": ["img", ".ad"]})
"""

import logging
from dataclasses import dataclass
from typing import Any

from bs4 import Tag

from preview.core.options import TruncationOptions, resolve_options
from preview.services import document
from preview.services.budget import Budget, truncate_text
from preview.services.walker import apply_budget

logger = logging.getLogger(__name__)


@dataclass
class TruncateResult:
    output: Any
    truncated: bool


def truncate_markup(
    html: str | Tag | None,
    length: Any = None,
    options: Any = None,
) -> TruncateResult:
    """Truncate ``html`` and report whether anything was cut.

    A parsed tree (``bs4.Tag``) is mutated in place and returned as is;
    a string comes back as a string. With ``strip_tags`` the result is
    plain text.
    """
    opts = resolve_options(length, options)
    if not html or opts.is_noop:
        logger.debug("Skipping truncation (length=%r)", opts.length)
        return TruncateResult(html, False)

    in_place = isinstance(html, Tag)
    root = html if in_place else document.parse(str(html), opts.decode_entities)
    if opts.excludes:
        removed = document.remove_matching(root, opts.excludes)
        logger.debug("Removed %d excluded nodes", removed)

    budget = Budget.start(opts)
    if opts.strip_tags:
        logger.debug("Stripping tags before truncation")
        text = truncate_text(budget, document.full_text(root))
        return TruncateResult(text, budget.truncated)

    apply_budget(root, budget)
    if in_place:
        return TruncateResult(root, budget.truncated)
    return TruncateResult(
        document.serialize(root, opts.decode_entities), budget.truncated
    )


def truncate(
    html: str | Tag | None,
    length: int | dict | TruncationOptions | None = None,
    options: dict | TruncationOptions | None = None,
):
    """Truncate ``html`` to ``length`` characters (or words) of text."""
    return truncate_markup(html, length, options).output


def truncate_plain(text: str, length: Any = None, options: Any = None) -> TruncateResult:
    """Truncate plain text with the same counting rules, no markup involved."""
    opts = resolve_options(length, options)
    if not text or opts.is_noop:
        return TruncateResult(text, False)
    budget = Budget.start(opts)
    return TruncateResult(truncate_text(budget, text), budget.truncated)
