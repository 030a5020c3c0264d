"""Lexical scanning and diagnostic call extraction."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from scan.lexer import tokenize_source
from scan.matcher import Match, build_preview, find_matches
from scan.methods import DEFAULT_METHODS, DEFAULT_RECEIVER
from scan.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


def scan_text(
    text: str,
    *,
    receiver: str = DEFAULT_RECEIVER,
    methods: Iterable[str] | None = None,
) -> list[Match]:
    """Return every diagnostic call found in ``text``.

    An unexpected internal failure is logged and reported as no matches.

    Returns
    -------
    list[Match]
        Non-overlapping matches in source order.
    """
    try:
        tokens = tokenize_source(text, receiver=receiver, methods=methods)
        return find_matches(tokens, text=text)
    except Exception:
        logger.exception("Diagnostic call scan failed; treating text as having no matches.")
        return []


__all__ = [
    "DEFAULT_METHODS",
    "DEFAULT_RECEIVER",
    "Match",
    "Token",
    "TokenKind",
    "build_preview",
    "find_matches",
    "scan_text",
    "tokenize_source",
]
