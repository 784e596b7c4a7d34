"""
Lexical line classifier.

Blank lines and single-line comments are always accepted, whatever the
language, before any language rule runs.
"""

from typing import Optional, Tuple

from .verdict import Verdict

COMMENT_MARKERS: Tuple[str, ...] = ("//", "#", "/*", "*")


def normalize(line: str) -> str:
    """Trim surrounding whitespace"""
    return line.strip()


def is_comment(trimmed: str) -> bool:
    return trimmed.startswith(COMMENT_MARKERS)


def classify(line: str) -> Optional[Verdict]:
    """
    Resolve lines that never need a language rule.

    Returns a valid verdict for blank and comment lines, or None when the
    line has to go through the language rule set.
    """
    trimmed = normalize(line)
    if not trimmed or is_comment(trimmed):
        return Verdict.ok()
    return None
