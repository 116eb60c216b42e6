# FILE: snapcode/services/syntax_check.py
"""
Heuristic syntax damage detection for model-generated component source

No grammar is used: the checks count delimiters and look at line
boundaries, so the verdict is a cheap best-effort signal that may produce
false positives and false negatives.

Checks (any one marks the text as likely broken):
1. Odd number of unescaped backticks (unterminated template literal)
2. Odd number of unescaped single or double quotes outside template literals
3. A line ending in an unmatched quote followed by a closing token
4. Unequal counts for {}, () or []
"""
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

# Tokens that close an expression when they start the following line
CLOSING_TOKENS = ("}", ")", "]", ",", ";")

BRACKET_PAIRS = (("{", "}"), ("(", ")"), ("[", "]"))

_TEMPLATE_LITERAL_RE = re.compile(r"(?<!\\)`(?:\\[\s\S]|[^\\`])*`")


def count_unescaped(text: str, char: str) -> int:
    """Count occurrences of char that are not preceded by a backslash"""
    return len(re.findall(r"(?<!\\)" + re.escape(char), text))


def next_non_blank_line(lines: List[str], index: int) -> str:
    """Return the first non-blank line after lines[index], stripped ('' if none)"""
    for line in lines[index + 1:]:
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


def dangling_quote(line: str) -> Optional[str]:
    """
    Return the quote character a line ends with when that quote is unmatched.

    Unmatched means the line holds an odd number of unescaped quotes of
    that kind, so `'a',` or `'b'` never qualify while `x ? 'on' : '` does.
    """
    body = line.rstrip()
    if not body or body[-1] not in ("'", '"'):
        return None
    quote = body[-1]
    if body.endswith("\\" + quote):
        return None
    if count_unescaped(body, quote) % 2 == 0:
        return None
    return quote


def has_dangling_quote_before_closer(text: str, closers=CLOSING_TOKENS) -> bool:
    """True if a line ends in an unmatched quote and the next non-blank line starts with a closer"""
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if dangling_quote(line) is None:
            continue
        if next_non_blank_line(lines, i).startswith(closers):
            return True
    return False


def is_likely_broken(text: str) -> bool:
    """
    Inspect generated source for structural evidence of a syntax error.

    Never raises: anything unexpected is logged and reported as not broken,
    which leaves the text untouched downstream.
    """
    try:
        return _is_likely_broken(text or "")
    except Exception as e:
        logger.warning(f"[SYNTAX CHECK] Check failed, assuming intact: {e}")
        return False


def _is_likely_broken(text: str) -> bool:
    if count_unescaped(text, "`") % 2 == 1:
        logger.debug("[SYNTAX CHECK] Unterminated template literal")
        return True

    # Quotes inside template literals are free text
    without_templates = _TEMPLATE_LITERAL_RE.sub("", text)
    if count_unescaped(without_templates, "'") % 2 == 1:
        logger.debug("[SYNTAX CHECK] Unbalanced single quotes")
        return True
    if count_unescaped(without_templates, '"') % 2 == 1:
        logger.debug("[SYNTAX CHECK] Unbalanced double quotes")
        return True

    if has_dangling_quote_before_closer(text):
        logger.debug("[SYNTAX CHECK] Dangling quote before closing token")
        return True

    for opening, closing in BRACKET_PAIRS:
        if text.count(opening) != text.count(closing):
            logger.debug(f"[SYNTAX CHECK] Unbalanced {opening}{closing}")
            return True

    return False
