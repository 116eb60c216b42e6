# FILE: snapcode/services/code_sanitizer.py
"""
Conservative cleanup of model-generated component source

Fixes artifacts that models commonly leave behind and that stop the
component from compiling:
- Stray quotes after a closing brace in JSX attributes
- Trailing quotes after event handler attributes
- Lone backticks at line ends
- Lines holding nothing but a quote
- Dangling opening quotes before a closing token (ternaries and friends)
- Control characters

Every rule is anchored to a clearly erroneous construct so valid source
passes through unchanged.
"""
import logging
import re
from typing import Callable

from snapcode.services.syntax_check import count_unescaped, dangling_quote, next_non_blank_line

logger = logging.getLogger(__name__)

# Line starts that end the expression a dangling quote belongs to
SANITIZE_CLOSERS = ("}", ")", "]", ",", ";", "`")

# Upper bound on full passes over the step sequence
MAX_SANITIZE_PASSES = 3

_BRACE_QUOTE_RE = re.compile(r"\}(['\"])[ \t]*(?=>|$)")
_HANDLER_QUOTE_RE = re.compile(r"(?<![\w'\"])(on\w+=\{[^}]*\})(['\"]+)")
_QUOTE_ONLY_LINE_RE = re.compile(r"^[ \t]*['\"][ \t]*(?=\r?$)", re.MULTILINE)
_TERNARY_QUOTE_RE = re.compile(r"(:[ \t]*)(['\"])[ \t]*(\r?\n\s*[}\)\];,`])")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]+")


def sanitize_generated_code(text: str) -> str:
    """
    Apply small, safe fixes to model-generated code.

    Steps run in order; a step that fails is skipped and its input kept,
    so this function never raises. One fix can expose another (dropping a
    backtick can leave a quote after a brace), so the sequence is repeated
    until the text stops changing.

    Args:
        text: Raw text returned by the model

    Returns:
        Text with the known artifacts removed
    """
    if text is None:
        return ""
    text = str(text)

    for _ in range(MAX_SANITIZE_PASSES):
        previous = text
        text = _apply_steps(text)
        if text == previous:
            break

    return text


def _apply_steps(text: str) -> str:
    for name, step in SANITIZE_STEPS:
        try:
            text = step(text)
        except Exception as e:
            logger.warning(f"[SANITIZE] Step '{name}' failed, keeping its input: {e}")
    return text


def _map_lines(text: str, fn: Callable[[str], str]) -> str:
    """Apply fn to each line body, keeping LF/CRLF endings intact"""
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if line.endswith("\r"):
            lines[i] = fn(line[:-1]) + "\r"
        else:
            lines[i] = fn(line)
    return "\n".join(lines)


def remove_quote_after_brace(text: str) -> str:
    """onClick={handle}' -> onClick={handle} (only when the quote is unmatched on its line)"""

    def fix_line(line: str) -> str:
        def replace(match):
            if count_unescaped(line, match.group(1)) % 2 == 0:
                return match.group(0)
            return "}"

        return _BRACE_QUOTE_RE.sub(replace, line)

    return _map_lines(text, fix_line)


def remove_handler_trailing_quote(text: str) -> str:
    """
    onChange={(e) => set(e.target.value)}" -> onChange={(e) => set(e.target.value)}

    Quotes that close a string literal on the same line are kept.
    """

    def fix_line(line: str) -> str:
        def replace(match):
            quotes = match.group(2)
            for quote in set(quotes):
                count = count_unescaped(line, quote)
                if count % 2 == 0 and (count - quotes.count(quote)) % 2 == 1:
                    return match.group(0)
            return match.group(1)

        return _HANDLER_QUOTE_RE.sub(replace, line)

    return _map_lines(text, fix_line)


def remove_dangling_backtick(text: str) -> str:
    """
    Drop a lone backtick at the end of a line.

    Only runs when the text holds an odd number of backticks, and only when
    the last backtick of the text is that lone line-end one. An earlier
    backtick may open a valid multi-line template; dropping it would re-pair
    the rest and hide the real break from the syntax check.
    """
    if count_unescaped(text, "`") % 2 == 0:
        return text

    lines = text.split("\n")
    for i in range(len(lines) - 1, -1, -1):
        if count_unescaped(lines[i], "`") == 0:
            continue
        ending = "\r" if lines[i].endswith("\r") else ""
        body = lines[i].rstrip()
        if body.endswith("`") and not body.endswith("\\`") and count_unescaped(body, "`") == 1:
            lines[i] = body[:-1] + ending
            return "\n".join(lines)
        return text
    return text


def remove_quote_only_lines(text: str) -> str:
    """Empty out lines that contain a single quote character and nothing else"""
    return _QUOTE_ONLY_LINE_RE.sub("", text)


def fix_ternary_dangling_quote(text: str) -> str:
    """
    isFocused ? 'shadow-inner' : '
    }
    becomes  isFocused ? 'shadow-inner' : ''
    """

    def replace(match):
        line_start = text.rfind("\n", 0, match.start()) + 1
        line = text[line_start:match.end(2)]
        if count_unescaped(line, match.group(2)) % 2 == 0:
            return match.group(0)
        return f"{match.group(1)}''{match.group(3)}"

    return _TERNARY_QUOTE_RE.sub(replace, text)


def fix_dangling_quotes_before_closers(text: str) -> str:
    """
    Turn a trailing unmatched quote into '' when the next non-blank line
    starts with a closing token. Blank lines in between are skipped.
    """
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if dangling_quote(line) is None:
            continue
        if not next_non_blank_line(lines, i).startswith(SANITIZE_CLOSERS):
            continue
        ending = "\r" if line.endswith("\r") else ""
        lines[i] = line.rstrip()[:-1] + "''" + ending
    return "\n".join(lines)


def strip_control_characters(text: str) -> str:
    """Remove non-printable control characters (tab, LF and CR are kept)"""
    return _CONTROL_CHARS_RE.sub("", text)


# Adjacent quotes are deliberately never collapsed: '' is a valid empty
# string literal and must survive untouched.
SANITIZE_STEPS = (
    ("quote_after_brace", remove_quote_after_brace),
    ("handler_trailing_quote", remove_handler_trailing_quote),
    ("dangling_backtick", remove_dangling_backtick),
    ("quote_only_lines", remove_quote_only_lines),
    ("ternary_dangling_quote", fix_ternary_dangling_quote),
    ("dangling_quotes_before_closers", fix_dangling_quotes_before_closers),
    ("control_characters", strip_control_characters),
)
