"""Small text helpers used to tokenise command lines."""

from __future__ import annotations

from itertools import groupby

__all__ = [
    "parse_number",
    "is_number",
    "squeeze",
    "strip_last",
    "split_words",
    "count_chars",
]


def parse_number(text: str) -> int:
    """Read the digits of *text* as a number.

    Characters other than digits and ``-`` are ignored. Every ``-`` in the
    text flips the sign, so an odd number of them gives a negative result.
    """
    value = 0
    minus_signs = 0
    for ch in text:
        if ch == "-":
            minus_signs += 1
        elif "0" <= ch <= "9":
            value = value * 10 + (ord(ch) - ord("0"))
    return -value if minus_signs % 2 else value


def is_number(text: str) -> bool:
    """Return True when every character of *text* is an ASCII digit.

    An empty string counts as a number.
    """
    return all("0" <= ch <= "9" for ch in text)


def squeeze(text: str, delims: str) -> str:
    """Drop leading delimiters and collapse each run of them to its first one."""
    kept = []
    previous = None
    for ch in text:
        if ch not in delims or (previous is not None and previous not in delims):
            kept.append(ch)
        previous = ch
    return "".join(kept)


def strip_last(text: str, char: str) -> str:
    """Remove one trailing *char* from *text*, if it ends with it."""
    if text and text[-1] == char:
        return text[:-1]
    return text


def split_words(text: str, delims: str) -> list[str]:
    """Split *text* into words separated by any character of *delims*.

    The text is squeezed first and one trailing space removed. Empty words
    are never produced; a text without any word yields a single empty string.
    """
    cleaned = strip_last(squeeze(text, delims), " ")
    words = [
        "".join(group)
        for is_delim, group in groupby(cleaned, key=lambda ch: ch in delims)
        if not is_delim
    ]
    return words or [""]


def count_chars(text: str, delims: str) -> int:
    """Count the characters of *text* that appear in *delims*."""
    return sum(1 for ch in text if ch in delims)