"""String helpers: a minimal printf, C-style comparisons, classification
and splitting of ASCII text."""

from __future__ import annotations

import re
import sys
from itertools import islice
from typing import Any, Iterable, Iterator, TextIO

_WORD = re.compile(r"[0-9A-Za-z]+")


def _next_arg(values: Iterator[Any]) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _format_char(value: Any) -> str:
    if isinstance(value, int):
        return chr(value & 0xFF)
    return str(value)[:1]


def mini_format(fmt: str, *args: Any) -> str:
    """Expand %c, %s, %d, %i and %% in fmt; any other %x gives x itself."""
    parts: list[str] = []
    values = iter(args)
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            parts.append(char)
            continue
        spec = next(chars, None)
        if spec is None:
            parts.append("%")
        elif spec == "c":
            parts.append(_format_char(_next_arg(values)))
        elif spec == "s":
            parts.append(str(_next_arg(values)))
        elif spec in ("d", "i"):
            parts.append(str(int(_next_arg(values))))
        else:
            parts.append(spec)
    return "".join(parts)


def mini_printf(fmt: str, *args: Any, out: TextIO | None = None) -> int:
    """Write the expanded format to out (stdout by default); return its length."""
    text = mini_format(fmt, *args)
    (out if out is not None else sys.stdout).write(text)
    return len(text)


def show_word_array(words: Iterable[str], out: TextIO | None = None) -> None:
    """Write each word on its own line."""
    stream = out if out is not None else sys.stdout
    for word in words:
        stream.write(word)
        stream.write("\n")


def _ascii_lower(char: str) -> str:
    return chr(ord(char) + 32) if "A" <= char <= "Z" else char


def _ascii_upper(char: str) -> str:
    return chr(ord(char) - 32) if "a" <= char <= "z" else char


def strcmp(s1: str, s2: str) -> int:
    """Return the code difference of the first differing characters, or 0."""
    for a, b in zip(s1 + "\0", s2 + "\0"):
        if a != b:
            return ord(a) - ord(b)
    return 0


def strncmp(s1: str, s2: str, n: int) -> int:
    """Compare at most n characters, stopping where either string ends."""
    for a, b in islice(zip(s1, s2), max(n, 0)):
        if a != b:
            return ord(a) - ord(b)
    return 0


def strcasecmp(s1: str, s2: str) -> int:
    """Compare ignoring ASCII case; the difference returned is of the raw characters."""
    for a, b in zip(s1 + "\0", s2 + "\0"):
        if _ascii_lower(a) != _ascii_lower(b):
            return ord(a) - ord(b)
    return 0


def _kind(char: str) -> int:
    if "0" <= char <= "9":
        return 2
    if "a" <= char <= "z" or "A" <= char <= "Z":
        return 1
    return 0


def strcapitalize(text: str) -> str:
    """Lower-case text, then upper-case each letter that follows a non-alphanumeric."""
    result: list[str] = []
    previous = 0
    for char in map(_ascii_lower, text):
        if previous == 0 and _kind(char) == 1:
            char = _ascii_upper(char)
        result.append(char)
        previous = _kind(char)
    return "".join(result)


def str_isalpha(text: str) -> bool:
    """True if every character is an ASCII letter (an empty string counts)."""
    return all(_kind(char) == 1 for char in text)


def str_islower(text: str) -> bool:
    """True if every character is an ASCII lower-case letter."""
    return all("a" <= char <= "z" for char in text)


def str_isnum(text: str) -> bool:
    """True if every character is an ASCII digit."""
    return all("0" <= char <= "9" for char in text)


def str_isupper(text: str) -> bool:
    """True if every character is an ASCII upper-case letter."""
    return all("A" <= char <= "Z" for char in text)


def char_alpha(char: str) -> bool:
    """True for an ASCII letter or digit."""
    return _kind(char) != 0


def char_isnum(char: str) -> bool:
    """True for an ASCII digit."""
    return _kind(char) == 2


def str_to_word_array(text: str) -> list[str]:
    """Split text into its runs of ASCII letters and digits."""
    return _WORD.findall(text)


def str_to_custom_array(text: str, separator: str) -> list[str]:
    """Split text on separator, dropping empty pieces."""
    return [piece for piece in text.split(separator) if piece]


def sort_word_array(words: list[str]) -> list[str]:
    """Sort words in character-code order in place and return the list."""
    words.sort()
    return words


def strstr(text: str, needle: str) -> str | None:
    """Return text from the first place needle starts, or None.

    As with the bounded comparison used, a match may run off the end of text.
    """
    if not text:
        return None
    if not needle:
        return text
    for start in range(len(text)):
        if strncmp(text[start:], needle, len(needle)) == 0:
            return text[start:]
    return None


def strchr(text: str, char: str) -> str | None:
    """Return text from the first occurrence of char; "\\0" finds the end."""
    position = text.find(char) if char != "\0" else -1
    if position >= 0:
        return text[position:]
    if char == "\0":
        return ""
    return None