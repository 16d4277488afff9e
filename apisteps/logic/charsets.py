"""Named alphabets and random data generators.

Every generator draws from the module-level `random` source; reseeding is left
to whoever runs the suite.
"""

from __future__ import annotations

import random
import string
from typing import Dict, List

from apisteps.errors import ArgumentError, UnsupportedCharsetError

ENGLISH = string.ascii_letters
ASCII = string.ascii_letters + string.digits
POLISH = "aąbcćdeęfghijklłmnńoóprsśtuwyzźżAĄBCĆDEĘFGHIJKLŁMNŃOÓPRSŚTUWYZŹŻ"
RUSSIAN = "абвгдеёжзийклмнопрстуфхцчшщъыьэюяАБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"
UNICODE = "".join(dict.fromkeys(ASCII + POLISH + RUSSIAN + "äöüßÄÖÜéèêàçñÑ€"))

CHARSETS: Dict[str, str] = {
    "ascii": ASCII,
    "unicode": UNICODE,
    "polish": POLISH,
    "english": ENGLISH,
    "russian": RUSSIAN,
}


def charset_for(name: str) -> str:
    """Look up a charset by case-insensitive name."""
    try:
        return CHARSETS[name.lower()]
    except KeyError:
        raise UnsupportedCharsetError(name, CHARSETS) from None


def _check_range(from_: int, to: int) -> None:
    if from_ < 0 or to < 0:
        raise ArgumentError(f"range bounds must not be negative, got [{from_}, {to}]")
    if from_ > to:
        raise ArgumentError(f"range start {from_} is greater than range end {to}")


def random_runes(charset: str, from_: int, to: int) -> str:
    """Random string of length in [from_, to] drawn from charset."""
    _check_range(from_, to)
    length = random.randint(from_, to)
    return "".join(random.choice(charset) for _ in range(length))


def random_sentence(charset: str, from_: int, to: int, min_word_length: int, max_word_length: int) -> str:
    """Random sentence of [from_, to] words, each word [min, max] characters long."""
    _check_range(from_, to)
    _check_range(min_word_length, max_word_length)
    words: List[str] = [
        random_runes(charset, min_word_length, max_word_length)
        for _ in range(random.randint(from_, to))
    ]
    return " ".join(words)


def random_int(from_: int, to: int) -> int:
    _check_range(from_, to)
    return random.randint(from_, to)


def random_float(from_: int, to: int) -> float:
    _check_range(from_, to)
    return random.uniform(from_, to)


def random_bool() -> bool:
    return random.random() < 0.5


__all__ = [
    "CHARSETS",
    "charset_for",
    "random_runes",
    "random_sentence",
    "random_int",
    "random_float",
    "random_bool",
]
