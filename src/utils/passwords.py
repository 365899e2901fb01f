"""Password generation. Every random choice is drawn from the `secrets` module."""

import secrets
import string
from dataclasses import dataclass

MIN_LENGTH = 4

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%&()[]{}"

CONSONANTS = "bcdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"


@dataclass(frozen=True)
class StrongStyle:
    length: int = 20
    use_symbols: bool = True


@dataclass(frozen=True)
class MemorableStyle:
    length: int = 16
    include_digits: bool = True


PasswordStyle = StrongStyle | MemorableStyle


def generate(style: PasswordStyle = StrongStyle()) -> str:
    if isinstance(style, StrongStyle):
        return generate_strong(style.length, style.use_symbols)
    if isinstance(style, MemorableStyle):
        return generate_memorable(style.length, style.include_digits)
    raise TypeError(f"Unknown password style: {style!r}")


def generate_strong(length: int = 20, use_symbols: bool = True) -> str:
    """
    Random password with at least one character of every included class.

    One character per class is picked first, the rest is drawn from the combined pool, and the whole is shuffled
    so the guaranteed characters do not sit at the front.
    """
    length = max(length, MIN_LENGTH)

    classes = [UPPERCASE, LOWERCASE, DIGITS]
    if use_symbols:
        classes.append(SYMBOLS)
    pool = "".join(classes)

    result = [_pick(chars) for chars in classes]
    while len(result) < length:
        result.append(_pick(pool))

    # Fisher-Yates
    for i in range(len(result) - 1, 0, -1):
        j = _random_index(i + 1)
        result[i], result[j] = result[j], result[i]

    return "".join(result)


def generate_memorable(length: int = 16, include_digits: bool = True) -> str:
    """Pronounceable password: alternating consonants and vowels, with the occasional digit."""
    length = max(length, MIN_LENGTH)

    output: list[str] = []
    use_consonant = _random_index(2) == 0

    while len(output) < length:
        syllable_length = _random_index(2) + 1
        for _ in range(syllable_length):
            if len(output) >= length:
                break
            output.append(_pick(CONSONANTS if use_consonant else VOWELS))
            use_consonant = not use_consonant

        if include_digits and len(output) < length and _random_index(8) == 0:
            output.append(_pick(DIGITS))

    return "".join(output[:length])


def _pick(chars: str) -> str:
    return chars[_random_index(len(chars))]


def _random_index(upper_bound: int) -> int:
    if upper_bound <= 0:
        raise ValueError(f"upper_bound must be positive, got {upper_bound}")
    return secrets.randbelow(upper_bound)
