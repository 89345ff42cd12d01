"""
National Identity Number (RUT) Validation

Modulo-11 checksum used at patient intake. Body digits are weighted from the
least significant digit with the cycle 2..7; the remainder of the weighted
sum selects the check character ("0", "k", or 11 - remainder).

Every function here is total: malformed input returns False/None instead of
raising, so the validator can run on each keystroke of an intake form.
"""
from __future__ import annotations

from typing import Optional

MIN_NORMALIZED_LENGTH = 8     # 7 body digits + check character
MAX_NORMALIZED_LENGTH = 9     # 8 body digits + check character

_FIRST_WEIGHT = 2
_LAST_WEIGHT = 7
_MODULUS = 11

_VALID_CHECK_CHARACTERS = frozenset("0123456789k")


def normalize_identity(raw: object) -> Optional[str]:
    """
    Strip the group separators and the check-character hyphen.

    Returns the compact lower-case form ("123456785", "7654321k"),
    or None if `raw` is not a string.
    """
    if not isinstance(raw, str):
        return None
    return raw.strip().replace(".", "").replace("-", "", 1).lower()


def compute_check_character(body: str) -> Optional[str]:
    """
    Expected check character for a string of body digits.

    Returns None when `body` is empty or contains a non-digit.
    """
    if not body or not body.isdigit() or not body.isascii():
        return None

    total = 0
    weight = _FIRST_WEIGHT
    for digit in reversed(body):
        total += int(digit) * weight
        weight = _FIRST_WEIGHT if weight == _LAST_WEIGHT else weight + 1

    remainder = total % _MODULUS
    if remainder == 0:
        return "0"
    if remainder == 1:
        return "k"
    return str(_MODULUS - remainder)


def validate_identity(raw: object) -> bool:
    """
    Validate a RUT such as "12.345.678-5" or "7654321-K".

    Returns True iff the normalised string is 8-9 characters long and its
    last character matches the checksum of the preceding body digits.
    """
    compact = normalize_identity(raw)
    if compact is None:
        return False

    if not MIN_NORMALIZED_LENGTH <= len(compact) <= MAX_NORMALIZED_LENGTH:
        return False

    body, check = compact[:-1], compact[-1]
    if check not in _VALID_CHECK_CHARACTERS:
        return False

    return compute_check_character(body) == check


def format_identity(raw: object) -> Optional[str]:
    """Canonical display form "12.345.678-5" for a valid RUT, else None."""
    if not validate_identity(raw):
        return None
    compact = normalize_identity(raw)
    body, check = compact[:-1], compact[-1]

    groups = []
    while body:
        groups.insert(0, body[-3:])
        body = body[:-3]
    return f"{'.'.join(groups)}-{check.upper()}"
