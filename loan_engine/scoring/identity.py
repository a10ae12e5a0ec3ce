"""
Estonian personal identity code (isikukood) handling.

Layout of the 11-digit code:

    G YY MM DD SSS C
    | |  |  |  |   +-- check digit
    | |  |  |  +------ sequence number
    | +--+--+--------- birth date within the century
    +----------------- century and gender marker

Structural and checksum validation is delegated to python-stdnum. Age
derivation only models the 1900s and 2000s century bands.
"""
from datetime import date
from typing import Optional

from stdnum.ee import ik

# Markers that place a birth in the 2000s for age derivation
TWENTY_FIRST_CENTURY_MARKERS = frozenset({"5", "6"})


class InvalidIdentityCodeError(ValueError):
    """Identity code cannot be parsed into the data it should carry."""

    pass


def _is_ascii_digits(value: str) -> bool:
    # str.isdigit() also accepts superscripts and other scripts' digits
    return value.isascii() and value.isdigit()


def is_valid_identity_code(code: Optional[str]) -> bool:
    """
    Return True when the code is a valid isikukood.

    The code must be given exactly as digits; stdnum would otherwise strip
    separators that the later stages do not expect.
    """
    if not isinstance(code, str) or not _is_ascii_digits(code):
        return False
    return ik.is_valid(code)


def birth_date_from_code(code: str) -> date:
    """
    Extract the birth date used for the age check.

    Only two century bands are modelled: markers 5 and 6 mean the 2000s,
    everything else the 1900s.

    Raises:
        InvalidIdentityCodeError: if the date fields are not digits or do
            not form a real calendar date
    """
    fields = code[1:7]
    if len(fields) != 6 or not _is_ascii_digits(fields):
        raise InvalidIdentityCodeError(
            f"Invalid birth date in personal ID code: {fields!r}"
        )

    century = 2000 if code[0] in TWENTY_FIRST_CENTURY_MARKERS else 1900
    try:
        return date(century + int(fields[0:2]), int(fields[2:4]), int(fields[4:6]))
    except ValueError as e:
        raise InvalidIdentityCodeError(
            f"Invalid birth date in personal ID code: {fields}"
        ) from e


def last_four_digits(code: str) -> int:
    """Return the trailing four digits of the code as an integer."""
    tail = code[-4:]
    if len(tail) != 4 or not _is_ascii_digits(tail):
        raise InvalidIdentityCodeError(f"Personal ID code has no numeric suffix: {code!r}")
    return int(tail)


def mask_identity_code(code: str) -> str:
    """Hide the sequence and check digits so the code can be logged."""
    code = code or ""
    return code[:7] + "*" * max(len(code) - 7, 0)
