"""Numeric one-time code generation."""

import secrets


def generate_code(length: int = 6, allow_leading_zero: bool = False) -> str:
    """Return a random numeric code of exactly *length* digits.

    By default the first digit is never ``0`` (100000–999999 for six
    digits).  With *allow_leading_zero* the full zero-padded range is used.
    """
    if length < 1:
        raise ValueError("OTP length must be at least 1")
    if allow_leading_zero:
        return str(secrets.randbelow(10**length)).zfill(length)
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(10**length - low))
