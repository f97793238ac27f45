"""Phone number normalization.

Learn: The phone number is the login handle, so every lookup, comparison
and write goes through normalize_phone first. Only non-digits are removed;
there is no country-code handling, so "0712345678" and "+254712345678"
are different users.
"""

import re

_NON_DIGITS = re.compile(r"\D", re.ASCII)


def normalize_phone(phone: str | None) -> str:
    """Strip every non-digit character. None becomes ""."""
    if not phone:
        return ""
    return _NON_DIGITS.sub("", phone)
