# eventhost/utils/validators.py
"""
Input validation utilities.
"""

import re
from typing import Iterable, List

# local@domain.tld with at least one dot in the domain and a 2+ letter TLD
EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_valid_email(email: str) -> bool:
    """
    Check an address against the email-syntax regex.

    Examples:
        "a@b.co" -> True
        "a@b" -> False
        "not-an-email" -> False
    """
    if not isinstance(email, str):
        return False
    return EMAIL_REGEX.fullmatch(email) is not None


def find_invalid_emails(emails: Iterable[str]) -> List[str]:
    """Return the addresses that fail validation, in input order."""
    return [email for email in emails if not is_valid_email(email)]


def dedupe_preserving_order(values: Iterable[str]) -> List[str]:
    seen = set()
    unique = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique
