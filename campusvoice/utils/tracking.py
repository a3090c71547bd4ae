"""Tracking codes handed to anonymous reporters.

Format: ``CV-`` + base-36 millisecond timestamp + 3 random base-36 chars,
all uppercase, e.g. ``CV-MGX3K2A1B7Q``. Codes are not unique by
construction; the complaint store enforces uniqueness and retries.
"""

import secrets
import time

PREFIX = "CV-"
ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
RANDOM_SUFFIX_LENGTH = 3


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_complaint_id() -> str:
    timestamp = to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(RANDOM_SUFFIX_LENGTH))
    return f"{PREFIX}{timestamp}{suffix}"


def normalize_complaint_id(code: str) -> str:
    # Lookups are case-insensitive
    return code.strip().upper()
