"""Canonical forms of the contact fields used to recognise a returning guest."""

import string


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_phone(phone: str) -> str:
    trimmed = phone.strip()
    digits = "".join(ch for ch in trimmed if ch in string.digits)
    if trimmed.startswith("+"):
        return "+" + digits
    return digits


def identity_matches(
    email: str | None,
    phone: str | None,
    candidate_email: str | None,
    candidate_phone: str | None,
) -> bool:
    """True when the normalized email OR the normalized phone is shared."""
    if email and candidate_email and normalize_email(candidate_email) == email:
        return True
    if phone and candidate_phone and normalize_phone(candidate_phone) == phone:
        return True
    return False
