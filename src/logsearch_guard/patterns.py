"""Regex tables for the structured PII the masker knows about.

CATEGORIES is applied in order.  Email has to run before the numeric
categories, otherwise the digit patterns chew on the local part of an
address and leave half of it behind.  Placeholders carry no digits and
no '@', so nothing later in the table can match inside them.
"""

from __future__ import annotations
import re

from .types import PatternCategory

EMAIL_PLACEHOLDER = "[EMAIL REDACTED]"
CARD_PLACEHOLDER = "[CARD NUMBER REDACTED]"
PHONE_PLACEHOLDER = "[PHONE REDACTED]"
ADDRESS_PLACEHOLDER = "[ADDRESS REDACTED]"
SSN_PLACEHOLDER = "[SSN REDACTED]"

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

_NON_DIGIT = re.compile(r"\D")
_PLACEHOLDERS = (
    EMAIL_PLACEHOLDER, CARD_PLACEHOLDER, PHONE_PLACEHOLDER, ADDRESS_PLACEHOLDER, SSN_PLACEHOLDER,
)
# An http(s) scheme with no whitespace between it and the end of the window.
# Placeholders count as URL text: they contain a space, and a URL that was
# partly masked on an earlier call must still read as a URL.
_URL_TAIL = re.compile(
    r"https?://(?:" + "|".join(re.escape(p) for p in _PLACEHOLDERS) + r"|\S)*\Z"
)


def is_plausible_phone(candidate: str) -> bool:
    """Digit count within what a dialable number can have."""
    digits = _NON_DIGIT.sub("", candidate)
    return PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS


def is_inside_url(text: str, start: int) -> bool:
    """True if position `start` sits in the path/query of an http(s) URL."""
    return _URL_TAIL.search(text, 0, start) is not None


def _phone_guard(match: re.Match) -> bool:
    if is_inside_url(match.string, match.start()):
        return False
    return is_plausible_phone(match.group())


EMAIL = PatternCategory(
    name="EMAIL",
    patterns=(
        re.compile(r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b"),
    ),
    placeholder=EMAIL_PLACEHOLDER,
)

CREDIT_CARD = PatternCategory(
    name="CREDIT_CARD",
    patterns=(
        # Visa, 13 or 16 digits
        re.compile(r"\b4\d{12}(?:\d{3})?\b"),
        # Mastercard: 51-55 and the 2221-2720 range
        re.compile(
            r"\b(?:5[1-5]\d{2}|222[1-9]|22[3-9]\d|2[3-6]\d{2}|27[01]\d|2720)\d{12}\b"
        ),
        # Amex
        re.compile(r"\b3[47]\d{13}\b"),
        # Discover
        re.compile(r"\b(?:6011|65\d{2}|64[4-9]\d|622[1-9]\d{2})\d{10,12}\b"),
        # Anything card-length with spaces or hyphens between digits
        re.compile(r"\b(?:\d[ \-]*?){13,16}\b"),
    ),
    placeholder=CARD_PLACEHOLDER,
)

PHONE = PatternCategory(
    name="PHONE",
    patterns=(
        # +528008770427, +61 468 613 312
        re.compile(r"(?<!\w)\+\d{1,4}[ .\-]?\d{1,14}(?:[ .\-]\d{1,14})*\b"),
        # +44 (0) 7876163246
        re.compile(r"(?<!\w)\+\d{1,4}[ .\-]?\(\d{1,4}\)[ .\-]?\d{1,14}(?:[ .\-]\d{1,14})*\b"),
        # +971 4 5096466/96/86
        re.compile(r"(?<!\w)\+\d{1,4}[ .\-]?\d{1,4}[ .\-]?\d{1,14}(?:/\d{1,4})+\b"),
        # 1 (800) 555-0199
        re.compile(r"\b1[ .\-]?\(?\d{3}\)?[ .\-]?\d{3}[ .\-]?\d{4}\b"),
        # 833-376-1995, 833.376.1995, 8333761995
        re.compile(r"\b\d{3}[.\-]?\d{3}[.\-]?\d{4}\b"),
        # 44 20 3051 303
        re.compile(r"\b\d{1,4} \d{1,4} \d{1,4} \d{1,4}\b"),
        # 5096466/96/86
        re.compile(r"\b\d{6,10}(?:/\d{1,4}){1,5}\b"),
        # (866) 687-3722
        re.compile(r"(?<!\w)\(\d{3}\)[ .\-]?\d{3}[ .\-]?\d{4}\b"),
        # +44 7867 254482
        re.compile(r"(?<!\w)\+\d{1,4} \d{4} \d{6}\b"),
        # +1(123)456-7890
        re.compile(r"(?<!\w)\+\d{1,4}\(\d{3}\)\d{3}-?\d{4}\b"),
        # +61 4 6861 3312
        re.compile(r"(?<!\w)\+\d{1,4} ?\d{1,4} ?\d{4} ?\d{4}\b"),
        # +528008770427
        re.compile(r"(?<!\w)\+\d{10,15}\b"),
        # +971 4 5096466
        re.compile(r"(?<!\w)\+\d{1,4} ?\d{1,4} ?\d{1,4} ?\d{1,4}\b"),
        # Catch-all digit groups; the guard throws out the short ones
        re.compile(r"\b\d{1,4}[ \-]?\d{1,4}[ \-]?\d{1,4}[ \-]?\d{1,4}\b"),
    ),
    placeholder=PHONE_PLACEHOLDER,
    guard=_phone_guard,
    until_stable=True,
)

_STREET_TYPES = (
    "Avenue|Ave|Street|St|Road|Rd|Boulevard|Blvd|Lane|Ln|"
    "Drive|Dr|Court|Ct|Plaza|Plz|Square|Sq"
)

ADDRESS = PatternCategory(
    name="ADDRESS",
    patterns=(
        # 221 Baker Street, 1600 Pennsylvania Ave
        re.compile(
            rf"\b\d+[ \t]+[A-Za-z0-9 \t,.\-]+\b(?:{_STREET_TYPES})\b",
            re.IGNORECASE,
        ),
        re.compile(r"\bP\.?O\.?\s*Box\s+\d+\b", re.IGNORECASE),
        # UK postcode, SW1A 1AA
        re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]? \d[A-Z]{2}\b"),
        # US ZIP and ZIP+4
        re.compile(r"\b\d{5}(?:-\d{4})?\b"),
    ),
    placeholder=ADDRESS_PLACEHOLDER,
)

SSN = PatternCategory(
    name="SSN",
    patterns=(
        re.compile(r"\b\d{3}-?\d{2}-?\d{4}\b"),
    ),
    placeholder=SSN_PLACEHOLDER,
)

CATEGORIES: tuple[PatternCategory, ...] = (EMAIL, CREDIT_CARD, PHONE, ADDRESS, SSN)
