"""Helpers shared by the site parsers."""

import re
from decimal import Decimal, InvalidOperation

from bs4 import BeautifulSoup, Tag

from competitive_companion.domain.exceptions import ExtractionError

SECONDS_PATTERN = re.compile(
    r"([0-9]+(?:\.[0-9]+)?)\s*(ms|milliseconds?|s|secs?|seconds?)(?![a-z])", re.I
)
MEMORY_PATTERN = re.compile(
    r"([0-9]+(?:\.[0-9]+)?)\s*"
    r"(kib|kb|kilobytes?|mib|mb|megabytes?|gib|gb|gigabytes?|m)(?![a-z])",
    re.I,
)
NUMBER_PATTERN = re.compile(r"([0-9]+(?:\.[0-9]+)?)")

_MEMORY_FACTORS = {
    "k": Decimal(1) / Decimal(1024),
    "m": Decimal(1),
    "g": Decimal(1024),
}


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def require(root: BeautifulSoup | Tag, selector: str, field: str) -> Tag:
    """Select the first element matching `selector` or raise ExtractionError."""
    element = root.select_one(selector)
    if element is None:
        raise ExtractionError(field, f"no element matches {selector!r}")
    return element


def require_all(root: BeautifulSoup | Tag, selector: str, field: str) -> list[Tag]:
    """Select every element matching `selector`; at least one must exist."""
    elements = root.select(selector)
    if not elements:
        raise ExtractionError(field, f"no element matches {selector!r}")
    return elements


def parse_time_limit_ms(text: str, pattern: re.Pattern[str] = SECONDS_PATTERN) -> int:
    """
    Convert time limit text to whole milliseconds.

    "2 secs" -> 2000, "1.5 secs" -> 1500, "500 ms" -> 500. A custom pattern
    must capture the number as group 1; its unit defaults to seconds when the
    pattern has no second group.
    """
    match = pattern.search(text)
    if not match:
        raise ExtractionError("time limit", f"unrecognized text {text.strip()!r}")

    try:
        value = Decimal(match.group(1))
    except InvalidOperation as e:
        raise ExtractionError("time limit", f"invalid number {match.group(1)!r}") from e

    unit = match.group(2).lower() if pattern.groups >= 2 and match.group(2) else "s"
    millis = value if unit.startswith("m") else value * 1000

    result = int(millis)
    if result <= 0:
        raise ExtractionError("time limit", f"non-positive value {text.strip()!r}")
    return result


def parse_memory_limit_mb(text: str, pattern: re.Pattern[str] = MEMORY_PATTERN) -> int:
    """
    Convert memory limit text ("256 megabytes", "1 GB", "65536 KB") to megabytes.

    A custom pattern must capture the number as group 1; its unit defaults to
    megabytes when the pattern has no second group.
    """
    match = pattern.search(text)
    if not match:
        raise ExtractionError("memory limit", f"unrecognized text {text.strip()!r}")

    unit = match.group(2)[0].lower() if pattern.groups >= 2 and match.group(2) else "m"
    value = Decimal(match.group(1)) * _MEMORY_FACTORS[unit]
    result = int(value)
    if result <= 0:
        raise ExtractionError("memory limit", f"non-positive value {text.strip()!r}")
    return result


def strip_leading_newlines(text: str) -> str:
    """Remove newline characters at the very start of `text` only."""
    return text.lstrip("\n")


def element_text(element: Tag) -> str:
    """Text of a sample block, turning <br> into newlines."""
    for br in element.find_all("br"):
        br.replace_with("\n")
    return element.get_text()
