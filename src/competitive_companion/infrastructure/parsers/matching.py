"""URL match patterns."""

import re
from collections.abc import Iterable
from functools import lru_cache


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """
    Compile a URL glob into a regex.

    `*` matches any run of characters inside one path or query segment (no
    `/`). Everything else is literal. The whole URL must match, case-sensitively.
    """
    parts = (re.escape(part) for part in pattern.split("*"))
    return re.compile("^" + "[^/]*".join(parts) + "$")


def matches_any(url: str, patterns: Iterable[str]) -> bool:
    return any(compile_pattern(pattern).match(url) for pattern in patterns)


def is_eligible(
    url: str, match_patterns: Iterable[str], excluded_patterns: Iterable[str] = ()
) -> bool:
    """A URL is eligible if it matches a pattern and no excluded pattern."""
    if matches_any(url, excluded_patterns):
        return False
    return matches_any(url, match_patterns)
