"""Per-judge problem parsers."""

from .codechef import CodeChefProblemParser
from .codeforces import CodeforcesProblemParser
from .uoj import UOJProblemParser

__all__ = [
    "CodeChefProblemParser",
    "CodeforcesProblemParser",
    "UOJProblemParser",
]
