"""Value objects describing parsers and their results."""

from dataclasses import dataclass, field
from enum import Enum

from .task import Sendable


class ParserKind(str, Enum):
    """Declared role of a parser."""

    PROBLEM = "problem"
    CONTEST = "contest"


@dataclass(frozen=True)
class ParserDescriptor:
    """Identity and URL patterns of a registered parser."""

    name: str
    kind: ParserKind
    match_patterns: tuple[str, ...]
    excluded_match_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParserChoices:
    """Parser names grouped by kind, used for disambiguation."""

    problem: list[str] = field(default_factory=list)
    contest: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.problem) + len(self.contest)


@dataclass(frozen=True)
class ParseFailure:
    """A linked problem of a contest that could not be parsed."""

    url: str
    error: str
    field: str | None = None


@dataclass
class ContestParseResult:
    """Tasks extracted from a contest listing, in listing order."""

    url: str
    tasks: list[Sendable] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)
