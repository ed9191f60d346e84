"""Parser capability contract and protocol interfaces."""

from abc import ABC, abstractmethod
from typing import ClassVar, Protocol

from competitive_companion.domain.models import ParserDescriptor, ParserKind, Sendable

from .matching import is_eligible


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get_text(self, url: str) -> str:
        """Get text content from URL."""
        ...


class Parser(ABC):
    """
    A stateless, reusable capability that turns a page into tasks.

    Subclasses declare a display `name` and a `kind`; the registry groups
    parsers by `kind` only.
    """

    name: str
    kind: ClassVar[ParserKind]

    @abstractmethod
    def get_match_patterns(self) -> list[str]:
        """URL globs that qualify a page for this parser."""
        ...

    def get_excluded_match_patterns(self) -> list[str]:
        """URL globs that disqualify an otherwise matching page."""
        return []

    def can_handle(self, url: str) -> bool:
        return is_eligible(url, self.get_match_patterns(), self.get_excluded_match_patterns())

    def describe(self) -> ParserDescriptor:
        return ParserDescriptor(
            name=self.name,
            kind=self.kind,
            match_patterns=tuple(self.get_match_patterns()),
            excluded_match_patterns=tuple(self.get_excluded_match_patterns()),
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} kind={self.kind.value}>"


class ProblemParser(Parser):
    """Parser for a single problem page."""

    kind = ParserKind.PROBLEM

    @abstractmethod
    def parse(self, url: str, html: str) -> Sendable:
        """
        Parse a problem page.

        Raises:
            ExtractionError: If a required element or value is missing
            ValidationError: If the collected task is incomplete
        """
        ...
