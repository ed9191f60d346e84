"""Registry of all parsers, built once at startup."""

from collections.abc import Iterable
from typing import Optional

from loguru import logger

from competitive_companion.domain.exceptions import (
    AmbiguousParserError,
    NoEligibleParserError,
    ParserNotFoundError,
)
from competitive_companion.domain.models import ParserChoices, ParserKind

from .contest import ContestParser
from .interfaces import HTTPClientProtocol, Parser
from .problem import CodeChefProblemParser, CodeforcesProblemParser, UOJProblemParser


class ParserRegistry:
    """Immutable set of parser instances looked up by URL or name."""

    def __init__(self, parsers: Iterable[Parser]):
        self._parsers: tuple[Parser, ...] = tuple(parsers)
        self._by_name: dict[str, Parser] = {}

        for parser in self._parsers:
            if parser.name in self._by_name:
                raise ValueError(f"Duplicate parser name: {parser.name}")
            self._by_name[parser.name] = parser

    @property
    def parsers(self) -> tuple[Parser, ...]:
        return self._parsers

    def __len__(self) -> int:
        return len(self._parsers)

    def find_eligible(self, url: str) -> list[Parser]:
        """Parsers that can handle the URL, in registration order."""
        return [parser for parser in self._parsers if parser.can_handle(url)]

    def find_by_name(self, name: str) -> Parser:
        parser = self._by_name.get(name)
        if parser is None:
            raise ParserNotFoundError(name)
        return parser

    def choices_for(self, url: str) -> ParserChoices:
        """Eligible parser names for a URL grouped by kind."""
        return self._group(self.find_eligible(url))

    def menu(self) -> ParserChoices:
        """Every parser name grouped by kind."""
        return self._group(self._parsers)

    def resolve(self, url: str, parser_name: Optional[str] = None) -> Parser:
        """
        Select the parser to run for a URL.

        An explicit parser name always wins. Otherwise exactly one parser must
        be eligible.

        Raises:
            ParserNotFoundError: If parser_name is unknown
            NoEligibleParserError: If no parser can handle the URL
            AmbiguousParserError: If several parsers can handle the URL
        """
        if parser_name:
            parser = self.find_by_name(parser_name)
            logger.debug(f"Using explicitly selected parser {parser.name} for {url}")
            return parser

        eligible = self.find_eligible(url)
        if not eligible:
            raise NoEligibleParserError(url)
        if len(eligible) > 1:
            raise AmbiguousParserError(url, self._group(eligible))

        logger.debug(f"Resolved {url} to parser {eligible[0].name}")
        return eligible[0]

    def _group(self, parsers: Iterable[Parser]) -> ParserChoices:
        choices = ParserChoices()
        for parser in parsers:
            if parser.kind is ParserKind.CONTEST:
                choices.contest.append(parser.name)
            else:
                choices.problem.append(parser.name)
        return choices


def create_registry(http_client: HTTPClientProtocol) -> ParserRegistry:
    """Build the registry with every supported judge."""
    codechef = CodeChefProblemParser()
    codeforces = CodeforcesProblemParser()
    uoj = UOJProblemParser()

    return ParserRegistry(
        [
            codechef,
            codeforces,
            uoj,
            ContestParser(
                name="CodeChefContest",
                match_patterns=["https://www.codechef.com/*"],
                excluded_match_patterns=[
                    "https://www.codechef.com/problems",
                    "https://www.codechef.com/contests",
                    "https://www.codechef.com/practice",
                    *codechef.get_excluded_match_patterns(),
                ],
                link_selector='.dataTable td a[href*="/problems/"]',
                problem_parser=codechef,
                http_client=http_client,
            ),
            ContestParser(
                name="CodeforcesContest",
                match_patterns=[
                    "https://codeforces.com/contest/*",
                    "https://codeforces.com/gym/*",
                    "https://codeforces.ru/contest/*",
                    "https://codeforces.ru/gym/*",
                ],
                link_selector="table.problems td.id a",
                problem_parser=codeforces,
                http_client=http_client,
            ),
            ContestParser(
                name="UOJContest",
                match_patterns=["https://uoj.ac/contest/*"],
                link_selector=".top-buffer-md > .table-responsive > .table a",
                problem_parser=uoj,
                http_client=http_client,
            ),
        ]
    )
