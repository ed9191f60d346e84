"""Generic parser that crawls a contest listing and delegates to a problem parser."""

import asyncio
import uuid
from collections.abc import Sequence
from urllib.parse import urljoin

from loguru import logger

from competitive_companion.domain.exceptions import CompanionError, ExtractionError
from competitive_companion.domain.models import (
    Batch,
    ContestParseResult,
    ParseFailure,
    ParserKind,
    Sendable,
)

from .extraction import parse_html
from .interfaces import HTTPClientProtocol, Parser, ProblemParser


class ContestParser(Parser):
    """
    Turns a contest listing into a batch of tasks.

    Configured with a CSS selector for the problem links and the problem
    parser that handles each linked page. A link that fails to fetch or parse
    is reported as a ParseFailure for that link; the other links are still
    parsed.
    """

    kind = ParserKind.CONTEST

    def __init__(
        self,
        name: str,
        match_patterns: Sequence[str],
        link_selector: str,
        problem_parser: ProblemParser,
        http_client: HTTPClientProtocol,
        excluded_match_patterns: Sequence[str] = (),
    ):
        """
        Initialize parser.

        Args:
            name: Display name
            match_patterns: URL globs of listing pages
            link_selector: CSS selector of the problem anchors
            problem_parser: Parser for each linked problem page
            http_client: Async HTTP client used to fetch linked pages
            excluded_match_patterns: URL globs that disqualify a listing page
        """
        if not match_patterns:
            raise ValueError(f"Contest parser {name} needs at least one match pattern")

        self.name = name
        self.match_patterns = list(match_patterns)
        self.excluded_match_patterns = list(excluded_match_patterns)
        self.link_selector = link_selector
        self.problem_parser = problem_parser
        self.http_client = http_client

    def get_match_patterns(self) -> list[str]:
        return list(self.match_patterns)

    def get_excluded_match_patterns(self) -> list[str]:
        return list(self.excluded_match_patterns)

    def extract_links(self, url: str, html: str) -> list[str]:
        """Absolute problem URLs in listing order, without duplicates."""
        soup = parse_html(html)

        links: list[str] = []
        for anchor in soup.select(self.link_selector):
            href = anchor.get("href")
            if not isinstance(href, str) or not href.strip():
                continue
            link = urljoin(url, href.strip())
            if link not in links:
                links.append(link)

        return links

    async def parse(self, url: str, html: str) -> ContestParseResult:
        logger.info(f"Parsing contest page with {self.name}: {url}")

        links = self.extract_links(url, html)
        if not links:
            raise ExtractionError(
                "problem links", f"no element matches {self.link_selector!r}", url
            )

        logger.debug(f"Found {len(links)} problem link(s) on {url}")

        results = await asyncio.gather(*(self._parse_problem(link) for link in links))

        result = ContestParseResult(url=url)
        for item in results:
            if isinstance(item, ParseFailure):
                result.failures.append(item)
            else:
                result.tasks.append(item)

        batch = Batch(id=str(uuid.uuid4()), size=len(result.tasks))
        result.tasks = [task.with_batch(batch) for task in result.tasks]

        if result.failures:
            logger.warning(
                f"Failed to parse {len(result.failures)} of {len(links)} problem(s) for {url}"
            )
        logger.info(f"Parsed {len(result.tasks)} problem(s) from {url}")

        return result

    async def _parse_problem(self, link: str) -> Sendable | ParseFailure:
        try:
            html = await self.http_client.get_text(link)
            return self.problem_parser.parse(link, html)
        except ExtractionError as e:
            logger.warning(f"Failed to extract {e.field} from {link}: {e}")
            return ParseFailure(url=link, error=str(e), field=e.field)
        except CompanionError as e:
            logger.warning(f"Failed to parse problem {link}: {e}")
            return ParseFailure(url=link, error=str(e))
        except Exception as e:
            logger.opt(exception=e).warning(f"Unexpected error parsing problem {link}")
            return ParseFailure(url=link, error=f"{type(e).__name__}: {e}")
