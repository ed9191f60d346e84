"""Service that runs a parser for a URL and hands the results to delivery."""

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from competitive_companion.domain.exceptions import ExtractionError
from competitive_companion.domain.models import ParseFailure, ParserKind, Sendable
from competitive_companion.infrastructure.parsers import HTTPClientProtocol, Parser, ParserRegistry

from .delivery import CompletionSignal, DeliveryService


@dataclass
class ParseOutcome:
    """Tasks produced for one URL and what happened to them."""

    parser: str
    tasks: list[Sendable] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)
    completions: list[CompletionSignal] = field(default_factory=list)


class ParseService:
    """Resolves a parser for a URL, runs it and optionally delivers the tasks."""

    def __init__(
        self,
        *,
        registry: ParserRegistry,
        delivery: DeliveryService,
        http_client: HTTPClientProtocol,
        owned_clients: Sequence = (),
    ):
        """
        Initialize service with dependencies.

        Args:
            registry: Parsers to resolve URLs with
            delivery: Delivery service for parse_and_send
            http_client: Client used to fetch pages
            owned_clients: Clients created for this service, closed by close()
        """
        self.registry = registry
        self.delivery = delivery
        self.http_client = http_client
        self.owned_clients = list(owned_clients)

    async def parse(
        self,
        url: str,
        html: Optional[str] = None,
        parser_name: Optional[str] = None,
    ) -> ParseOutcome:
        """
        Parse the page at `url` into tasks.

        The page is fetched when `html` is not given. Raises when no task at
        all could be produced.
        """
        parser = self.registry.resolve(url, parser_name)
        logger.info(f"Parsing {url} with {parser.name}")

        if html is None:
            html = await self.http_client.get_text(url)

        try:
            outcome = await self._run_parser(parser, url, html)
        except Exception:
            logger.exception(f"Parser {parser.name} failed for {url}")
            raise

        if not outcome.tasks:
            details = "; ".join(f"{failure.url}: {failure.error}" for failure in outcome.failures)
            raise ExtractionError("tasks", details or "parser produced no tasks", url)

        logger.info(f"Parsed {len(outcome.tasks)} task(s) from {url}")
        return outcome

    async def parse_and_send(
        self,
        url: str,
        html: Optional[str] = None,
        parser_name: Optional[str] = None,
        origin: Optional[Hashable] = None,
    ) -> ParseOutcome:
        """Parse the page and deliver every task to the receivers."""
        outcome = await self.parse(url, html, parser_name)

        for task in outcome.tasks:
            completion = await self.delivery.deliver(task.to_json(), origin)
            outcome.completions.append(completion)

        return outcome

    async def close(self) -> None:
        """Close the HTTP clients this service owns."""
        for client in self.owned_clients:
            await client.close()
        self.owned_clients.clear()

    async def _run_parser(self, parser: Parser, url: str, html: str) -> ParseOutcome:
        if parser.kind is ParserKind.CONTEST:
            result = await parser.parse(url, html)
            return ParseOutcome(parser=parser.name, tasks=result.tasks, failures=result.failures)

        return ParseOutcome(parser=parser.name, tasks=[parser.parse(url, html)])
