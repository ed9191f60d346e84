"""API routes for parsing pages and sending tasks."""

from litestar import Controller, post
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from competitive_companion.api.dependencies import provide_parse_service
from competitive_companion.api.schemas.task import (
    FailureResponse,
    ParseRequest,
    ParseResponse,
    SendResponse,
    TaskResponse,
)
from competitive_companion.services import ParseOutcome, ParseService


def _to_response(outcome: ParseOutcome) -> ParseResponse:
    return ParseResponse(
        parser=outcome.parser,
        tasks=[TaskResponse.model_validate(task) for task in outcome.tasks],
        failures=[FailureResponse.model_validate(failure) for failure in outcome.failures],
    )


class ParseController(Controller):
    """Controller for parse and send endpoints."""

    path = "/"
    dependencies = {"parse_service": Provide(provide_parse_service, sync_to_thread=False)}

    @post("/parse", status_code=HTTP_200_OK)
    async def parse(self, data: ParseRequest, parse_service: ParseService) -> ParseResponse:
        """
        Parse a page into tasks without delivering them.

        Body:
        - url: Page URL
        - html: Page HTML (fetched when omitted)
        - parser: Parser name (required when several parsers match)
        """
        logger.debug(f"API request to parse: url={data.url} parser={data.parser}")

        outcome = await parse_service.parse(data.url, data.html, data.parser)
        return _to_response(outcome)

    @post("/send", status_code=HTTP_200_OK)
    async def send(self, data: ParseRequest, parse_service: ParseService) -> SendResponse:
        """Parse a page and deliver every task to the configured receivers."""
        logger.debug(f"API request to send: url={data.url} parser={data.parser}")

        outcome = await parse_service.parse_and_send(data.url, data.html, data.parser)
        response = _to_response(outcome)

        return SendResponse(
            parser=response.parser,
            tasks=response.tasks,
            failures=response.failures,
            attempted=sum(completion.attempted for completion in outcome.completions),
        )
