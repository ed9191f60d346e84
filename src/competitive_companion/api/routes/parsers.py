"""API routes for listing parsers."""

from litestar import Controller, get
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from competitive_companion.api.dependencies import provide_parse_service
from competitive_companion.api.schemas.parser import ParserChoicesResponse
from competitive_companion.domain.exceptions import NoEligibleParserError
from competitive_companion.services import ParseService


class ParserController(Controller):
    """Controller for parser listing endpoints."""

    path = "/parsers"
    dependencies = {"parse_service": Provide(provide_parse_service, sync_to_thread=False)}

    @get("/", status_code=HTTP_200_OK)
    async def list_parsers(self, parse_service: ParseService) -> ParserChoicesResponse:
        """All parsers grouped into problem and contest parsers."""
        return ParserChoicesResponse.model_validate(parse_service.registry.menu())

    @get("/eligible", status_code=HTTP_200_OK)
    async def eligible_parsers(
        self, url: str, parse_service: ParseService
    ) -> ParserChoicesResponse:
        """
        Parsers that can handle a URL, grouped by kind.

        Query parameters:
        - url: Page URL
        """
        logger.debug(f"API request for eligible parsers: url={url}")

        choices = parse_service.registry.choices_for(url)
        if not len(choices):
            raise NoEligibleParserError(url)

        return ParserChoicesResponse.model_validate(choices)
