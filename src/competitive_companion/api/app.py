"""Litestar application."""

from typing import Optional

from litestar import Litestar, Request, Response
from litestar.datastructures import State
from litestar.status_codes import (
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_502_BAD_GATEWAY,
)
from loguru import logger

from competitive_companion.api.routes import ParseController, ParserController, health
from competitive_companion.config import configure_logging, get_settings
from competitive_companion.domain.exceptions import (
    AmbiguousParserError,
    CompanionError,
    ExtractionError,
    FetchError,
    NoEligibleParserError,
    ParserNotFoundError,
    ValidationError,
)
from competitive_companion.services import ParseService, create_parse_service


def _error_response(exc: CompanionError, status_code: int, **extra) -> Response:
    return Response(content={"detail": str(exc), **extra}, status_code=status_code)


def handle_not_found(request: Request, exc: CompanionError) -> Response:
    return _error_response(exc, HTTP_404_NOT_FOUND)


def handle_ambiguous(request: Request, exc: AmbiguousParserError) -> Response:
    choices = {"problem": exc.choices.problem, "contest": exc.choices.contest}
    return _error_response(exc, HTTP_409_CONFLICT, choices=choices)


def handle_unprocessable(request: Request, exc: CompanionError) -> Response:
    field = getattr(exc, "field", None)
    return _error_response(exc, HTTP_422_UNPROCESSABLE_ENTITY, field=field)


def handle_fetch_error(request: Request, exc: FetchError) -> Response:
    logger.warning(f"Upstream fetch failed: {exc}")
    return _error_response(exc, HTTP_502_BAD_GATEWAY)


def create_app(parse_service: Optional[ParseService] = None) -> Litestar:
    """
    Create the application.

    Args:
        parse_service: Service to use instead of one built from settings
    """

    async def on_startup(app: Litestar) -> None:
        if app.state.get("parse_service") is None:
            settings = get_settings()
            configure_logging(settings.log_level)
            app.state.parse_service = create_parse_service(settings)
        logger.info(f"Loaded {len(app.state.parse_service.registry)} parsers")

    async def on_shutdown(app: Litestar) -> None:
        service = app.state.get("parse_service")
        if service is not None:
            await service.close()

    return Litestar(
        route_handlers=[ParseController, ParserController, health],
        on_startup=[on_startup],
        on_shutdown=[on_shutdown],
        state=State({"parse_service": parse_service}),
        exception_handlers={
            NoEligibleParserError: handle_not_found,
            ParserNotFoundError: handle_not_found,
            AmbiguousParserError: handle_ambiguous,
            ExtractionError: handle_unprocessable,
            ValidationError: handle_unprocessable,
            FetchError: handle_fetch_error,
        },
    )
