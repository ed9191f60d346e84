from litestar.datastructures import State
from loguru import logger

from competitive_companion.services import ParseService


def provide_parse_service(state: State) -> ParseService:
    service = state.parse_service
    logger.debug("Providing parse service for request")
    return service
