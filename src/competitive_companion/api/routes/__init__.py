from competitive_companion.api.routes.health import health
from competitive_companion.api.routes.parse import ParseController
from competitive_companion.api.routes.parsers import ParserController

__all__ = ["ParseController", "ParserController", "health"]
