"""Domain exceptions for competitive-companion."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from competitive_companion.domain.models.parsing import ParserChoices


class CompanionError(Exception):
    """Base exception for all competitive-companion errors."""

    pass


class ExtractionError(CompanionError):
    """A required element or value could not be extracted from a page."""

    def __init__(self, field: str, detail: str | None = None, url: str | None = None):
        self.field = field
        self.detail = detail
        self.url = url

        message = f"Could not extract {field}"
        if url:
            message += f" from {url}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ValidationError(CompanionError):
    """TaskBuilder.build() was called without all required fields."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Task is missing required fields: {', '.join(missing)}")


class PermissionDenied(CompanionError):
    """An elevated fetch was attempted without a granted permission."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No permission granted to fetch {url}")


class DeliveryFailure(CompanionError):
    """A single receiver could not accept a task."""

    def __init__(self, host: str, detail: str):
        self.host = host
        super().__init__(f"Delivery to {host} failed: {detail}")


class FetchError(CompanionError):
    """An HTTP request failed or returned a non-success status."""

    def __init__(self, url: str, detail: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {detail}")


class ParserNotFoundError(CompanionError):
    """An explicitly requested parser is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown parser: {name}")


class NoEligibleParserError(CompanionError):
    """No registered parser can handle a URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No parser can handle {url}")


class AmbiguousParserError(CompanionError):
    """Several parsers can handle a URL and none was chosen explicitly."""

    def __init__(self, url: str, choices: "ParserChoices"):
        self.url = url
        self.choices = choices
        names = [*choices.problem, *choices.contest]
        super().__init__(f"Several parsers can handle {url}: {', '.join(names)}")
