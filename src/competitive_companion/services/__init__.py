from competitive_companion.services.delivery import (
    CompletionSignal,
    ConfiguredHostProvider,
    DeliveryService,
    HttpHost,
    MessageAction,
    PermissionStore,
)
from competitive_companion.services.parse import ParseOutcome, ParseService


def create_parse_service(settings=None) -> ParseService:
    """Factory function to create parse service with all dependencies."""
    from competitive_companion.config import get_settings
    from competitive_companion.infrastructure.http_client import AsyncHTTPClient
    from competitive_companion.infrastructure.parsers import create_registry

    settings = settings or get_settings()

    # Create infrastructure dependencies
    page_client = AsyncHTTPClient(timeout=settings.http_timeout, user_agent=settings.user_agent)
    delivery_client = AsyncHTTPClient(timeout=settings.delivery_timeout)

    delivery = DeliveryService(
        host_provider=ConfiguredHostProvider(settings, delivery_client),
        permissions=PermissionStore(settings.granted_origins),
        http_client=page_client,
    )

    return ParseService(
        registry=create_registry(page_client),
        delivery=delivery,
        http_client=page_client,
        owned_clients=[page_client, delivery_client],
    )


__all__ = [
    "CompletionSignal",
    "ConfiguredHostProvider",
    "DeliveryService",
    "HttpHost",
    "MessageAction",
    "ParseOutcome",
    "ParseService",
    "PermissionStore",
    "create_parse_service",
]
