"""Delivery of serialized tasks to locally listening receivers."""

import asyncio
from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

from loguru import logger

from competitive_companion.config import Settings
from competitive_companion.domain.exceptions import (
    CompanionError,
    DeliveryFailure,
    FetchError,
    PermissionDenied,
)
from competitive_companion.infrastructure.http_client import AsyncHTTPClient
from competitive_companion.infrastructure.parsers.matching import matches_any


class MessageAction(str, Enum):
    """Messages exchanged between the page context and the background."""

    TASK_SENT = "taskSent"
    EXTERNAL_FILE_RESULT = "externalFileResult"
    EXTERNAL_REQUEST_FAILED = "externalRequestFailed"


@dataclass(frozen=True)
class CompletionSignal:
    """All delivery attempts for one payload have settled."""

    origin: Optional[Hashable]
    attempted: int


class Host(Protocol):
    """A local receiver tool."""

    name: str

    async def send(self, payload: str) -> None:
        """Send a serialized task; raise on failure."""
        ...


class HostProvider(Protocol):
    """Resolves the current receiver set."""

    async def get_hosts(self) -> list[Host]:
        ...


class MessageRelay(Protocol):
    """Relays a message back to the context that started an operation."""

    async def send_to_origin(
        self,
        origin: Optional[Hashable],
        action: MessageAction,
        payload: Optional[dict[str, Any]] = None,
    ) -> None:
        ...


class HttpHost:
    """Receiver listening for POSTed tasks on a localhost port."""

    def __init__(self, port: int, http_client: AsyncHTTPClient):
        self.port = port
        self.url = f"http://localhost:{port}/"
        self.name = f"localhost:{port}"
        self.http_client = http_client

    async def send(self, payload: str) -> None:
        try:
            await self.http_client.post_text(self.url, payload)
        except FetchError as e:
            raise DeliveryFailure(self.name, str(e)) from e

    def __repr__(self) -> str:
        return f"<HttpHost {self.name}>"


class ConfiguredHostProvider:
    """Builds receivers from the configured ports on every call."""

    def __init__(self, settings: Settings, http_client: AsyncHTTPClient):
        self.settings = settings
        self.http_client = http_client

    async def get_hosts(self) -> list[Host]:
        return [HttpHost(port, self.http_client) for port in self.settings.all_ports]


class PermissionStore:
    """Origin patterns the user granted elevated fetch access to."""

    def __init__(self, granted_patterns: Iterable[str] = ()):
        self._granted: list[str] = list(dict.fromkeys(granted_patterns))

    def contains(self, url: str) -> bool:
        return matches_any(url, self._granted)

    def grant(self, pattern: str) -> None:
        if pattern not in self._granted:
            logger.info(f"Granted fetch permission for {pattern}")
            self._granted.append(pattern)


class DeliveryService:
    """Sends payloads to every receiver, isolating failures per receiver."""

    def __init__(
        self,
        host_provider: HostProvider,
        relay: Optional[MessageRelay] = None,
        permissions: Optional[PermissionStore] = None,
        http_client: Optional[AsyncHTTPClient] = None,
    ):
        """
        Initialize service.

        Args:
            host_provider: Resolves the receivers for each delivery
            relay: Reports completion back to the origin (optional)
            permissions: Grants for fetch_with_permission (optional)
            http_client: HTTP client for fetch_with_permission (optional)
        """
        self.host_provider = host_provider
        self.relay = relay
        self.permissions = permissions or PermissionStore()
        self.http_client = http_client

    async def deliver(self, payload: str, origin: Optional[Hashable] = None) -> CompletionSignal:
        """
        Attempt delivery to every receiver and signal completion once.

        A receiver failure is logged and never reported to the origin.
        """
        hosts = await self.host_provider.get_hosts()
        logger.debug(f"Delivering task to {len(hosts)} host(s)")

        await asyncio.gather(*(self._send_to_host(host, payload) for host in hosts))

        signal = CompletionSignal(origin=origin, attempted=len(hosts))
        await self._notify(origin, MessageAction.TASK_SENT)

        logger.info(f"Finished delivery attempts to {len(hosts)} host(s)")
        return signal

    async def _send_to_host(self, host: Host, payload: str) -> None:
        try:
            await host.send(payload)
            logger.debug(f"Delivered task to {host.name}")
        except Exception as e:
            logger.warning(f"Could not deliver task to {getattr(host, 'name', host)}: {e}")

    async def fetch_with_permission(self, url: str) -> str:
        """
        Fetch a cross-origin resource that needs a prior grant.

        Raises:
            PermissionDenied: If no grant covers the URL
            FetchError: If the request fails
        """
        if not self.permissions.contains(url):
            raise PermissionDenied(url)

        if self.http_client is None:
            raise FetchError(url, "HTTP client not initialized")

        return await self.http_client.get_text(url)

    async def relay_external_file(self, origin: Optional[Hashable], link: str) -> MessageAction:
        """Fetch `link` and relay its content, or report the request as failed."""
        try:
            content = await self.fetch_with_permission(link)
        except PermissionDenied:
            logger.warning(f"External file request denied: {link}")
            await self._notify(origin, MessageAction.EXTERNAL_REQUEST_FAILED)
            return MessageAction.EXTERNAL_REQUEST_FAILED
        except CompanionError as e:
            logger.warning(f"External file request failed: {e}")
            await self._notify(origin, MessageAction.EXTERNAL_REQUEST_FAILED)
            return MessageAction.EXTERNAL_REQUEST_FAILED
        except Exception as e:
            logger.opt(exception=e).warning(f"Unexpected error fetching external file {link}")
            await self._notify(origin, MessageAction.EXTERNAL_REQUEST_FAILED)
            return MessageAction.EXTERNAL_REQUEST_FAILED

        await self._notify(origin, MessageAction.EXTERNAL_FILE_RESULT, {"content": content})
        return MessageAction.EXTERNAL_FILE_RESULT

    async def _notify(
        self,
        origin: Optional[Hashable],
        action: MessageAction,
        payload: Optional[dict[str, Any]] = None,
    ) -> None:
        if self.relay is None:
            return
        await self.relay.send_to_origin(origin, action, payload)
