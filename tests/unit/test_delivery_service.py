"""Unit tests for the delivery service."""

from unittest.mock import AsyncMock

import pytest

from competitive_companion.config import Settings
from competitive_companion.domain.exceptions import DeliveryFailure, FetchError, PermissionDenied
from competitive_companion.infrastructure.http_client import AsyncHTTPClient
from competitive_companion.services.delivery import (
    CompletionSignal,
    ConfiguredHostProvider,
    DeliveryService,
    HttpHost,
    MessageAction,
    PermissionStore,
)

PAYLOAD = '{"name": "A. Watermelon"}'
FILE_PATTERN = "https://codejam.googleapis.com/dashboard/get_file/*"
FILE_URL = "https://codejam.googleapis.com/dashboard/get_file/AQj9?dl=1"


class RecordingHost:
    def __init__(self, name: str, fail: bool = False):
        self.name = name
        self.fail = fail
        self.payloads: list[str] = []

    async def send(self, payload: str) -> None:
        self.payloads.append(payload)
        if self.fail:
            raise ConnectionRefusedError(f"{self.name} is offline")


class StaticHostProvider:
    def __init__(self, hosts):
        self.hosts = hosts
        self.calls = 0

    async def get_hosts(self):
        self.calls += 1
        return list(self.hosts)


@pytest.mark.asyncio
async def test_failing_host_does_not_block_others():
    hosts = [RecordingHost("one"), RecordingHost("two", fail=True), RecordingHost("three")]
    relay = AsyncMock()
    service = DeliveryService(StaticHostProvider(hosts), relay=relay)

    signal = await service.deliver(PAYLOAD, origin=7)

    assert signal == CompletionSignal(origin=7, attempted=3)
    assert hosts[0].payloads == [PAYLOAD]
    assert hosts[1].payloads == [PAYLOAD]
    assert hosts[2].payloads == [PAYLOAD]
    relay.send_to_origin.assert_awaited_once_with(7, MessageAction.TASK_SENT, None)


@pytest.mark.asyncio
async def test_completion_signalled_when_every_host_fails():
    hosts = [RecordingHost("one", fail=True), RecordingHost("two", fail=True)]
    relay = AsyncMock()
    service = DeliveryService(StaticHostProvider(hosts), relay=relay)

    signal = await service.deliver(PAYLOAD, origin="tab")

    assert signal.attempted == 2
    relay.send_to_origin.assert_awaited_once_with("tab", MessageAction.TASK_SENT, None)


@pytest.mark.asyncio
async def test_completion_signalled_without_hosts():
    relay = AsyncMock()
    service = DeliveryService(StaticHostProvider([]), relay=relay)

    signal = await service.deliver(PAYLOAD)

    assert signal.attempted == 0
    relay.send_to_origin.assert_awaited_once()


@pytest.mark.asyncio
async def test_hosts_resolved_on_every_delivery():
    provider = StaticHostProvider([RecordingHost("one")])
    service = DeliveryService(provider)

    await service.deliver(PAYLOAD)
    await service.deliver(PAYLOAD)

    assert provider.calls == 2


@pytest.mark.asyncio
async def test_http_host_posts_payload_to_localhost():
    http_client = AsyncMock()
    host = HttpHost(10045, http_client)

    await host.send(PAYLOAD)

    http_client.post_text.assert_awaited_once_with("http://localhost:10045/", PAYLOAD)


@pytest.mark.asyncio
async def test_http_host_wraps_fetch_errors():
    http_client = AsyncMock()
    http_client.post_text.side_effect = FetchError("http://localhost:1327/", "refused")
    host = HttpHost(1327, http_client)

    with pytest.raises(DeliveryFailure) as exc_info:
        await host.send(PAYLOAD)

    assert exc_info.value.host == "localhost:1327"


@pytest.mark.asyncio
async def test_configured_host_provider_uses_all_ports():
    settings = Settings(ports=(1327, 4244), custom_ports=(4244, 9000))
    provider = ConfiguredHostProvider(settings, AsyncMock())

    hosts = await provider.get_hosts()

    assert [host.name for host in hosts] == ["localhost:1327", "localhost:4244", "localhost:9000"]


def test_permission_store():
    permissions = PermissionStore()
    assert not permissions.contains(FILE_URL)

    permissions.grant(FILE_PATTERN)

    assert permissions.contains(FILE_URL)
    assert not permissions.contains("https://codejam.googleapis.com/other/file")


@pytest.mark.asyncio
async def test_fetch_with_permission_denied_without_grant():
    http_client = AsyncMock()
    service = DeliveryService(StaticHostProvider([]), http_client=http_client)

    with pytest.raises(PermissionDenied):
        await service.fetch_with_permission(FILE_URL)

    http_client.get_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_relay_external_file_reports_denied_request():
    http_client = AsyncMock()
    relay = AsyncMock()
    service = DeliveryService(StaticHostProvider([]), relay=relay, http_client=http_client)

    action = await service.relay_external_file("tab", FILE_URL)

    assert action is MessageAction.EXTERNAL_REQUEST_FAILED
    http_client.get_text.assert_not_awaited()
    relay.send_to_origin.assert_awaited_once_with(
        "tab", MessageAction.EXTERNAL_REQUEST_FAILED, None
    )


@pytest.mark.asyncio
async def test_relay_external_file_sends_content():
    http_client = AsyncMock()
    http_client.get_text.return_value = "3\n1 2 3\n"
    relay = AsyncMock()
    service = DeliveryService(
        StaticHostProvider([]),
        relay=relay,
        permissions=PermissionStore([FILE_PATTERN]),
        http_client=http_client,
    )

    action = await service.relay_external_file("tab", FILE_URL)

    assert action is MessageAction.EXTERNAL_FILE_RESULT
    relay.send_to_origin.assert_awaited_once_with(
        "tab", MessageAction.EXTERNAL_FILE_RESULT, {"content": "3\n1 2 3\n"}
    )


@pytest.mark.asyncio
async def test_relay_external_file_reports_fetch_failure():
    http_client = AsyncMock()
    http_client.get_text.side_effect = FetchError(FILE_URL, "HTTP 500", 500)
    relay = AsyncMock()
    service = DeliveryService(
        StaticHostProvider([]),
        relay=relay,
        permissions=PermissionStore([FILE_PATTERN]),
        http_client=http_client,
    )

    action = await service.relay_external_file("tab", FILE_URL)

    assert action is MessageAction.EXTERNAL_REQUEST_FAILED
    http_client.get_text.assert_awaited_once()


@pytest.mark.asyncio
async def test_relay_external_file_reports_unexpected_error():
    http_client = AsyncMock()
    http_client.get_text.side_effect = ValueError("malformed link")
    relay = AsyncMock()
    service = DeliveryService(
        StaticHostProvider([]),
        relay=relay,
        permissions=PermissionStore([FILE_PATTERN]),
        http_client=http_client,
    )

    action = await service.relay_external_file("tab", FILE_URL)

    assert action is MessageAction.EXTERNAL_REQUEST_FAILED
    relay.send_to_origin.assert_awaited_once_with(
        "tab", MessageAction.EXTERNAL_REQUEST_FAILED, None
    )


@pytest.mark.asyncio
async def test_relay_external_file_reports_invalid_url():
    relay = AsyncMock()
    async with AsyncHTTPClient() as http_client:
        service = DeliveryService(
            StaticHostProvider([]),
            relay=relay,
            permissions=PermissionStore([FILE_PATTERN]),
            http_client=http_client,
        )

        action = await service.relay_external_file(
            "tab", "https://codejam.googleapis.com/dashboard/get_file/a\x00b"
        )

    assert action is MessageAction.EXTERNAL_REQUEST_FAILED
    relay.send_to_origin.assert_awaited_once_with(
        "tab", MessageAction.EXTERNAL_REQUEST_FAILED, None
    )


def test_message_actions_use_wire_names():
    assert {action.value for action in MessageAction} == {
        "taskSent",
        "externalFileResult",
        "externalRequestFailed",
    }
