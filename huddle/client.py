"""Async HTTP client for the Huddle API with a process-local cache.

The cache holds the last server-confirmed state: channels keyed by id and
each channel's message list. A successful fetch replaces the cached entry
wholesale; creates and sends are applied only after the server accepts them.

Example::

    async with HuddleClient("http://localhost:8000", token) as client:
        channels = await client.fetch_channels()
        await client.send_message(channels[0]["id"], "hello")
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class HuddleClientError(Exception):
    """A non-2xx response from the Huddle API."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class HuddleClient:
    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
            timeout=timeout,
        )
        self.channels: dict[str, dict[str, Any]] = {}
        self.messages: dict[str, list[dict[str, Any]]] = {}

    async def __aenter__(self) -> "HuddleClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = await self._http.request(method, path, **kwargs)
        if resp.is_error:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            logger.warning("%s %s failed with %d: %s", method, path, resp.status_code, detail)
            raise HuddleClientError(resp.status_code, detail)
        return resp.json()

    # --- Profile ---

    async def fetch_me(self) -> dict[str, Any]:
        return await self._request("GET", "/user/me")

    # --- Channels ---

    async def fetch_channels(self) -> list[dict[str, Any]]:
        channels = await self._request("GET", "/channels")
        self.channels = {ch["id"]: ch for ch in channels}
        return channels

    async def create_channel(self, name: str, description: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"name": name, "type": "channel"}
        if description is not None:
            body["description"] = description
        channel = await self._request("POST", "/channels", json=body)
        self.channels[channel["id"]] = channel
        return channel

    async def create_direct_message(self, other_user_id: str) -> dict[str, Any]:
        channel = await self._request(
            "POST", "/channels", json={"type": "dm", "otherUserId": other_user_id}
        )
        self.channels[channel["id"]] = channel
        return channel

    # --- Messages ---

    async def fetch_messages(self, channel_id: str) -> list[dict[str, Any]]:
        messages = await self._request("GET", f"/messages/channel/{channel_id}")
        self.messages[channel_id] = messages
        return messages

    async def send_message(self, channel_id: str, content: str) -> dict[str, Any]:
        message = await self._request(
            "POST", f"/messages/channel/{channel_id}", json={"content": content}
        )
        self.messages.setdefault(channel_id, []).append(message)
        return message

    def clear(self) -> None:
        self.channels.clear()
        self.messages.clear()
