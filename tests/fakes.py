"""In-memory stand-ins for the external collaborators."""

import asyncio
from collections.abc import Mapping
from typing import Any

from stayhub.exceptions import EmailDeliveryFailedError


class FakeGenerator:
    """Text generator returning a canned answer, or raising ``error``."""

    def __init__(
        self, reply: str = "Generated text", *, error: Exception | None = None, delay: float = 0
    ) -> None:
        self.reply = reply
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    async def generate(self, prompt: str, max_tokens: int = 200) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeMailer:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict[str, Any]] = []

    async def send(self, *, to: str, subject: str, text: str, html: str | None = None) -> None:
        if self.fail:
            raise EmailDeliveryFailedError()
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})


class FakeGeocoder:
    def __init__(self, point: tuple[float, float] = (52.52, 13.405)) -> None:
        self.point = point
        self.addresses: list[Mapping[str, object]] = []

    async def resolve(self, location: Mapping[str, object]) -> tuple[float, float]:
        self.addresses.append(location)
        return self.point


class RecordingMediaHost:
    def __init__(self) -> None:
        self.deleted: list[str] = []

    async def delete(self, public_id: str) -> None:
        self.deleted.append(public_id)


class FakeSubscriber:
    """Websocket stand-in for the chat hub."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.received: list[Any] = []

    async def send_json(self, data: Any) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.received.append(data)
