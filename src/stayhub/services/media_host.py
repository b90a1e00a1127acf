"""Media host (Cloudinary): deletion of images that are no longer referenced.

Uploads happen client-side; the API only receives hosted ``{url, public_id}``
references. Deletion is best-effort, never fails the calling request and only
starts once the transaction that dropped the reference has committed.
"""

import hashlib
import time
from collections.abc import Iterable
from typing import Protocol

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub import background
from stayhub.config import Settings, settings
from stayhub.db.session import call_after_commit
from stayhub.logging import get_logger

logger = get_logger(__name__)


class MediaHost(Protocol):
    async def delete(self, public_id: str) -> None: ...


class CloudinaryMediaHost:
    def __init__(self, config: Settings) -> None:
        self._cloud_name = config.cloudinary_cloud_name
        self._api_key = config.cloudinary_api_key
        self._api_secret = config.cloudinary_api_secret
        self._timeout = config.media_timeout

    def _signature(self, params: dict[str, str]) -> str:
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1((to_sign + self._api_secret).encode()).hexdigest()

    async def delete(self, public_id: str) -> None:
        params = {"public_id": public_id, "timestamp": str(int(time.time()))}
        data = {**params, "api_key": self._api_key, "signature": self._signature(params)}
        url = f"https://api.cloudinary.com/v1_1/{self._cloud_name}/image/destroy"
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(url, data=data)
            response.raise_for_status()
        logger.info("media_deleted", public_id=public_id)


class NullMediaHost:
    """Used when no media host is configured."""

    async def delete(self, public_id: str) -> None:
        logger.debug("media_delete_skipped", public_id=public_id)


def build_media_host(config: Settings = settings) -> MediaHost:
    if config.cloudinary_cloud_name and config.cloudinary_api_key:
        return CloudinaryMediaHost(config)
    return NullMediaHost()


def public_ids(media: Iterable[dict[str, str]] | None) -> list[str]:
    return [item["public_id"] for item in media or [] if item.get("public_id")]


def _spawn_deletes(host: MediaHost, ids: list[str]) -> None:
    for public_id in ids:
        background.spawn(
            host.delete(public_id),
            name=f"media-delete:{public_id}",
            timeout=settings.media_timeout,
        )


def discard_media(db: AsyncSession, host: MediaHost, ids: Iterable[str]) -> None:
    """Delete each media id from the host once ``db`` commits. Nothing happens on rollback."""
    pending = list(ids)
    if pending:
        call_after_commit(db, lambda: _spawn_deletes(host, pending))
