"""File Store: persist an uploaded resume and return a durable, fetchable URL."""

import asyncio
from pathlib import Path
from typing import Optional, Protocol

import httpx

from careerspark_ai.config import LOCAL_STORAGE_DIR, SUPABASE_BUCKET
from careerspark_ai.utils.helpers import build_storage_path
from careerspark_ai.utils.logger import get_logger

logger = get_logger(__name__)


class FileStore(Protocol):
    async def store(self, content: bytes, filename: str, owner_id: str, content_type: str = ...) -> Optional[str]:
        """Store the file under the owner's namespace; return its URL or None on failure."""
        ...


class SupabaseFileStore:
    """Supabase Storage bucket; returns the object's public URL."""

    def __init__(self, client: httpx.AsyncClient, bucket: str = SUPABASE_BUCKET) -> None:
        self._client = client
        self._bucket = bucket

    def public_url(self, path: str) -> str:
        base = str(self._client.base_url).rstrip("/")
        return f"{base}/storage/v1/object/public/{self._bucket}/{path}"

    async def store(
        self,
        content: bytes,
        filename: str,
        owner_id: str,
        content_type: str = "application/octet-stream",
    ) -> Optional[str]:
        path = build_storage_path(owner_id, filename)
        try:
            response = await self._client.post(
                f"/storage/v1/object/{self._bucket}/{path}",
                content=content,
                headers={"Content-Type": content_type, "x-upsert": "false"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Storage upload HTTP error: %s %s", e.response.status_code, e.response.text)
            return None
        except httpx.HTTPError as e:
            logger.error("Storage upload failed for %s: %s", path, e)
            return None
        logger.info("Uploaded resume to %s/%s (%s bytes)", self._bucket, path, len(content))
        return self.public_url(path)


class LocalFileStore:
    """Development store writing under a local directory; returns file:// URIs."""

    def __init__(self, root: str = LOCAL_STORAGE_DIR) -> None:
        self._root = Path(root)

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    async def store(
        self,
        content: bytes,
        filename: str,
        owner_id: str,
        content_type: str = "application/octet-stream",
    ) -> Optional[str]:
        target = (self._root / build_storage_path(owner_id, filename)).resolve()
        try:
            await asyncio.to_thread(self._write, target, content)
        except OSError as e:
            logger.error("Local upload failed for %s: %s", target, e)
            return None
        logger.info("Stored resume locally at %s", target)
        return target.as_uri()
