"""Supabase Storage blob store over its REST API."""

import logging
from urllib.parse import quote

import httpx

from app.storage.base import StorageError

logger = logging.getLogger(__name__)


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
        return str(body.get("message") or body.get("error") or body)[:500]
    except ValueError:
        return resp.text[:500] if resp.text else "Unknown error"


class SupabaseBlobStore:
    """Uploads to a Supabase Storage bucket; public URLs require a public bucket."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        bucket: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._bucket = bucket
        self._timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {service_key}",
            "apikey": service_key,
        }
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    def upload(self, path: str, content: bytes, content_type: str | None = None) -> None:
        url = f"{self._base_url}/storage/v1/object/{self._bucket}/{quote(path)}"
        headers = {
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "false",
        }
        try:
            with self._client() as client:
                resp = client.post(url, content=content, headers=headers)
        except httpx.HTTPError as e:
            raise StorageError(f"Storage service unreachable: {e}") from e
        if resp.status_code >= 400:
            raise StorageError(
                f"Storage returned {resp.status_code}: {_error_detail(resp)}",
                resp.status_code,
            )
        logger.debug("Uploaded document to bucket=%s path=%s", self._bucket, path)

    def get_public_url(self, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self._bucket}/{quote(path)}"

    def delete(self, paths: list[str]) -> None:
        if not paths:
            return
        url = f"{self._base_url}/storage/v1/object/{self._bucket}"
        try:
            with self._client() as client:
                resp = client.request("DELETE", url, json={"prefixes": paths})
        except httpx.HTTPError as e:
            raise StorageError(f"Storage service unreachable: {e}") from e
        if resp.status_code >= 400:
            raise StorageError(
                f"Storage returned {resp.status_code}: {_error_detail(resp)}",
                resp.status_code,
            )
