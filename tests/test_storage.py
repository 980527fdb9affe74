"""Tests for the local filesystem and Supabase blob stores."""

import json
import tempfile
import unittest
from pathlib import Path

import httpx

from app.storage import BlobStore, StorageError
from app.storage.local import LocalBlobStore
from app.storage.supabase import SupabaseBlobStore


class TestLocalBlobStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = LocalBlobStore(self._tmp.name, "/files/")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_satisfies_protocol(self) -> None:
        self.assertIsInstance(self.store, BlobStore)

    def test_upload_writes_under_root(self) -> None:
        self.store.upload("uid/1/Aadhaar.pdf", b"%PDF", "application/pdf")
        self.assertEqual((Path(self._tmp.name) / "uid/1/Aadhaar.pdf").read_bytes(), b"%PDF")

    def test_existing_path_is_conflict(self) -> None:
        self.store.upload("uid/1/Photo.jpg", b"a")
        with self.assertRaises(StorageError) as ctx:
            self.store.upload("uid/1/Photo.jpg", b"b")
        self.assertEqual(ctx.exception.status_code, 409)

    def test_rejects_paths_outside_root(self) -> None:
        with self.assertRaises(StorageError):
            self.store.upload("../escape.txt", b"x")

    def test_public_url_is_quoted(self) -> None:
        self.assertEqual(
            self.store.get_public_url("uid/1/Address Proof.png"),
            "/files/uid/1/Address%20Proof.png",
        )

    def test_delete_ignores_missing(self) -> None:
        self.store.upload("uid/1/Photo.jpg", b"a")
        self.store.delete(["uid/1/Photo.jpg", "uid/1/Missing.jpg"])
        self.assertFalse((Path(self._tmp.name) / "uid/1/Photo.jpg").exists())


class TestSupabaseBlobStore(unittest.TestCase):
    def _store(self, handler) -> SupabaseBlobStore:
        return SupabaseBlobStore(
            "https://project.supabase.test/",
            "service-key",
            "documents",
            transport=httpx.MockTransport(handler),
        )

    def test_upload_posts_without_upsert(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["upsert"] = request.headers.get("x-upsert")
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = request.content
            return httpx.Response(200, json={"Key": "documents/uid/1/Aadhaar.pdf"})

        self._store(handler).upload("uid/1/Aadhaar.pdf", b"%PDF", "application/pdf")
        self.assertEqual(seen["method"], "POST")
        self.assertEqual(seen["path"], "/storage/v1/object/documents/uid/1/Aadhaar.pdf")
        self.assertEqual(seen["upsert"], "false")
        self.assertEqual(seen["auth"], "Bearer service-key")
        self.assertEqual(seen["body"], b"%PDF")

    def test_upload_error_carries_status_and_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(409, json={"message": "The resource already exists"})

        with self.assertRaises(StorageError) as ctx:
            self._store(handler).upload("uid/1/Photo.jpg", b"x")
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertIn("already exists", ctx.exception.message)

    def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(StorageError):
            self._store(handler).upload("uid/1/Photo.jpg", b"x")

    def test_public_url(self) -> None:
        store = self._store(lambda r: httpx.Response(200))
        self.assertEqual(
            store.get_public_url("uid/1/Photo.jpg"),
            "https://project.supabase.test/storage/v1/object/public/documents/uid/1/Photo.jpg",
        )

    def test_delete_sends_prefixes(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=[])

        self._store(handler).delete(["uid/1/Aadhaar.pdf", "uid/1/Photo.jpg"])
        self.assertEqual(seen["method"], "DELETE")
        self.assertEqual(seen["body"], {"prefixes": ["uid/1/Aadhaar.pdf", "uid/1/Photo.jpg"]})

    def test_delete_nothing_makes_no_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        self._store(handler).delete([])


if __name__ == "__main__":
    unittest.main()
