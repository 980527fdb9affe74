"""Tests for the customer application workflow: tracking codes, submission, deletion, tracking."""

import re
import unittest
from unittest.mock import MagicMock

from _support import RecordingBlobStore, add_service, add_user, make_session_factory

from app.core.errors import MissingDocuments, NotFoundError, UpstreamError, ValidationError
from app.models import Application, Document
from app.services import applications as workflow
from app.services.applications import UploadedDocument

TRACKING_CODE_RE = re.compile(r"^DSC-[1-9]\d{5}$")


def _files(*labels: str) -> dict[str, UploadedDocument]:
    return {
        label: UploadedDocument(filename=f"{label.lower()}.pdf", content=b"%PDF-1.4", content_type="application/pdf")
        for label in labels
    }


class TestTrackingCodes(unittest.TestCase):
    def test_format(self) -> None:
        for _ in range(200):
            self.assertRegex(workflow.generate_tracking_code(), TRACKING_CODE_RE)

    def test_bounds(self) -> None:
        low = MagicMock()
        low.randint.return_value = 100000
        self.assertEqual(workflow.generate_tracking_code(low), "DSC-100000")
        low.randint.assert_called_once_with(100000, 999999)

    def test_collision_retries_until_unused(self) -> None:
        db = make_session_factory()()
        db.add(Application(tracking_code="DSC-123456", user_id="u1", service_id=None))
        db.commit()
        rng = MagicMock()
        rng.randint.side_effect = [123456, 123456, 654321]
        self.assertEqual(workflow.allocate_tracking_code(db, 5, rng), "DSC-654321")
        self.assertEqual(rng.randint.call_count, 3)
        db.close()

    def test_gives_up_after_max_attempts(self) -> None:
        db = make_session_factory()()
        db.add(Application(tracking_code="DSC-123456", user_id="u1", service_id=None))
        db.commit()
        rng = MagicMock()
        rng.randint.return_value = 123456
        with self.assertRaises(UpstreamError):
            workflow.allocate_tracking_code(db, 3, rng)
        self.assertEqual(rng.randint.call_count, 3)
        db.close()


class TestDocumentPath(unittest.TestCase):
    def test_label_and_extension(self) -> None:
        self.assertEqual(
            workflow.document_path("uid1", 7, "Aadhaar", "scan.PDF"),
            "uid1/7/Aadhaar.pdf",
        )

    def test_last_extension_wins(self) -> None:
        self.assertEqual(workflow.document_path("u", 1, "Photo", "me.final.jpeg"), "u/1/Photo.jpeg")

    def test_no_extension_uses_bin(self) -> None:
        self.assertEqual(workflow.document_path("u", 1, "Photo", "photo"), "u/1/Photo.bin")

    def test_separators_in_label_are_replaced(self) -> None:
        self.assertEqual(
            workflow.document_path("u", 1, "Address/Proof", "a.png"),
            "u/1/Address-Proof.png",
        )

    def test_path_characters_in_extension_fall_back_to_bin(self) -> None:
        self.assertEqual(
            workflow.document_path("u", 5, "Aadhaar", "x./../../../victim/9/photo"),
            "u/5/Aadhaar.bin",
        )
        self.assertEqual(workflow.document_path("u", 5, "Aadhaar", "scan.tar gz"), "u/5/Aadhaar.bin")
        self.assertEqual(
            workflow.document_path("u", 5, "Aadhaar", "scan.extremelylong"),
            "u/5/Aadhaar.bin",
        )


class TestSubmitApplication(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.user = add_user(self.db, "uid-asha", "Asha", "asha@example.com")
        self.service = add_service(self.db, "PAN Card", ["Aadhaar", "Photo"])

    def tearDown(self) -> None:
        self.db.close()

    def test_creates_pending_application_with_one_document_per_label(self) -> None:
        store = RecordingBlobStore()
        application = workflow.submit_application(
            self.db, store, self.user.id, self.service.id, _files("Aadhaar", "Photo")
        )
        self.assertRegex(application.tracking_code, TRACKING_CODE_RE)
        self.assertEqual(application.status, "pending")
        self.assertEqual(application.remarks, "")
        self.assertEqual([d.label for d in application.documents], ["Aadhaar", "Photo"])
        self.assertEqual(
            sorted(store.blobs),
            [f"uid-asha/{application.id}/Aadhaar.pdf", f"uid-asha/{application.id}/Photo.pdf"],
        )
        self.assertTrue(application.documents[0].file_url.startswith("https://files.test/uid-asha/"))

    def test_extra_files_are_ignored(self) -> None:
        store = RecordingBlobStore()
        application = workflow.submit_application(
            self.db, store, self.user.id, self.service.id, _files("Aadhaar", "Photo", "Ration Card")
        )
        self.assertEqual(len(application.documents), 2)
        self.assertEqual(store.upload_calls, 2)

    def test_missing_documents_write_nothing(self) -> None:
        store = RecordingBlobStore()
        with self.assertRaises(MissingDocuments) as ctx:
            workflow.submit_application(self.db, store, self.user.id, self.service.id, _files("Aadhaar"))
        self.assertEqual(ctx.exception.missing, ["Photo"])
        self.assertIn("Photo", ctx.exception.message)
        self.assertEqual(self.db.query(Application).count(), 0)
        self.assertEqual(store.upload_calls, 0)

    def test_empty_file_counts_as_missing(self) -> None:
        files = _files("Aadhaar", "Photo")
        files["Photo"] = UploadedDocument(filename="photo.jpg", content=b"")
        with self.assertRaises(MissingDocuments) as ctx:
            workflow.submit_application(self.db, RecordingBlobStore(), self.user.id, self.service.id, files)
        self.assertEqual(ctx.exception.missing, ["Photo"])

    def test_unknown_service(self) -> None:
        with self.assertRaises(NotFoundError):
            workflow.submit_application(self.db, RecordingBlobStore(), self.user.id, 999, {})

    def test_service_without_requirements_submits_with_no_documents(self) -> None:
        bare = add_service(self.db, "Consultation", [])
        application = workflow.submit_application(self.db, RecordingBlobStore(), self.user.id, bare.id, {})
        self.assertEqual(application.documents, [])

    def test_upload_failure_rolls_back_and_removes_blobs(self) -> None:
        store = RecordingBlobStore(fail_on_upload=2)
        with self.assertRaises(UpstreamError) as ctx:
            workflow.submit_application(
                self.db, store, self.user.id, self.service.id, _files("Aadhaar", "Photo")
            )
        self.assertIn("500", ctx.exception.message)
        self.assertEqual(self.db.query(Application).count(), 0)
        self.assertEqual(self.db.query(Document).count(), 0)
        self.assertEqual(len(store.deleted), 1)
        self.assertEqual(store.blobs, {})

    def test_each_submission_gets_a_distinct_code(self) -> None:
        codes = {
            workflow.submit_application(
                self.db, RecordingBlobStore(), self.user.id, self.service.id, _files("Aadhaar", "Photo")
            ).tracking_code
            for _ in range(5)
        }
        self.assertEqual(len(codes), 5)


class TestCustomerApplications(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.owner = add_user(self.db, "owner", "Asha", "asha@example.com")
        self.other = add_user(self.db, "other", "Ravi", "ravi@example.com")
        self.service = add_service(self.db, "PAN Card", ["Aadhaar", "Photo"])
        self.store = RecordingBlobStore()
        self.application = workflow.submit_application(
            self.db, self.store, self.owner.id, self.service.id, _files("Aadhaar", "Photo")
        )

    def tearDown(self) -> None:
        self.db.close()

    def test_list_is_scoped_to_owner(self) -> None:
        self.assertEqual(len(workflow.list_user_applications(self.db, self.owner.id)), 1)
        self.assertEqual(workflow.list_user_applications(self.db, self.other.id), [])

    def test_other_users_cannot_open(self) -> None:
        with self.assertRaises(NotFoundError):
            workflow.get_user_application(self.db, self.other.id, self.application.id)

    def test_delete_requires_confirmation(self) -> None:
        with self.assertRaises(ValidationError):
            workflow.delete_user_application(self.db, self.store, self.owner.id, self.application.id, False)
        self.assertEqual(self.db.query(Application).count(), 1)

    def test_delete_removes_rows_and_blobs(self) -> None:
        application_id = self.application.id
        workflow.delete_user_application(self.db, self.store, self.owner.id, application_id, True)
        self.assertEqual(self.db.query(Application).count(), 0)
        self.assertEqual(self.db.query(Document).count(), 0)
        self.assertEqual(self.store.blobs, {})

    def test_delete_by_other_user_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            workflow.delete_user_application(self.db, self.store, self.other.id, self.application.id, True)
        self.assertEqual(self.db.query(Application).count(), 1)


class TestTrackApplication(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        user = add_user(self.db, "owner", "Asha", "asha@example.com")
        service = add_service(self.db, "PAN Card", ["Aadhaar"])
        self.application = workflow.submit_application(
            self.db, RecordingBlobStore(), user.id, service.id, _files("Aadhaar")
        )

    def tearDown(self) -> None:
        self.db.close()

    def test_exact_code_returns_public_fields(self) -> None:
        result = workflow.track_application(self.db, f"  {self.application.tracking_code} ")
        self.assertEqual(result.tracking_code, self.application.tracking_code)
        self.assertEqual(result.service_name, "PAN Card")
        self.assertEqual(result.status, "pending")

    def test_unknown_code(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            workflow.track_application(self.db, "DSC-000000")
        self.assertEqual(ctx.exception.message, "Application not found. Please check the ID.")

    def test_empty_code(self) -> None:
        with self.assertRaises(ValidationError):
            workflow.track_application(self.db, "   ")


if __name__ == "__main__":
    unittest.main()
