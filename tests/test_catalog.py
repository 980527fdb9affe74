"""Tests for the service catalog: label parsing, CRUD, seeding."""

import unittest

from _support import make_session_factory

from app.core.errors import NotFoundError, ValidationError
from app.models import Application, Service
from app.services import catalog


class TestParseDocumentLabels(unittest.TestCase):
    def test_splits_trims_and_drops_blanks(self) -> None:
        self.assertEqual(
            catalog.parse_document_labels("Aadhaar, Photo,,  Address Proof ,"),
            ["Aadhaar", "Photo", "Address Proof"],
        )

    def test_accepts_list_and_none(self) -> None:
        self.assertEqual(catalog.parse_document_labels([" Aadhaar ", ""]), ["Aadhaar"])
        self.assertEqual(catalog.parse_document_labels(None), [])
        self.assertEqual(catalog.parse_document_labels(""), [])

    def test_keeps_order(self) -> None:
        self.assertEqual(catalog.parse_document_labels("Photo,Aadhaar"), ["Photo", "Aadhaar"])


class TestCatalogCrud(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_create_and_get(self) -> None:
        created = catalog.create_service(self.db, " PAN Card ", "New PAN", "Aadhaar, Photo")
        loaded = catalog.get_service(self.db, created.id)
        self.assertEqual(loaded.name, "PAN Card")
        self.assertEqual(loaded.required_documents, ["Aadhaar", "Photo"])

    def test_create_requires_name(self) -> None:
        with self.assertRaises(ValidationError):
            catalog.create_service(self.db, "   ", "", "Aadhaar")
        self.assertEqual(self.db.query(Service).count(), 0)

    def test_list_is_newest_first(self) -> None:
        first = catalog.create_service(self.db, "First", "", "")
        second = catalog.create_service(self.db, "Second", "", "")
        ids = [s.id for s in catalog.list_services(self.db)]
        self.assertEqual(ids, [second.id, first.id])

    def test_update_replaces_labels(self) -> None:
        service = catalog.create_service(self.db, "Driving License", "", "Aadhaar")
        catalog.update_service(self.db, service.id, "Driving License", "Permanent", "Photo, Address Proof")
        reloaded = catalog.get_service(self.db, service.id)
        self.assertEqual(reloaded.description, "Permanent")
        self.assertEqual(reloaded.required_documents, ["Photo", "Address Proof"])

    def test_update_unknown_service(self) -> None:
        with self.assertRaises(NotFoundError):
            catalog.update_service(self.db, 999, "X", "", "")

    def test_delete_requires_confirmation(self) -> None:
        service = catalog.create_service(self.db, "Aadhaar Update", "", "Aadhaar")
        with self.assertRaises(ValidationError):
            catalog.delete_service(self.db, service.id, confirm=False)
        self.assertEqual(self.db.query(Service).count(), 1)

    def test_delete_keeps_applications(self) -> None:
        service = catalog.create_service(self.db, "Passport Application", "", "Photo")
        self.db.add(
            Application(tracking_code="DSC-111111", user_id="u1", service_id=service.id)
        )
        self.db.commit()
        catalog.delete_service(self.db, service.id, confirm=True)
        self.assertEqual(self.db.query(Service).count(), 0)
        self.assertEqual(self.db.query(Application).count(), 1)


class TestSeedDefaultServices(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_seeds_empty_catalog_once(self) -> None:
        inserted = catalog.seed_default_services(self.db)
        self.assertEqual(inserted, len(catalog.DEFAULT_SERVICES))
        self.assertEqual(catalog.seed_default_services(self.db), 0)
        names = {s.name for s in catalog.list_services(self.db)}
        self.assertIn("PAN Card", names)

    def test_pan_card_requires_aadhaar_and_photo(self) -> None:
        catalog.seed_default_services(self.db)
        pan = self.db.query(Service).filter(Service.name == "PAN Card").one()
        self.assertEqual(pan.required_documents, ["Aadhaar", "Photo"])


if __name__ == "__main__":
    unittest.main()
