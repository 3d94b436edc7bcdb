# tests/test_services/test_gate_services.py
import unittest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from core.database import Base
from core.errors import ValidationError, NotFoundError
from organization.models import Organization
from gate import service
from gate.catalogue import GateLocation, format_gate_location
from gate.schemas import GateCreate, GateUpdate
from gate_coverage.cache import coverage_cache
import models_bootstrap


class GateServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, future=True)
        self.db = self.Session()

        org = Organization(name="Expo Hall")
        other = Organization(name="Harbour Terminal")
        self.db.add_all([org, other])
        self.db.commit()
        self.org_id, self.other_org_id = org.id, other.id
        coverage_cache.clear()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_fixed_catalogue_always_present(self):
        gates = service.get_gates(self.db, org_id=self.org_id)
        self.assertEqual([g.code for g in gates], [g.value for g in GateLocation])
        self.assertEqual(gates[0].name, "Main Gate")
        self.assertFalse(any(g.is_custom for g in gates))

    def test_format_gate_location(self):
        self.assertEqual(format_gate_location("vip_entrance"), "Vip Entrance")
        self.assertEqual(format_gate_location("loading_dock_2"), "Loading Dock 2")

    def test_create_custom_gate(self):
        created = service.create_gate(self.db, GateCreate(org_id=self.org_id, code="Loading_Dock "))
        self.assertEqual(created.code, "loading_dock")
        self.assertEqual(created.name, "Loading Dock")
        self.assertTrue(created.is_custom)

        codes = [g.code for g in service.get_gates(self.db, org_id=self.org_id)]
        self.assertEqual(codes[-1], "loading_dock")
        self.assertTrue(service.is_known_gate(self.db, "loading_dock", self.org_id))
        # custom gates are per organization
        self.assertFalse(service.is_known_gate(self.db, "loading_dock", self.other_org_id))

    def test_fixed_codes_cannot_be_created(self):
        with self.assertRaises(ValidationError):
            service.create_gate(self.db, GateCreate(org_id=self.org_id, code="main_gate"))

    def test_bad_codes_rejected(self):
        for code in ("", "9lives", "has space", "x"):
            with self.assertRaises(ValidationError, msg=code):
                service.create_gate(self.db, GateCreate(org_id=self.org_id, code=code))

    def test_duplicate_active_code_hits_unique_constraint(self):
        service.create_gate(self.db, GateCreate(org_id=self.org_id, code="loading_dock"))
        with self.assertRaises(IntegrityError):
            service.create_gate(self.db, GateCreate(org_id=self.org_id, code="loading_dock"))
        self.db.rollback()

    def test_update_custom_gate(self):
        service.create_gate(self.db, GateCreate(org_id=self.org_id, code="loading_dock"))
        updated = service.update_gate(
            self.db, "loading_dock", GateUpdate(name="Dock A", description="Trucks only"), org_id=self.org_id
        )
        self.assertEqual(updated.name, "Dock A")
        self.assertEqual(updated.description, "Trucks only")

    def test_fixed_gates_cannot_be_changed_or_removed(self):
        with self.assertRaises(ValidationError):
            service.update_gate(self.db, "main_gate", GateUpdate(name="Front"), org_id=self.org_id)
        with self.assertRaises(ValidationError):
            service.deactivate_gate(self.db, "main_gate", org_id=self.org_id)

    def test_deactivate_then_recreate(self):
        service.create_gate(self.db, GateCreate(org_id=self.org_id, code="loading_dock"))
        service.deactivate_gate(self.db, "loading_dock", org_id=self.org_id)
        self.assertIsNone(service.get_gate(self.db, "loading_dock", self.org_id))
        self.assertFalse(service.is_known_gate(self.db, "loading_dock", self.org_id))

        again = service.create_gate(self.db, GateCreate(org_id=self.org_id, code="loading_dock", name="Dock B"))
        self.assertEqual(again.name, "Dock B")

    def test_gate_changes_invalidate_coverage_cache(self):
        coverage_cache.put(self.org_id, "board", ["stale"])
        service.create_gate(self.db, GateCreate(org_id=self.org_id, code="loading_dock"))
        self.assertIsNone(coverage_cache.get(self.org_id, "board"))

        coverage_cache.put(self.org_id, "board", ["stale"])
        service.update_gate(self.db, "loading_dock", GateUpdate(name="Dock A"), org_id=self.org_id)
        self.assertIsNone(coverage_cache.get(self.org_id, "board"))

        coverage_cache.put(self.org_id, "board", ["stale"])
        coverage_cache.put(self.other_org_id, "board", ["kept"])
        service.deactivate_gate(self.db, "loading_dock", org_id=self.org_id)
        self.assertIsNone(coverage_cache.get(self.org_id, "board"))
        self.assertEqual(coverage_cache.get(self.other_org_id, "board"), ["kept"])

    def test_deactivate_unknown_gate(self):
        with self.assertRaises(NotFoundError):
            service.deactivate_gate(self.db, "nowhere", org_id=self.org_id)


if __name__ == "__main__":
    unittest.main()
