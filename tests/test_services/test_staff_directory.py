import unittest

import httpx
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
from organization.models import Organization
from staff.models import StaffMember, SecurityRole
from staff.directory import HttpStaffDirectory, SqlStaffDirectory, StaffDirectoryError
import models_bootstrap

STAFF = [
    {"id": 1, "first_name": "Anna", "last_name": "Berg", "role": "security_guard", "badge_number": "B-101"},
    {"id": 2, "first_name": "Omar", "last_name": "Haddad", "role": "team_lead", "is_active": True},
]


def directory_with(handler):
    client = httpx.Client(base_url="http://directory.local", transport=httpx.MockTransport(handler))
    return HttpStaffDirectory("http://directory.local", org_id=7, client=client)


class HttpStaffDirectoryTests(unittest.TestCase):
    def test_active_staff(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["active"] = request.url.params.get("active")
            seen["org"] = request.headers.get("X-Org-Id")
            return httpx.Response(200, json=STAFF)

        staff = directory_with(handler).get_active_staff()
        self.assertEqual([s.display_name for s in staff], ["Anna Berg", "Omar Haddad"])
        self.assertEqual(staff[1].role, SecurityRole.team_lead)
        self.assertEqual(seen, {"path": "/staff", "active": "true", "org": "7"})

    def test_get_staff(self):
        def handler(request):
            self.assertEqual(request.url.path, "/staff/1")
            return httpx.Response(200, json=STAFF[0])

        staff = directory_with(handler).get_staff(1)
        self.assertEqual(staff.badge_number, "B-101")

    def test_missing_staff_is_none(self):
        directory = directory_with(lambda request: httpx.Response(404, json={"detail": "nope"}))
        self.assertIsNone(directory.get_staff(99))

    def test_server_error_raises(self):
        directory = directory_with(lambda request: httpx.Response(503))
        with self.assertRaises(StaffDirectoryError):
            directory.get_active_staff()

    def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with self.assertRaises(StaffDirectoryError):
            directory_with(handler).get_staff(1)

    def test_malformed_payload_raises(self):
        directory = directory_with(lambda request: httpx.Response(200, json={"id": "abc"}))
        with self.assertRaises(StaffDirectoryError):
            directory.get_staff(1)
        directory = directory_with(lambda request: httpx.Response(200, text="<html>"))
        with self.assertRaises(StaffDirectoryError):
            directory.get_active_staff()


class SqlStaffDirectoryTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.db = sessionmaker(bind=self.engine, future=True)()

        org = Organization(name="Arena")
        other = Organization(name="Depot")
        self.db.add_all([org, other])
        self.db.flush()
        self.org_id = org.id
        self.db.add_all([
            StaffMember(org_id=org.id, first_name="Zoe", last_name="Young"),
            StaffMember(org_id=org.id, first_name="Anna", last_name="Berg"),
            StaffMember(org_id=org.id, first_name="Ida", last_name="Lund", is_active=False),
            StaffMember(org_id=other.id, first_name="Per", last_name="Aas"),
        ])
        self.db.commit()
        self.directory = SqlStaffDirectory(self.db, self.org_id)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_active_staff_sorted_and_scoped(self):
        names = [s.display_name for s in self.directory.get_active_staff()]
        self.assertEqual(names, ["Anna Berg", "Zoe Young"])

    def test_get_staff_includes_inactive(self):
        staff = [s for s in self.db.query(StaffMember).all() if s.first_name == "Ida"][0]
        found = self.directory.get_staff(staff.id)
        self.assertFalse(found.is_active)

    def test_other_org_hidden(self):
        per = [s for s in self.db.query(StaffMember).all() if s.first_name == "Per"][0]
        self.assertIsNone(self.directory.get_staff(per.id))


if __name__ == "__main__":
    unittest.main()
