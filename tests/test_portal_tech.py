import sys
import os
import unittest
from datetime import date, timedelta

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient

from content.site import REVIEWS, average_rating
from factories import auth_headers, make_job, make_property, make_technician, make_user, reset_db
from main import app
from models.invoice import Invoice
from models.membership import Membership
from models.unit import Unit
from routers.portal import warranty_status


class TestCustomerPortal(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.client = TestClient(app)
        self.customer = make_user(self.db, name="Derby Diner")
        self.headers = auth_headers("CUSTOMER", uid=self.customer.id, email=self.customer.email)

    def tearDown(self):
        self.db.close()

    def test_warranty_status(self):
        today = date(2026, 10, 19)
        self.assertEqual(warranty_status(None, today), "No warranty on file")
        self.assertEqual(warranty_status(date(2025, 1, 1), today), "Out of warranty")
        self.assertEqual(warranty_status(date(2030, 6, 1), today), "Warranty until 2030")

    def test_portal(self):
        prop = make_property(self.db, self.customer)
        tech = make_technician(self.db, name="Mike Johnson")
        make_job(self.db, self.customer, prop, "FDP-2026-001", status="COMPLETED", technician_id=tech.id, actual_cost=320.0)
        self.db.add_all([
            Unit(property_id=prop.id, unit_type="Walk-in Cooler", brand="True", warranty_end=date.today() - timedelta(days=1)),
            Invoice(invoice_number="INV-0001", customer_id=self.customer.id, total=100, status="SENT"),
            Invoice(invoice_number="INV-0002", customer_id=self.customer.id, total=50, status="PAID"),
            Invoice(invoice_number="INV-0003", customer_id=self.customer.id, total=25, status="VOID"),
            Membership(customer_id=self.customer.id, plan="GOLD", status="ACTIVE", start_date=date.today(),
                       renewal_date=date.today() + timedelta(days=300), monthly_rate=79, visits_per_year=2, visits_used=3),
        ])
        self.db.commit()

        resp = self.client.get("/portal", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        page = resp.json()
        self.assertEqual(page["service_history"][0]["technician"], "Mike Johnson")
        self.assertEqual(page["service_history"][0]["cost"], 320.0)
        self.assertEqual(page["units"][0]["warranty"], "Out of warranty")
        self.assertEqual(len(page["invoices"]), 2)
        self.assertEqual(page["balance_due"], 100)
        self.assertEqual(page["membership"]["plan"], "Gold")
        self.assertEqual(page["membership"]["visits_remaining"], 0)

    def test_portal_without_membership(self):
        page = self.client.get("/portal", headers=self.headers).json()
        self.assertIsNone(page["membership"])
        self.assertEqual(page["service_history"], [])

    def test_staff_cannot_open_portal(self):
        self.assertEqual(self.client.get("/portal", headers=auth_headers("OWNER")).status_code, 403)


class TestTechView(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.client = TestClient(app)
        self.tech = make_technician(self.db, name="Mike Johnson", truck="T-07")
        self.headers = auth_headers("TECHNICIAN", uid=self.tech.id, email=self.tech.email)

    def tearDown(self):
        self.db.close()

    def test_day_view(self):
        customer = make_user(self.db, name="Derby Diner")
        prop = make_property(self.db, customer)
        other = make_technician(self.db, name="Other Tech", truck="T-08")
        make_job(self.db, customer, prop, "FDP-2026-001", status="COMPLETED", technician_id=self.tech.id, scheduled_start="07:30")
        make_job(self.db, customer, prop, "FDP-2026-002", status="IN_PROGRESS", technician_id=self.tech.id, scheduled_start="10:00")
        make_job(self.db, customer, prop, "FDP-2026-003", status="SCHEDULED", technician_id=self.tech.id, scheduled_start="14:00")
        make_job(self.db, customer, prop, "FDP-2026-004", status="SCHEDULED", technician_id=other.id, scheduled_start="08:00")
        make_job(self.db, customer, prop, "FDP-2026-005", status="SCHEDULED", technician_id=self.tech.id,
                 scheduled_date=date.today() + timedelta(days=1))

        resp = self.client.get("/tech", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        page = resp.json()
        self.assertEqual(page["technician"]["truck_number"], "T-07")
        self.assertEqual(page["total"], 3)
        self.assertEqual(page["completed"], 1)
        self.assertEqual(page["current_job"]["job_number"], "FDP-2026-002")
        self.assertEqual(page["next_job"]["job_number"], "FDP-2026-003")
        self.assertEqual(page["counts"], {"COMPLETED": 1, "IN_PROGRESS": 1, "SCHEDULED": 1})

    def test_empty_day(self):
        page = self.client.get("/tech", headers=self.headers).json()
        self.assertEqual(page["total"], 0)
        self.assertIsNone(page["current_job"])
        self.assertIsNone(page["next_job"])


class TestSitePages(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_lists_pages(self):
        pages = self.client.get("/site").json()["pages"]
        self.assertIn("home", pages)
        self.assertIn("emergency", pages)

    def test_each_page_renders(self):
        for page in self.client.get("/site").json()["pages"]:
            self.assertEqual(self.client.get(f"/site/{page}").status_code, 200, page)

    def test_unknown_page(self):
        resp = self.client.get("/site/blog")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Page not found")

    def test_reviews_average(self):
        page = self.client.get("/site/reviews").json()
        self.assertEqual(page["average_rating"], average_rating(REVIEWS))
        self.assertEqual(page["count"], len(REVIEWS))
        self.assertEqual(average_rating([]), 0)


if __name__ == "__main__":
    unittest.main()
