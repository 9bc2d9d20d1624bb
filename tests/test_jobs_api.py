import sys
import os
import unittest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient

from factories import auth_headers, make_job, make_property, make_technician, make_user, reset_db
from main import app
from models.invoice import Invoice
from models.job import Job
from models.lead import Lead
from routers.jobs import next_job_number


class TestJobNumbers(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.customer = make_user(self.db, name="Derby Diner")
        self.prop = make_property(self.db, self.customer)

    def tearDown(self):
        self.db.close()

    def test_first_of_year(self):
        self.assertEqual(next_job_number(self.db, 2026), "FDP-2026-001")

    def test_numeric_not_lexicographic(self):
        for number in ("FDP-2026-009", "FDP-2026-010", "FDP-2025-050"):
            make_job(self.db, self.customer, self.prop, number)
        self.assertEqual(next_job_number(self.db, 2026), "FDP-2026-011")
        self.assertEqual(next_job_number(self.db, 2025), "FDP-2025-051")

    def test_past_three_digits(self):
        for number in ("FDP-2026-999", "FDP-2026-1000"):
            make_job(self.db, self.customer, self.prop, number)
        self.assertEqual(next_job_number(self.db, 2026), "FDP-2026-1001")


class TestJobsApi(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.client = TestClient(app)
        self.headers = auth_headers("DISPATCHER")
        self.customer = make_user(self.db, name="Derby Diner")
        self.prop = make_property(self.db, self.customer)
        self.tech = make_technician(self.db, name="Mike Johnson")

    def tearDown(self):
        self.db.close()

    def payload(self, **overrides):
        data = {
            "title": "Ice machine leaking",
            "description": "Water under the unit",
            "jobType": "REPAIR",
            "customerId": self.customer.id,
            "propertyId": self.prop.id,
        }
        data.update(overrides)
        return data

    def test_create_unassigned(self):
        resp = self.client.post("/api/jobs/", json=self.payload(), headers=self.headers)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["status"], "PENDING")
        self.assertEqual(body["priority"], "NORMAL")
        self.assertTrue(body["jobNumber"].startswith("FDP-"))
        self.assertIsNone(body["technician"])
        self.assertEqual(body["customer"]["name"], "Derby Diner")

    def test_create_scheduled(self):
        resp = self.client.post(
            "/api/jobs/",
            json=self.payload(technicianId=self.tech.id, scheduledDate="2026-10-20", scheduledStart="08:00"),
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["status"], "SCHEDULED")
        self.assertEqual(resp.json()["technician"]["name"], "Mike Johnson")

    def test_sequential_numbers(self):
        first = self.client.post("/api/jobs/", json=self.payload(), headers=self.headers).json()
        second = self.client.post("/api/jobs/", json=self.payload(), headers=self.headers).json()
        self.assertEqual(int(second["jobNumber"].rsplit("-", 1)[1]), int(first["jobNumber"].rsplit("-", 1)[1]) + 1)

    def test_validation(self):
        resp = self.client.post("/api/jobs/", json={"title": "x"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post("/api/jobs/", json=self.payload(jobType="PLUMBING"), headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post("/api/jobs/", json=self.payload(customerId=9999), headers=self.headers)
        self.assertEqual(resp.status_code, 404)

        resp = self.client.post("/api/jobs/", json=self.payload(technicianId=self.customer.id), headers=self.headers)
        self.assertEqual(resp.status_code, 404)

    def test_rejects_free_text_times(self):
        for overrides in ({"scheduledStart": "9am"}, {"scheduledEnd": "17:75"}, {"scheduledStart": 900}):
            resp = self.client.post("/api/jobs/", json=self.payload(**overrides), headers=self.headers)
            self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.db.query(Job).count(), 0)

        # overview still renders for a job stored before validation existed
        make_job(self.db, self.customer, self.prop, "FDP-2026-001", scheduled_start="9am")
        resp = self.client.get("/dashboard", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["recent_jobs"][0]["time"])

    def test_estimated_cost(self):
        resp = self.client.post("/api/jobs/", json=self.payload(estimatedCost=0), headers=self.headers)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["estimatedCost"], 0.0)

        resp = self.client.post("/api/jobs/", json=self.payload(estimatedCost=[1, 2]), headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/jobs/", json=self.payload(estimatedCost="abc"), headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_list_filters(self):
        make_job(self.db, self.customer, self.prop, "FDP-2026-001", status="PENDING")
        make_job(self.db, self.customer, self.prop, "FDP-2026-002", status="COMPLETED", job_type="MAINTENANCE")

        resp = self.client.get("/api/jobs/?status=COMPLETED", headers=self.headers)
        self.assertEqual([j["jobNumber"] for j in resp.json()], ["FDP-2026-002"])

        resp = self.client.get("/api/jobs/?status=BOGUS", headers=self.headers)
        self.assertEqual(len(resp.json()), 2)

    def test_requires_staff(self):
        resp = self.client.get("/api/jobs/", headers=auth_headers("TECHNICIAN"))
        self.assertEqual(resp.status_code, 403)


class TestLeadsApi(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.client = TestClient(app)
        self.headers = auth_headers("ADMIN")

    def tearDown(self):
        self.db.close()

    def test_create_lead(self):
        resp = self.client.post(
            "/api/leads/",
            json={"name": "Kim", "phone": "(502) 555-0123", "serviceNeeded": "RTU replacement", "source": "TIKTOK", "urgency": 6},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["source"], "WEBSITE")
        self.assertEqual(resp.json()["status"], "NEW")
        self.assertEqual(self.db.query(Lead).one().urgency, 6)

    def test_urgency_out_of_range(self):
        resp = self.client.post(
            "/api/leads/",
            json={"name": "Kim", "phone": "1", "serviceNeeded": "Repair", "urgency": 11},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)

    def test_status_filter(self):
        self.db.add_all([
            Lead(name="A", phone="1", service_needed="Repair", status="NEW"),
            Lead(name="B", phone="2", service_needed="Repair", status="WON"),
        ])
        self.db.commit()
        resp = self.client.get("/api/leads/?status=WON", headers=self.headers)
        self.assertEqual([ld["name"] for ld in resp.json()], ["B"])


class TestRosterApi(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.client = TestClient(app)
        self.headers = auth_headers("OWNER")

    def tearDown(self):
        self.db.close()

    def test_customers(self):
        customer = make_user(self.db, name="Derby Diner")
        make_property(self.db, customer)
        self.db.add_all([
            Invoice(invoice_number="INV-0001", customer_id=customer.id, total=120.5, status="PAID"),
            Invoice(invoice_number="INV-0002", customer_id=customer.id, total=80, status="PAID"),
            Invoice(invoice_number="INV-0003", customer_id=customer.id, total=999, status="OVERDUE"),
        ])
        self.db.commit()

        body = self.client.get("/api/customers/", headers=self.headers).json()
        self.assertEqual(len(body), 1)
        self.assertEqual(body[0]["invoiceCount"], 2)
        self.assertEqual(body[0]["totalSpent"], 200.5)
        self.assertEqual(len(body[0]["properties"]), 1)

    def test_technicians(self):
        customer = make_user(self.db, name="Derby Diner")
        prop = make_property(self.db, customer)
        tech = make_technician(self.db, name="Mike Johnson", truck="T-04")
        make_job(self.db, customer, prop, "FDP-2026-001", technician_id=tech.id)

        body = self.client.get("/api/technicians/", headers=self.headers).json()
        self.assertEqual(body[0]["techProfile"]["truckNumber"], "T-04")
        self.assertEqual(body[0]["jobCount"], 1)

    def test_empty_roster(self):
        self.assertEqual(self.client.get("/api/technicians/", headers=self.headers).json(), [])


if __name__ == "__main__":
    unittest.main()
