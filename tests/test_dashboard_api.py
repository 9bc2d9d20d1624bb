import sys
import os
import unittest
from datetime import date, datetime, timedelta
from unittest.mock import patch

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient

from factories import auth_headers, make_job, make_property, make_technician, make_user, reset_db
from main import app
from models.daily_metric import DailyMetric
from models.invoice import Invoice
from models.lead import Lead
from models.membership import Membership
from services.stats import conversion_rate, dashboard_stats


class TestConversionRate(unittest.TestCase):
    def test_rounding(self):
        self.assertEqual(conversion_rate(1, 3), 33.33)
        self.assertEqual(conversion_rate(2, 2), 100.0)
        self.assertEqual(conversion_rate(0, 0), 0)


class TestDashboardStats(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.client = TestClient(app)
        self.now = datetime.now()

    def tearDown(self):
        self.db.close()

    def test_empty_database_is_all_zero(self):
        stats = dashboard_stats(self.db, self.now)
        self.assertEqual(stats["revenueToday"], 0)
        self.assertEqual(stats["jobsInProgress"], 0)
        self.assertEqual(stats["openLeads"], 0)
        self.assertEqual(stats["conversionRate"], 0)
        self.assertEqual(stats["avgTicket"], 0)

    def test_figures(self):
        customer = make_user(self.db, name="Derby Diner")
        prop = make_property(self.db, customer)
        make_technician(self.db, available=True)
        make_technician(self.db, name="Tech Two", truck="T-02", available=False)
        make_job(self.db, customer, prop, "FDP-2026-001", status="IN_PROGRESS")
        make_job(self.db, customer, prop, "FDP-2026-002", status="EN_ROUTE")

        self.db.add_all([
            Invoice(invoice_number="INV-0001", customer_id=customer.id, total=500, status="PAID", paid_at=self.now),
            Invoice(invoice_number="INV-0002", customer_id=customer.id, total=300, status="PAID",
                    paid_at=self.now - timedelta(days=3)),
            Invoice(invoice_number="INV-0003", customer_id=customer.id, total=900, status="SENT"),
            Lead(name="A", phone="1", service_needed="Repair", status="NEW"),
            Lead(name="B", phone="2", service_needed="Repair", status="CONTACTED"),
            Lead(name="C", phone="3", service_needed="Repair", status="WON"),
            Membership(customer_id=customer.id, plan="GOLD", status="ACTIVE", start_date=date.today(),
                       renewal_date=date.today() + timedelta(days=365), monthly_rate=79),
        ])
        self.db.commit()

        stats = dashboard_stats(self.db, self.now)
        self.assertEqual(stats["revenueToday"], 500)
        self.assertEqual(stats["weeklyRevenue"], 800)
        self.assertEqual(stats["jobsInProgress"], 1)
        self.assertEqual(stats["jobsToday"], 2)
        self.assertEqual(stats["activeTechs"], 1)
        self.assertEqual(stats["openLeads"], 2)
        self.assertEqual(stats["conversionRate"], 33.33)
        self.assertEqual(stats["activeMembers"], 1)
        self.assertEqual(stats["avgTicket"], 400.0)

    def test_endpoint_requires_staff(self):
        self.assertEqual(self.client.get("/api/dashboard/stats").status_code, 401)
        resp = self.client.get("/api/dashboard/stats", headers=auth_headers("CUSTOMER"))
        self.assertEqual(resp.status_code, 403)

    def test_endpoint_returns_stats(self):
        resp = self.client.get("/api/dashboard/stats", headers=auth_headers("DISPATCHER"))
        self.assertEqual(resp.status_code, 200)
        self.assertIn("revenueToday", resp.json())

    @patch("routers.dashboard.dashboard_stats")
    def test_endpoint_failure(self, mock_stats):
        mock_stats.side_effect = Exception("connection reset")
        resp = self.client.get("/api/dashboard/stats", headers=auth_headers())
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Failed to fetch dashboard stats"})

    def test_metrics_window(self):
        today = date.today()
        for i in (1, 10, 45):
            self.db.add(DailyMetric(date=today - timedelta(days=i), revenue=100 * i))
        self.db.commit()

        resp = self.client.get("/api/dashboard/metrics?days=30", headers=auth_headers())
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([m["revenue"] for m in resp.json()], [1000, 100])


if __name__ == "__main__":
    unittest.main()
