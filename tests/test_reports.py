import sys
import os
import unittest
from datetime import date, timedelta

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient

from factories import auth_headers, make_job, make_property, make_technician, make_user, reset_db
from main import app
from models.install_project import InstallProject
from models.invoice import Invoice
from models.lead import Lead
from models.membership import Membership
from services import reports


class TestInstallProgress(unittest.TestCase):
    def test_progress_by_stage(self):
        self.assertEqual(reports.install_progress("PLANNING"), 14)
        self.assertEqual(reports.install_progress("INSPECTION"), 86)
        self.assertEqual(reports.install_progress("COMPLETE"), 100)
        self.assertEqual(reports.install_progress("SOMETHING_ELSE"), 14)

    def test_technician_status(self):
        self.assertEqual(reports.technician_status(True, True), "on-job")
        self.assertEqual(reports.technician_status(True, False), "available")
        self.assertEqual(reports.technician_status(False, False), "off-duty")


class TestReportPages(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.customer = make_user(self.db, name="Derby Diner")
        self.prop = make_property(self.db, self.customer)

    def tearDown(self):
        self.db.close()

    def membership(self, plan, status="ACTIVE", renews_in=200, rate=79):
        today = date.today()
        return Membership(
            customer_id=self.customer.id,
            plan=plan,
            status=status,
            start_date=today - timedelta(days=100),
            renewal_date=today + timedelta(days=renews_in),
            monthly_rate=rate,
            visits_per_year=2,
            visits_used=1,
        )

    def test_memberships_page(self):
        self.db.add_all([
            self.membership("GOLD"),
            self.membership("SILVER", renews_in=10, rate=49),
            self.membership("BRONZE", status="EXPIRED", renews_in=-5, rate=29),
        ])
        self.db.commit()

        page = reports.memberships_page(self.db, date.today())
        self.assertEqual(page["stats"]["active_members"], 2)
        self.assertEqual(page["stats"]["monthly_recurring_revenue"], 128)
        self.assertEqual(page["stats"]["renewal_rate"], 67)
        self.assertEqual(page["stats"]["visits_remaining"], 2)
        self.assertEqual([t["plan"] for t in page["tiers"]], ["BRONZE", "SILVER", "GOLD", "PLATINUM"])
        self.assertEqual(page["tiers"][0]["count"], 0)
        self.assertEqual(len(page["upcoming_renewals"]), 1)
        self.assertEqual(page["upcoming_renewals"][0]["days_until"], 10)

    def test_empty_memberships(self):
        page = reports.memberships_page(self.db, date.today())
        self.assertEqual(page["stats"]["renewal_rate"], 0)
        self.assertEqual(len(page["tiers"]), 4)

    def test_customers_page_counts_paid_only(self):
        make_job(self.db, self.customer, self.prop, "FDP-2026-001", status="COMPLETED")
        self.db.add_all([
            Invoice(invoice_number="INV-0001", customer_id=self.customer.id, total=250, status="PAID"),
            Invoice(invoice_number="INV-0002", customer_id=self.customer.id, total=900, status="SENT"),
            self.membership("PLATINUM", rate=129),
        ])
        self.db.commit()

        page = reports.customers_page(self.db)
        row = page["customers"][0]
        self.assertEqual(row["total_spent"], 250)
        self.assertEqual(row["active_membership"], "PLATINUM")
        self.assertEqual(row["property_count"], 1)
        self.assertEqual(page["stats"]["avg_job_value"], 250)

    def test_installs_page(self):
        self.db.add_all([
            InstallProject(project_number="INST-2026-001", customer_name="A", status="PLANNING", total_cost=10000),
            InstallProject(project_number="INST-2026-002", customer_name="B", status="COMPLETE", total_cost=20000),
        ])
        self.db.commit()

        page = reports.installs_page(self.db)
        stages = {s["status"]: s for s in page["stages"]}
        self.assertEqual(len(stages), 7)
        self.assertEqual(stages["PLANNING"]["count"], 1)
        self.assertEqual(stages["PLANNING"]["share_pct"], 50.0)
        progress = {p["project_number"]: p["progress_pct"] for p in page["projects"]}
        self.assertEqual(progress, {"INST-2026-001": 14, "INST-2026-002": 100})

    def test_technicians_page(self):
        busy = make_technician(self.db, name="Busy Tech")
        make_technician(self.db, name="Idle Tech", truck="T-02")
        make_technician(self.db, name="Off Tech", truck="T-03", available=False)
        make_job(self.db, self.customer, self.prop, "FDP-2026-001", status="EN_ROUTE", technician_id=busy.id)

        page = reports.technicians_page(self.db)
        status = {t["name"]: t["status"] for t in page["technicians"]}
        self.assertEqual(status, {"Busy Tech": "on-job", "Idle Tech": "available", "Off Tech": "off-duty"})
        self.assertEqual(page["stats"]["on_jobs"], 1)
        self.assertEqual(page["stats"]["available_now"], 2)

    def test_settings_team_counts(self):
        make_technician(self.db)
        make_user(self.db, name="Owner", role="OWNER")
        team = reports.settings_page(self.db)["team"]
        self.assertEqual(team, {"OWNER": 1, "ADMIN": 0, "DISPATCHER": 0, "TECHNICIAN": 1})


class TestDashboardPages(unittest.TestCase):
    def setUp(self):
        self.db = reset_db()
        self.client = TestClient(app)
        self.headers = auth_headers("OWNER")

    def tearDown(self):
        self.db.close()

    def test_pages_need_staff(self):
        self.assertEqual(self.client.get("/dashboard/dispatch").status_code, 401)
        resp = self.client.get("/dashboard/leads", headers=auth_headers("CUSTOMER"))
        self.assertEqual(resp.status_code, 403)

    def test_dispatch_page(self):
        customer = make_user(self.db, name="Derby Diner")
        prop = make_property(self.db, customer)
        tech = make_technician(self.db, name="Mike Johnson")
        make_job(self.db, customer, prop, "FDP-2026-001", status="SCHEDULED", technician_id=tech.id,
                 scheduled_start="09:00", scheduled_end="11:00")
        make_job(self.db, customer, prop, "FDP-2026-002", status="CANCELLED", technician_id=tech.id)
        make_job(self.db, customer, prop, "FDP-2026-003", priority="LOW")
        make_job(self.db, customer, prop, "FDP-2026-004", priority="EMERGENCY")

        resp = self.client.get("/dashboard/dispatch", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        page = resp.json()
        self.assertEqual([b["job_number"] for b in page["columns"][0]["blocks"]], ["FDP-2026-001"])
        self.assertEqual([j["job_number"] for j in page["unassigned"]["jobs"]], ["FDP-2026-004", "FDP-2026-003"])

    def test_dispatch_bad_filter(self):
        resp = self.client.get("/dashboard/dispatch?filter=Plumbing", headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_leads_page(self):
        self.db.add_all([
            Lead(name="A", phone="1", service_needed="Repair", status="NEW"),
            Lead(name="B", phone="2", service_needed="Repair", status="WON", estimated_value=5000),
        ])
        self.db.commit()
        b = self.db.query(Lead).filter(Lead.name == "B").one()

        resp = self.client.get(f"/dashboard/leads?selected={b.id}", headers=self.headers)
        page = resp.json()
        self.assertEqual(page["stats"]["total"], 2)
        self.assertEqual(page["stats"]["conversion_rate"], 50.0)
        self.assertEqual(page["selected_lead"]["name"], "B")
        self.assertEqual(len(page["columns"]), 7)

    def test_every_report_page_renders(self):
        for path in ("", "/jobs", "/customers", "/technicians", "/memberships", "/installs", "/analytics", "/settings"):
            resp = self.client.get(f"/dashboard{path}", headers=self.headers)
            self.assertEqual(resp.status_code, 200, path)


if __name__ == "__main__":
    unittest.main()
