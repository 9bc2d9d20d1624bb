import sys
import os
import unittest
from datetime import datetime, timedelta

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.views import LeadView
from services.pipeline import (
    COLUMNS,
    LeadPipeline,
    build_columns,
    bucket_leads,
    lead_detail,
    lead_stats,
    relative_time,
)
from services.selection import Selection

NOW = datetime(2026, 10, 19, 12, 0, 0)


def make_lead(lead_id, status="NEW", days_old=1, **kwargs):
    fields = {
        "name": f"Lead {lead_id}",
        "phone": "(502) 555-0142",
        "source": "WEBSITE",
        "service_needed": "Walk-in cooler not holding temp",
    }
    fields.update(kwargs)
    return LeadView(id=lead_id, status=status, created_at=NOW - timedelta(days=days_old), **fields)


class TestSelection(unittest.TestCase):
    def test_toggle_and_replace(self):
        sel = Selection()
        self.assertEqual(sel.select(1), 1)
        self.assertEqual(sel.select(2), 2)
        self.assertFalse(sel.is_selected(1))
        self.assertIsNone(sel.select(2))
        sel.select(3)
        sel.clear()
        self.assertIsNone(sel.selected)


class TestColumns(unittest.TestCase):
    def test_all_columns_present_when_empty(self):
        columns = build_columns({})
        self.assertEqual([c["status"] for c in columns], [s for s, _ in COLUMNS])
        for col in columns:
            self.assertEqual(col["count"], 0)
            self.assertEqual(col["placeholder"], "No leads")

    def test_cards_land_in_their_column(self):
        leads = [make_lead(1), make_lead(2, status="WON", source="GOOGLE_ADS"), make_lead(3)]
        columns = {c["status"]: c for c in build_columns(bucket_leads(leads))}
        self.assertEqual(columns["NEW"]["count"], 2)
        self.assertIsNone(columns["NEW"]["placeholder"])
        self.assertEqual(columns["WON"]["leads"][0]["source"], "Google Ads")


class TestLeadStats(unittest.TestCase):
    def test_stats(self):
        leads = [
            make_lead(1, status="WON", days_old=20, estimated_value=9000),
            make_lead(2, status="NEW", days_old=2, estimated_value=1200),
            make_lead(3, status="LOST", days_old=3, estimated_value=500),
            make_lead(4, status="QUALIFIED", days_old=10, estimated_value=800),
        ]
        stats = lead_stats(leads, NOW)
        self.assertEqual(stats["total"], 4)
        self.assertEqual(stats["new_this_week"], 1)
        self.assertEqual(stats["conversion_rate"], 25.0)
        self.assertEqual(stats["pipeline_value"], 2000)

    def test_new_this_week_counts_only_new_status(self):
        leads = [
            make_lead(1, status="NEW", days_old=1),
            make_lead(2, status="WON", days_old=1),
            make_lead(3, status="CONTACTED", days_old=1),
            make_lead(4, status="NEW", days_old=8),
        ]
        self.assertEqual(lead_stats(leads, NOW)["new_this_week"], 1)

    def test_conversion_rounds_to_two_places(self):
        leads = [make_lead(1, status="WON"), make_lead(2), make_lead(3)]
        self.assertEqual(lead_stats(leads, NOW)["conversion_rate"], 33.33)

    def test_no_leads(self):
        stats = lead_stats([], NOW)
        self.assertEqual(stats["conversion_rate"], 0)
        self.assertEqual(stats["pipeline_value"], 0)


class TestLeadDetail(unittest.TestCase):
    def test_relative_time(self):
        self.assertEqual(relative_time(NOW - timedelta(seconds=20), NOW), "just now")
        self.assertEqual(relative_time(NOW - timedelta(hours=3), NOW), "3 hours ago")
        self.assertEqual(relative_time(NOW - timedelta(days=1), NOW), "1 day ago")

    def test_missing_optional_fields(self):
        detail = lead_detail(make_lead(1), NOW)
        self.assertEqual(detail["contact"], {"phone": "(502) 555-0142"})
        self.assertNotIn("urgency", detail["service"])
        self.assertNotIn("estimated_value", detail["source"])
        self.assertNotIn("follow_up", detail["timeline"])
        self.assertNotIn("notes", detail)

    def test_full_detail(self):
        lead = make_lead(
            1,
            status="FOLLOW_UP",
            email="ops@derbydiner.com",
            address="1 Main St",
            urgency=8,
            estimated_value=4200.0,
            notes="Call after lunch rush",
            follow_up_date=datetime(2026, 10, 22, 9, 0),
        )
        detail = lead_detail(lead, NOW)
        self.assertEqual(detail["contact"]["email"], "ops@derbydiner.com")
        self.assertEqual(detail["service"]["urgency"], 8)
        self.assertEqual(detail["timeline"], {"created": "1 day ago", "follow_up": "Oct 22, 2026"})
        self.assertEqual(detail["notes"], "Call after lunch rush")


class TestLeadPipeline(unittest.TestCase):
    def test_selection_flows_into_page(self):
        leads = [make_lead(1), make_lead(2, status="CONTACTED")]
        pipeline = LeadPipeline(bucket_leads(leads), lead_stats(leads, NOW))

        pipeline.select(2)
        page = pipeline.to_dict(NOW)
        self.assertEqual(page["selected_lead"]["id"], 2)
        contacted = next(c for c in page["columns"] if c["status"] == "CONTACTED")
        self.assertTrue(contacted["leads"][0]["selected"])

        pipeline.select(2)
        self.assertIsNone(pipeline.to_dict(NOW)["selected_lead"])

    def test_clear_selection(self):
        leads = [make_lead(1)]
        pipeline = LeadPipeline(bucket_leads(leads), lead_stats(leads, NOW))
        pipeline.select(1)
        pipeline.clear_selection()
        self.assertIsNone(pipeline.to_dict(NOW)["selected_lead"])

    def test_unknown_selection_ignored(self):
        pipeline = LeadPipeline({}, {})
        pipeline.select(42)
        page = pipeline.to_dict(NOW)
        self.assertIsNone(page["selected_lead"])
        self.assertEqual(page["stats"]["total"], 0)


if __name__ == "__main__":
    unittest.main()
