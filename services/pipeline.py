# services/pipeline.py
"""Lead pipeline (kanban funnel) view-model and its summary stats."""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from models.enums import TERMINAL_LEAD_STATUSES
from models.views import LeadView
from services.selection import Selection
from services.styles import LEAD_SOURCE_BADGE, badge

COLUMNS = [
    ("NEW", "New"),
    ("CONTACTED", "Contacted"),
    ("QUALIFIED", "Qualified"),
    ("ESTIMATE_SENT", "Estimate Sent"),
    ("FOLLOW_UP", "Follow Up"),
    ("WON", "Won"),
    ("LOST", "Lost"),
]

EMPTY_COLUMN_PLACEHOLDER = "No leads"


def bucket_leads(leads: Iterable[LeadView]) -> Dict[str, List[LeadView]]:
    buckets: Dict[str, List[LeadView]] = defaultdict(list)
    for lead in leads:
        buckets[lead.status].append(lead)
    return dict(buckets)


def _card(lead: LeadView, selected: bool = False) -> dict:
    return {
        "id": lead.id,
        "name": lead.name,
        "service_needed": lead.service_needed,
        "source": badge(LEAD_SOURCE_BADGE, lead.source)["label"],
        "estimated_value": lead.estimated_value,
        "urgency": lead.urgency,
        "selected": selected,
    }


def build_columns(
    leads_by_status: Dict[str, List[LeadView]], selection: Optional[Selection] = None
) -> List[dict]:
    """All seven funnel columns, in order, whether or not they hold leads."""
    columns = []
    for status, label in COLUMNS:
        leads = leads_by_status.get(status, [])
        columns.append(
            {
                "status": status,
                "label": label,
                "count": len(leads),
                "leads": [
                    _card(ld, bool(selection and selection.is_selected(ld.id)))
                    for ld in leads
                ],
                "placeholder": None if leads else EMPTY_COLUMN_PLACEHOLDER,
            }
        )
    return columns


def lead_stats(leads: List[LeadView], now: Optional[datetime] = None) -> dict:
    now = now or datetime.now()
    week_ago = now - timedelta(days=7)

    total = len(leads)
    won = sum(1 for ld in leads if ld.status == "WON")
    new_this_week = sum(
        1 for ld in leads if ld.status == "NEW" and ld.created_at and ld.created_at >= week_ago
    )
    pipeline_value = sum(
        ld.estimated_value or 0
        for ld in leads
        if ld.status not in TERMINAL_LEAD_STATUSES
    )

    return {
        "total": total,
        "new_this_week": new_this_week,
        "conversion_rate": round(won / total * 100, 2) if total else 0,
        "pipeline_value": pipeline_value,
    }


def relative_time(when: datetime, now: Optional[datetime] = None) -> str:
    """Coarse 'N units ago' string for the lead timeline."""
    now = now or datetime.now()
    seconds = int((now - when).total_seconds())
    if seconds < 60:
        return "just now"

    for size, unit in ((86400 * 365, "year"), (86400 * 30, "month"), (86400, "day"), (3600, "hour"), (60, "minute")):
        if seconds >= size:
            n = seconds // size
            return f"{n} {unit}{'' if n == 1 else 's'} ago"
    return "just now"


def lead_detail(lead: LeadView, now: Optional[datetime] = None) -> dict:
    """Detail panel; optional fields that are missing are left out."""
    contact = {"phone": lead.phone}
    if lead.email:
        contact["email"] = lead.email
    if lead.address:
        contact["address"] = lead.address

    service = {"needed": lead.service_needed}
    if lead.urgency is not None:
        service["urgency"] = lead.urgency

    source = {"label": badge(LEAD_SOURCE_BADGE, lead.source)["label"]}
    if lead.estimated_value is not None:
        source["estimated_value"] = lead.estimated_value

    timeline = {"created": relative_time(lead.created_at, now)}
    if lead.follow_up_date:
        timeline["follow_up"] = lead.follow_up_date.strftime("%b %d, %Y")

    detail = {
        "id": lead.id,
        "name": lead.name,
        "status": lead.status,
        "contact": contact,
        "service": service,
        "source": source,
        "timeline": timeline,
    }
    if lead.notes:
        detail["notes"] = lead.notes
    return detail


class LeadPipeline:
    def __init__(self, leads_by_status: Dict[str, List[LeadView]], stats: dict):
        self.leads_by_status = leads_by_status
        self.stats = stats
        self.selection = Selection()

    def select(self, lead_id: int) -> Optional[int]:
        return self.selection.select(lead_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def _find(self, lead_id: int) -> Optional[LeadView]:
        for leads in self.leads_by_status.values():
            for lead in leads:
                if lead.id == lead_id:
                    return lead
        return None

    def to_dict(self, now: Optional[datetime] = None) -> dict:
        selected = None
        if self.selection.selected is not None:
            lead = self._find(self.selection.selected)
            if lead is not None:
                selected = lead_detail(lead, now)

        return {
            "stats": {
                "total": self.stats.get("total", 0),
                "new_this_week": self.stats.get("new_this_week", 0),
                "conversion_rate": self.stats.get("conversion_rate", 0),
                "pipeline_value": self.stats.get("pipeline_value", 0),
            },
            "columns": build_columns(self.leads_by_status, self.selection),
            "selected_lead": selected,
        }
