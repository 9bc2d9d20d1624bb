# services/dispatch.py
"""Dispatch board view-model.

Lays a single day's jobs on a per-technician timeline grid running from
07:00 to 19:00 and puts jobs without a technician in a side queue.
"""
from collections import OrderedDict
from datetime import date
from typing import Dict, List, NamedTuple, Optional, Tuple

from models.views import JobView, TechnicianView
from services.selection import Selection
from services.styles import JOB_TYPE_BADGE, PRIORITY_BADGE, badge

GRID_START_HOUR = 7
GRID_SPAN_HOURS = 12
DEFAULT_DURATION_HOURS = 1.5
MIN_BLOCK_HEIGHT_PCT = 100 / GRID_SPAN_HOURS  # one hour

HOURS = list(range(GRID_START_HOUR, GRID_START_HOUR + GRID_SPAN_HOURS + 1))

FILTER_OPTIONS = ["All", "Repairs", "Maintenance", "Emergency", "Installs"]
FILTER_MAP: Dict[str, Optional[str]] = {
    "All": None,
    "Repairs": "REPAIR",
    "Maintenance": "MAINTENANCE",
    "Emergency": "EMERGENCY",
    "Installs": "INSTALLATION",
}


class BlockGeometry(NamedTuple):
    top_pct: float
    height_pct: float


def today_label(d: date) -> str:
    """'Monday, October 19, 2026'"""
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"


def format_hour_label(hour: int) -> str:
    period = "PM" if hour >= 12 else "AM"
    display = hour - 12 if hour > 12 else hour
    return f"{display} {period}"


def parse_clock(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """'14:30' -> (14, 30). Anything that is not a valid HH:MM yields None."""
    if not value:
        return None
    parts = value.split(":")
    if len(parts) < 2:
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return hour, minute


def parse_time_to_hour(value: Optional[str]) -> Optional[float]:
    """'14:30' -> 14.5"""
    clock = parse_clock(value)
    if clock is None:
        return None
    return clock[0] + clock[1] / 60


def block_geometry(start: Optional[str], end: Optional[str]) -> BlockGeometry:
    start_hour = parse_time_to_hour(start)
    if start_hour is None:
        return BlockGeometry(0.0, MIN_BLOCK_HEIGHT_PCT)

    end_hour = parse_time_to_hour(end)
    duration = end_hour - start_hour if end_hour is not None else DEFAULT_DURATION_HOURS

    top = (start_hour - GRID_START_HOUR) / GRID_SPAN_HOURS * 100
    height = max(duration / GRID_SPAN_HOURS * 100, MIN_BLOCK_HEIGHT_PCT)
    return BlockGeometry(top, height)


def filter_jobs(jobs: List[JobView], option: str) -> List[JobView]:
    if option not in FILTER_MAP:
        raise ValueError(f"Unknown filter option: {option}")
    job_type = FILTER_MAP[option]
    if job_type is None:
        return list(jobs)
    return [j for j in jobs if j.job_type == job_type]


def group_by_technician(
    jobs: List[JobView], technicians: List[TechnicianView]
) -> "OrderedDict[int, List[JobView]]":
    """
    Every roster technician gets a key, in roster order, even with no jobs.
    Jobs without a technician, or assigned to someone not on the roster,
    are left out.
    """
    grouped: "OrderedDict[int, List[JobView]]" = OrderedDict((t.id, []) for t in technicians)
    for job in jobs:
        if job.technician is None:
            continue
        bucket = grouped.get(job.technician.id)
        if bucket is not None:
            bucket.append(job)
    return grouped


def split_unassigned(jobs: List[JobView]) -> Tuple[List[JobView], List[JobView]]:
    assigned, unassigned = [], []
    for job in jobs:
        (assigned if job.technician is not None else unassigned).append(job)
    return assigned, unassigned


def job_detail(job: JobView) -> dict:
    """Expanded panel for the selected job."""
    detail = {
        "id": job.id,
        "job_number": job.job_number,
        "title": job.title,
        "customer": {"name": job.customer.name, "phone": job.customer.phone},
        "property": {
            "address": job.property.address,
            "city": job.property.city,
            "state": job.property.state,
        },
        "job_type": badge(JOB_TYPE_BADGE, job.job_type)["label"],
        "priority": badge(PRIORITY_BADGE, job.priority)["label"],
        "schedule": {
            "start": job.scheduled_start or "TBD",
            "end": job.scheduled_end or "TBD",
        },
        "technician": job.technician.name if job.technician else "Unassigned",
    }
    if job.estimated_cost is not None:
        detail["estimated_cost"] = job.estimated_cost
    if job.description:
        detail["description"] = job.description
    return detail


class DispatchBoard:
    def __init__(
        self,
        jobs: List[JobView],
        technicians: List[TechnicianView],
        unassigned_jobs: List[JobView],
        today_label: str,
        active_filter: str = "All",
    ):
        if active_filter not in FILTER_MAP:
            raise ValueError(f"Unknown filter option: {active_filter}")
        self.jobs = jobs
        self.technicians = technicians
        self.unassigned_jobs = unassigned_jobs
        self.today_label = today_label
        self.active_filter = active_filter
        self.selection = Selection()

    def set_filter(self, option: str) -> None:
        if option not in FILTER_MAP:
            raise ValueError(f"Unknown filter option: {option}")
        self.active_filter = option

    def select(self, job_id: int) -> Optional[int]:
        return self.selection.select(job_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def _find(self, job_id: int) -> Optional[JobView]:
        for job in self.jobs + self.unassigned_jobs:
            if job.id == job_id:
                return job
        return None

    def _block(self, job: JobView) -> dict:
        geo = block_geometry(job.scheduled_start, job.scheduled_end)
        return {
            "id": job.id,
            "job_number": job.job_number,
            "title": job.title,
            "customer": job.customer.name,
            "job_type": job.job_type,
            "type_badge": badge(JOB_TYPE_BADGE, job.job_type),
            "start": job.scheduled_start,
            "end": job.scheduled_end,
            "top_pct": round(geo.top_pct, 4),
            "height_pct": round(geo.height_pct, 4),
            "selected": self.selection.is_selected(job.id),
        }

    def _queue_card(self, job: JobView) -> dict:
        priority = PRIORITY_BADGE.get(job.priority, PRIORITY_BADGE["NORMAL"])
        return {
            "id": job.id,
            "job_number": job.job_number,
            "customer": job.customer.name,
            "priority": priority["label"],
            "type_badge": badge(JOB_TYPE_BADGE, job.job_type),
            "requested": job.scheduled_date.isoformat() if job.scheduled_date else None,
            "selected": self.selection.is_selected(job.id),
        }

    def to_dict(self) -> dict:
        grouped = group_by_technician(filter_jobs(self.jobs, self.active_filter), self.technicians)

        columns = []
        for tech in self.technicians:
            profile = tech.tech_profile
            columns.append(
                {
                    "technician": {
                        "id": tech.id,
                        "name": tech.name,
                        "truck_number": profile.truck_number if profile else None,
                        "is_available": bool(profile and profile.is_available),
                    },
                    "blocks": [self._block(j) for j in grouped[tech.id]],
                }
            )

        selected = None
        if self.selection.selected is not None:
            job = self._find(self.selection.selected)
            if job is not None:
                selected = job_detail(job)

        return {
            "date": self.today_label,
            "active_technicians": sum(
                1 for t in self.technicians if t.tech_profile and t.tech_profile.is_available
            ),
            "total_technicians": len(self.technicians),
            "filter_options": FILTER_OPTIONS,
            "active_filter": self.active_filter,
            "hours": [format_hour_label(h) for h in HOURS],
            "columns": columns,
            "empty_roster_message": None if self.technicians else "No technicians on the roster",
            "unassigned": {
                "count": len(self.unassigned_jobs),
                "jobs": [self._queue_card(j) for j in self.unassigned_jobs],
                "empty_message": None if self.unassigned_jobs else "All jobs assigned",
            },
            "selected_job": selected,
        }
