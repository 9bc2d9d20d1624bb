# services/overview.py
"""Dashboard home page.

Every widget is fetched on its own. A widget whose query fails (or that comes
back empty, for the headline tiles and charts) is filled with demo values and
its name is listed under ``degraded`` so callers can tell real numbers from
placeholders.
"""
import logging
import random
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.daily_metric import DailyMetric
from models.invoice import Invoice
from models.job import Job
from models.lead import Lead
from models.membership import Membership
from models.tech_profile import TechProfile
from models.user import User
from services.dispatch import parse_clock
from services.loaders import job_views
from services.pipeline import relative_time
from services.stats import OPEN_LEAD_STATUSES
from services.styles import JOB_STATUS_BADGE, LEAD_SOURCE_BADGE, badge

logger = logging.getLogger(__name__)

DEMO_STATS = {
    "revenueToday": 4250,
    "jobsInProgress": 8,
    "activeTechs": 6,
    "openLeads": 14,
    "missedCallsToday": 3,
    "conversionRate": 34,
}

DEMO_MEMBERSHIPS = {
    "active": 42,
    "totalRevenue": 3780,
    "planCounts": {"BRONZE": 15, "SILVER": 14, "GOLD": 9, "PLATINUM": 4},
    "renewals": 7,
}

SCHEDULE_STATUSES = ("SCHEDULED", "EN_ROUTE", "IN_PROGRESS", "PENDING")

# chart category for each job type
JOB_CATEGORY = {
    "REPAIR": "repair",
    "CALLBACK": "repair",
    "WARRANTY": "repair",
    "MAINTENANCE": "maintenance",
    "INSPECTION": "maintenance",
    "INSTALLATION": "install",
    "ESTIMATE": "install",
    "EMERGENCY": "emergency",
}


def short_date(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def format_time_12(value: Optional[str]) -> Optional[str]:
    """'14:05' -> '2:05 PM'; None when the value is not HH:MM."""
    clock = parse_clock(value)
    if clock is None:
        return None
    hour, minute = clock
    period = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def demo_revenue_series(today: date, seed: int = 30) -> List[dict]:
    rng = random.Random(seed)
    series = []
    for i in range(29, -1, -1):
        d = today - timedelta(days=i)
        series.append(
            {
                "date": short_date(d),
                "revenue": 800 + rng.randrange(4000),
                "service": 500 + rng.randrange(2500),
                "install": 300 + rng.randrange(2000),
            }
        )
    return series


def demo_jobs_series(seed: int = 7) -> List[dict]:
    rng = random.Random(seed)
    return [
        {
            "day": day,
            "repair": rng.randrange(6) + 2,
            "maintenance": rng.randrange(5) + 1,
            "install": rng.randrange(3),
            "emergency": rng.randrange(2),
        }
        for day in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
    ]


class Overview:
    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.db = db
        self.now = now or datetime.now()
        self.today = self.now.date()
        self.degraded: List[str] = []

    def _guard(self, name: str, fetch: Callable, fallback):
        try:
            return fetch()
        except SQLAlchemyError as e:
            logger.error(f"Dashboard widget '{name}' failed, using demo data: {e}")
            self.db.rollback()
            self.degraded.append(name)
            return fallback() if callable(fallback) else fallback

    # ---- stat tiles ----
    def stats(self) -> dict:
        day_start = datetime(self.today.year, self.today.month, self.today.day)
        day_end = day_start + timedelta(days=1)
        db = self.db

        def conversion():
            total = db.query(func.count(Lead.id)).scalar() or 0
            won = db.query(func.count(Lead.id)).filter(Lead.status == "WON").scalar() or 0
            return round(won / total * 100) if total else 0

        def missed_calls():
            metric = db.query(DailyMetric).filter(DailyMetric.date == self.today).first()
            return metric.missed_calls if metric else 0

        fetchers = {
            "revenueToday": lambda: db.query(func.sum(Invoice.total))
            .filter(Invoice.status == "PAID", Invoice.paid_at >= day_start, Invoice.paid_at < day_end)
            .scalar() or 0,
            "jobsInProgress": lambda: db.query(func.count(Job.id)).filter(Job.status == "IN_PROGRESS").scalar() or 0,
            "activeTechs": lambda: db.query(func.count(TechProfile.id))
            .filter(TechProfile.is_available == True)  # noqa: E712
            .scalar() or 0,
            "openLeads": lambda: db.query(func.count(Lead.id)).filter(Lead.status.in_(OPEN_LEAD_STATUSES)).scalar() or 0,
            "missedCallsToday": missed_calls,
            "conversionRate": conversion,
        }

        tiles = {}
        for key, fetch in fetchers.items():
            name = f"stats.{key}"
            value = self._guard(name, fetch, DEMO_STATS[key])
            if not value:
                if name not in self.degraded:
                    self.degraded.append(name)
                value = DEMO_STATS[key]
            tiles[key] = value
        return tiles

    # ---- charts ----
    def revenue_chart(self) -> List[dict]:
        def fetch():
            metrics = (
                self.db.query(DailyMetric)
                .filter(DailyMetric.date >= self.today - timedelta(days=30))
                .order_by(DailyMetric.date.asc())
                .all()
            )
            if len(metrics) <= 5:
                return None
            return [
                {
                    "date": short_date(m.date),
                    "revenue": m.revenue or 0,
                    "service": m.service_revenue or 0,
                    "install": m.install_revenue or 0,
                }
                for m in metrics
            ]

        series = self._guard("revenue_chart", fetch, None)
        if series is None:
            if "revenue_chart" not in self.degraded:
                self.degraded.append("revenue_chart")
            series = demo_revenue_series(self.today)
        return series

    def jobs_chart(self) -> List[dict]:
        def fetch():
            rows = (
                self.db.query(Job.scheduled_date, Job.job_type)
                .filter(Job.scheduled_date >= self.today - timedelta(days=7))
                .all()
            )
            if len(rows) <= 3:
                return None
            buckets = {}
            for i in range(6, -1, -1):
                d = self.today - timedelta(days=i)
                buckets[d.strftime("%a")] = {"repair": 0, "maintenance": 0, "install": 0, "emergency": 0}
            for scheduled, job_type in rows:
                if scheduled is None:
                    continue
                counts = buckets.get(scheduled.strftime("%a"))
                category = JOB_CATEGORY.get(job_type)
                if counts is not None and category:
                    counts[category] += 1
            return [{"day": day, **counts} for day, counts in buckets.items()]

        series = self._guard("jobs_chart", fetch, None)
        if series is None:
            if "jobs_chart" not in self.degraded:
                self.degraded.append("jobs_chart")
            series = demo_jobs_series()
        return series

    # ---- lists ----
    def _job_rows(self, jobs) -> List[dict]:
        rows = []
        for j in job_views(self.db, jobs):
            rows.append(
                {
                    "id": j.id,
                    "job_number": j.job_number,
                    "title": j.title,
                    "job_type": j.job_type,
                    "priority": j.priority,
                    "status": badge(JOB_STATUS_BADGE, j.status),
                    "customer": j.customer.name,
                    "technician": j.technician.name if j.technician else None,
                    "time": format_time_12(j.scheduled_start),
                    "created": relative_time(j.created_at, self.now) if j.created_at else None,
                }
            )
        return rows

    def recent_jobs(self) -> List[dict]:
        return self._guard(
            "recent_jobs",
            lambda: self._job_rows(self.db.query(Job).order_by(Job.created_at.desc()).limit(10).all()),
            list,
        )

    def todays_schedule(self) -> List[dict]:
        return self._guard(
            "todays_schedule",
            lambda: self._job_rows(
                self.db.query(Job)
                .filter(Job.scheduled_date == self.today, Job.status.in_(SCHEDULE_STATUSES))
                .order_by(Job.scheduled_start.asc())
                .all()
            ),
            list,
        )

    def recent_leads(self) -> List[dict]:
        def fetch():
            leads = self.db.query(Lead).order_by(Lead.created_at.desc()).limit(5).all()
            return [
                {
                    "id": ld.id,
                    "name": ld.name,
                    "source": badge(LEAD_SOURCE_BADGE, ld.source)["label"],
                    "service_needed": ld.service_needed,
                    "created": relative_time(ld.created_at, self.now) if ld.created_at else None,
                }
                for ld in leads
            ]

        return self._guard("recent_leads", fetch, list)

    def top_techs(self) -> List[dict]:
        def fetch():
            rows = (
                self.db.query(TechProfile, User.name, User.avatar)
                .join(User, User.id == TechProfile.user_id)
                .order_by(TechProfile.jobs_completed.desc())
                .limit(5)
                .all()
            )
            return [
                {
                    "id": p.id,
                    "name": name,
                    "avatar": avatar,
                    "jobs_completed": p.jobs_completed or 0,
                    "revenue_generated": p.revenue_generated or 0,
                    "avg_rating": p.avg_rating or 0,
                }
                for p, name, avatar in rows
            ]

        return self._guard("top_techs", fetch, list)

    def membership_overview(self) -> dict:
        def fetch():
            active = self.db.query(Membership).filter(Membership.status == "ACTIVE").all()
            if not active:
                return None
            plan_counts = {"BRONZE": 0, "SILVER": 0, "GOLD": 0, "PLATINUM": 0}
            for m in active:
                plan_counts[m.plan] = plan_counts.get(m.plan, 0) + 1
            horizon = self.today + timedelta(days=30)
            renewals = sum(1 for m in active if m.renewal_date and self.today <= m.renewal_date <= horizon)
            return {
                "active": len(active),
                "totalRevenue": sum(m.monthly_rate or 0 for m in active),
                "planCounts": plan_counts,
                "renewals": renewals,
            }

        overview = self._guard("memberships", fetch, None)
        if overview is None:
            if "memberships" not in self.degraded:
                self.degraded.append("memberships")
            overview = {**DEMO_MEMBERSHIPS, "planCounts": dict(DEMO_MEMBERSHIPS["planCounts"])}
        return overview

    def to_dict(self) -> dict:
        page = {
            "stats": self.stats(),
            "revenue_chart": self.revenue_chart(),
            "jobs_chart": self.jobs_chart(),
            "recent_jobs": self.recent_jobs(),
            "todays_schedule": self.todays_schedule(),
            "recent_leads": self.recent_leads(),
            "top_techs": self.top_techs(),
            "memberships": self.membership_overview(),
        }
        page["degraded"] = list(self.degraded)
        page["demo_data"] = bool(self.degraded)
        return page
