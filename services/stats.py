# services/stats.py
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.daily_metric import DailyMetric
from models.invoice import Invoice
from models.job import Job
from models.lead import Lead
from models.membership import Membership
from models.tech_profile import TechProfile

OPEN_LEAD_STATUSES = ("NEW", "CONTACTED")


def conversion_rate(won: int, total: int) -> float:
    """won / total as a percentage rounded to 2 dp; 0 when there is nothing to convert."""
    if not total:
        return 0
    return round(won / total * 100, 2)


def _paid_between(db: Session, start: datetime, end: datetime) -> float:
    return (
        db.query(func.sum(Invoice.total))
        .filter(
            Invoice.status == "PAID",
            Invoice.paid_at >= start,
            Invoice.paid_at < end,
        )
        .scalar()
        or 0
    )


def dashboard_stats(db: Session, now: Optional[datetime] = None) -> dict:
    """Headline KPIs for the dashboard. Each figure is an independent query."""
    now = now or datetime.now()
    today_start = datetime(now.year, now.month, now.day)
    today_end = today_start + timedelta(days=1)
    week_ago = today_start - timedelta(days=7)
    month_ago = today_start - timedelta(days=30)

    revenue_today = _paid_between(db, today_start, today_end)
    weekly_revenue = _paid_between(db, week_ago, today_end)
    monthly_revenue = _paid_between(db, month_ago, today_end)

    jobs_in_progress = (
        db.query(func.count(Job.id)).filter(Job.status == "IN_PROGRESS").scalar() or 0
    )
    active_techs = (
        db.query(func.count(TechProfile.id)).filter(TechProfile.is_available == True).scalar() or 0  # noqa: E712
    )
    open_leads = (
        db.query(func.count(Lead.id)).filter(Lead.status.in_(OPEN_LEAD_STATUSES)).scalar() or 0
    )
    jobs_today = (
        db.query(func.count(Job.id)).filter(Job.scheduled_date == today_start.date()).scalar() or 0
    )
    won_leads = db.query(func.count(Lead.id)).filter(Lead.status == "WON").scalar() or 0
    total_leads = db.query(func.count(Lead.id)).scalar() or 0
    active_members = (
        db.query(func.count(Membership.id)).filter(Membership.status == "ACTIVE").scalar() or 0
    )
    avg_ticket = (
        db.query(func.avg(Invoice.total)).filter(Invoice.status == "PAID").scalar() or 0
    )

    return {
        "revenueToday": float(revenue_today),
        "jobsInProgress": jobs_in_progress,
        "activeTechs": active_techs,
        "openLeads": open_leads,
        "jobsToday": jobs_today,
        "weeklyRevenue": float(weekly_revenue),
        "monthlyRevenue": float(monthly_revenue),
        "conversionRate": conversion_rate(won_leads, total_leads),
        "activeMembers": active_members,
        "avgTicket": round(float(avg_ticket), 2),
    }


def daily_metrics(db: Session, days: int = 30, today: Optional[date] = None) -> List[DailyMetric]:
    today = today or date.today()
    since = today - timedelta(days=days)
    return (
        db.query(DailyMetric)
        .filter(DailyMetric.date >= since)
        .order_by(DailyMetric.date.asc())
        .all()
    )


def metric_to_dict(m: DailyMetric) -> dict:
    return {
        "id": m.id,
        "date": m.date.isoformat(),
        "revenue": m.revenue or 0,
        "jobsCompleted": m.jobs_completed or 0,
        "jobsScheduled": m.jobs_scheduled or 0,
        "leadsReceived": m.leads_received or 0,
        "leadsConverted": m.leads_converted or 0,
        "missedCalls": m.missed_calls or 0,
        "avgTicket": m.avg_ticket or 0,
        "techUtilization": m.tech_utilization or 0,
        "membershipSales": m.membership_sales or 0,
        "installRevenue": m.install_revenue or 0,
        "serviceRevenue": m.service_revenue or 0,
    }
