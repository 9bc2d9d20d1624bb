# services/reports.py
"""Aggregate list pages under /dashboard (jobs, customers, technicians,
memberships, installs, analytics, settings).

Each builder takes a session and returns the page's view-model as a dict.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from content.site import BUSINESS_HOURS, INTEGRATIONS
from models.daily_metric import DailyMetric
from models.install_project import InstallProject
from models.invoice import Invoice
from models.job import Job
from models.lead import Lead
from models.membership import Membership
from models.property import Property
from models.tech_profile import TechProfile
from models.user import User
from services.loaders import job_views
from services.overview import short_date
from services.styles import (
    JOB_STATUS_BADGE,
    JOB_TYPE_BADGE,
    LEAD_SOURCE_BADGE,
    MEMBERSHIP_PLAN_BADGE,
    PRIORITY_BADGE,
    badge,
    label,
)

PLANS = ("BRONZE", "SILVER", "GOLD", "PLATINUM")
ACTIVE_JOB_STATUSES = ("IN_PROGRESS", "EN_ROUTE")

INSTALL_STAGES = [
    ("PLANNING", "Planning"),
    ("EQUIPMENT_ORDERED", "Equipment Ordered"),
    ("PERMIT_PENDING", "Permit Pending"),
    ("SCHEDULED", "Scheduled"),
    ("IN_PROGRESS", "In Progress"),
    ("INSPECTION", "Inspection"),
    ("COMPLETE", "Complete"),
]
STAGE_INDEX = {key: i for i, (key, _) in enumerate(INSTALL_STAGES)}


# ---------------------------
# Jobs
# ---------------------------
def jobs_page(db: Session, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now()
    today_start = datetime(now.year, now.month, now.day)

    jobs = db.query(Job).order_by(Job.created_at.desc()).limit(50).all()
    views = job_views(db, jobs)

    rows = [
        {
            "id": j.id,
            "job_number": j.job_number,
            "title": j.title,
            "type": badge(JOB_TYPE_BADGE, j.job_type),
            "priority": badge(PRIORITY_BADGE, j.priority),
            "status": badge(JOB_STATUS_BADGE, j.status),
            "customer": j.customer.name,
            "technician": j.technician.name if j.technician else None,
            "address": ", ".join(p for p in (j.property.address, j.property.city, j.property.state) if p),
            "scheduled_date": j.scheduled_date.isoformat() if j.scheduled_date else None,
            "estimated_cost": j.estimated_cost,
        }
        for j in views
    ]

    return {
        "stats": {
            "total": len(views),
            "in_progress": sum(1 for j in views if j.status in ACTIVE_JOB_STATUSES),
            "completed_today": sum(
                1 for j in views
                if j.status == "COMPLETED" and j.completed_at and j.completed_at >= today_start
            ),
            "callbacks": sum(1 for j in views if j.status == "CALLBACK"),
        },
        "jobs": rows,
    }


# ---------------------------
# Customers
# ---------------------------
def customers_page(db: Session) -> dict:
    customers = db.query(User).filter(User.role == "CUSTOMER").order_by(User.name.asc()).all()
    ids = [c.id for c in customers]

    spent, plans, property_counts, job_counts = {}, {}, {}, {}
    if ids:
        spent = dict(
            db.query(
                Invoice.customer_id,
                func.sum(case((Invoice.status == "PAID", Invoice.total), else_=0)),
            )
            .filter(Invoice.customer_id.in_(ids))
            .group_by(Invoice.customer_id)
            .all()
        )
        # newest active plan per customer wins
        for cid, plan in (
            db.query(Membership.customer_id, Membership.plan)
            .filter(Membership.customer_id.in_(ids), Membership.status == "ACTIVE")
            .order_by(Membership.created_at.asc(), Membership.id.asc())
            .all()
        ):
            plans[cid] = plan
        property_counts = dict(
            db.query(Property.customer_id, func.count(Property.id))
            .filter(Property.customer_id.in_(ids))
            .group_by(Property.customer_id)
            .all()
        )
        job_counts = dict(
            db.query(Job.customer_id, func.count(Job.id))
            .filter(Job.customer_id.in_(ids))
            .group_by(Job.customer_id)
            .all()
        )

    rows = [
        {
            "id": c.id,
            "name": c.name,
            "email": c.email,
            "phone": c.phone,
            "total_spent": float(spent.get(c.id) or 0),
            "active_membership": plans.get(c.id),
            "property_count": property_counts.get(c.id, 0),
            "job_count": job_counts.get(c.id, 0),
        }
        for c in customers
    ]

    lifetime_revenue = sum(r["total_spent"] for r in rows)
    total_jobs = sum(r["job_count"] for r in rows)

    return {
        "stats": {
            "total": len(rows),
            "active_members": sum(1 for r in rows if r["active_membership"]),
            "lifetime_revenue": lifetime_revenue,
            "avg_job_value": lifetime_revenue / total_jobs if total_jobs else 0,
        },
        "customers": rows,
    }


# ---------------------------
# Technicians
# ---------------------------
def technician_status(is_available: bool, has_active_job: bool) -> str:
    if has_active_job:
        return "on-job"
    return "available" if is_available else "off-duty"


def technicians_page(db: Session) -> dict:
    techs = db.query(User).filter(User.role == "TECHNICIAN").order_by(User.name.asc()).all()
    ids = [t.id for t in techs]

    profiles, busy = {}, set()
    if ids:
        profiles = {
            p.user_id: p for p in db.query(TechProfile).filter(TechProfile.user_id.in_(ids)).all()
        }
        busy = {
            tid
            for (tid,) in db.query(Job.technician_id)
            .filter(Job.technician_id.in_(ids), Job.status.in_(ACTIVE_JOB_STATUSES))
            .distinct()
            .all()
        }

    rows = []
    for t in techs:
        p = profiles.get(t.id)
        rows.append(
            {
                "id": t.id,
                "name": t.name,
                "email": t.email,
                "status": technician_status(bool(p and p.is_available), t.id in busy),
                "profile": {
                    "skills": list(p.skills or []),
                    "certifications": list(p.certifications or []),
                    "hire_date": p.hire_date.isoformat() if p.hire_date else None,
                    "truck_number": p.truck_number,
                    "avg_rating": p.avg_rating or 0,
                    "jobs_completed": p.jobs_completed or 0,
                    "revenue_generated": p.revenue_generated or 0,
                }
                if p
                else None,
            }
        )

    total = len(rows)
    rating_sum = sum((profiles[t.id].avg_rating or 0) for t in techs if t.id in profiles)
    return {
        "stats": {
            "total": total,
            "available_now": sum(1 for t in techs if t.id in profiles and profiles[t.id].is_available),
            "on_jobs": len(busy),
            "avg_rating": round(rating_sum / total, 1) if total else 0,
        },
        "technicians": rows,
    }


# ---------------------------
# Memberships
# ---------------------------
def memberships_page(db: Session, today: Optional[date] = None) -> dict:
    today = today or date.today()
    horizon = today + timedelta(days=30)

    memberships = db.query(Membership).order_by(Membership.renewal_date.asc()).all()
    customers = {}
    cids = {m.customer_id for m in memberships}
    if cids:
        customers = {u.id: u for u in db.query(User).filter(User.id.in_(cids)).all()}

    active = [m for m in memberships if m.status == "ACTIVE"]
    expired = sum(1 for m in memberships if m.status == "EXPIRED")
    total = len(memberships)

    tiers = []
    for plan in PLANS:
        members = [m for m in active if m.plan == plan]
        tiers.append(
            {
                "plan": plan,
                "label": label(MEMBERSHIP_PLAN_BADGE, plan),
                "count": len(members),
                "revenue": sum(m.monthly_rate or 0 for m in members),
            }
        )

    def row(m: Membership) -> dict:
        cust = customers.get(m.customer_id)
        return {
            "id": m.id,
            "customer": {
                "id": m.customer_id,
                "name": cust.name if cust else None,
                "email": cust.email if cust else None,
                "phone": cust.phone if cust else None,
            },
            "plan": badge(MEMBERSHIP_PLAN_BADGE, m.plan),
            "status": m.status,
            "start_date": m.start_date.isoformat() if m.start_date else None,
            "renewal_date": m.renewal_date.isoformat() if m.renewal_date else None,
            "monthly_rate": m.monthly_rate or 0,
            "visits_per_year": m.visits_per_year or 0,
            "visits_used": m.visits_used or 0,
            "discount": m.discount or 0,
        }

    upcoming = [
        {**row(m), "days_until": (m.renewal_date - today).days}
        for m in active
        if m.renewal_date and today <= m.renewal_date <= horizon
    ]

    return {
        "stats": {
            "active_members": len(active),
            "monthly_recurring_revenue": sum(m.monthly_rate or 0 for m in active),
            "renewal_rate": round((total - expired) / total * 100) if total else 0,
            "visits_remaining": sum((m.visits_per_year or 0) - (m.visits_used or 0) for m in active),
        },
        "tiers": tiers,
        "upcoming_renewals": upcoming,
        "memberships": [row(m) for m in memberships],
    }


# ---------------------------
# Installs
# ---------------------------
def install_progress(status: str) -> int:
    index = STAGE_INDEX.get(status, 0)
    return round((index + 1) / len(INSTALL_STAGES) * 100)


def installs_page(db: Session) -> dict:
    projects = db.query(InstallProject).order_by(InstallProject.created_at.desc(), InstallProject.id.desc()).all()

    counts = {key: 0 for key, _ in INSTALL_STAGES}
    for p in projects:
        if p.status in counts:
            counts[p.status] += 1

    divisor = len(projects) or 1
    return {
        "stages": [
            {
                "status": key,
                "label": stage_label,
                "count": counts[key],
                "share_pct": round(counts[key] / divisor * 100, 1),
            }
            for key, stage_label in INSTALL_STAGES
        ],
        "projects": [
            {
                "id": p.id,
                "project_number": p.project_number,
                "customer_name": p.customer_name,
                "customer_phone": p.customer_phone,
                "property_address": p.property_address,
                "equipment_ordered": p.equipment_ordered,
                "equipment_status": p.equipment_status,
                "permit_number": p.permit_number,
                "permit_status": p.permit_status,
                "scheduled_date": p.scheduled_date.isoformat() if p.scheduled_date else None,
                "estimated_days": p.estimated_days,
                "total_cost": p.total_cost or 0,
                "deposit_paid": p.deposit_paid or 0,
                "balance_due": p.balance_due or 0,
                "status": p.status,
                "progress_pct": install_progress(p.status),
                "notes": p.notes,
            }
            for p in projects
        ],
    }


# ---------------------------
# Analytics (last 30 days)
# ---------------------------
def analytics_page(db: Session, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now()
    since = now - timedelta(days=30)

    metrics = (
        db.query(DailyMetric)
        .filter(DailyMetric.date >= since.date())
        .order_by(DailyMetric.date.asc())
        .all()
    )
    total_revenue = sum(m.revenue or 0 for m in metrics)
    total_jobs = sum(m.jobs_completed or 0 for m in metrics)
    leads_received = sum(m.leads_received or 0 for m in metrics)
    leads_converted = sum(m.leads_converted or 0 for m in metrics)

    total_customers = db.query(func.count(User.id)).filter(User.role == "CUSTOMER").scalar() or 0
    paying_customers = (
        db.query(func.count(func.distinct(Invoice.customer_id)))
        .join(User, User.id == Invoice.customer_id)
        .filter(User.role == "CUSTOMER", Invoice.status == "PAID")
        .scalar()
        or 0
    )

    jobs_by_type = [
        {"type": label(JOB_TYPE_BADGE, job_type), "count": count}
        for job_type, count in db.query(Job.job_type, func.count(Job.id))
        .filter(Job.created_at >= since)
        .group_by(Job.job_type)
        .all()
    ]

    leads_by_source = [
        {"source": label(LEAD_SOURCE_BADGE, source), "count": count, "value": float(value or 0)}
        for source, count, value in db.query(Lead.source, func.count(Lead.id), func.sum(Lead.estimated_value))
        .filter(Lead.created_at >= since)
        .group_by(Lead.source)
        .order_by(func.count(Lead.id).desc())
        .all()
    ]

    tech_rows = (
        db.query(User.name, TechProfile.jobs_completed, TechProfile.revenue_generated, TechProfile.avg_rating)
        .join(TechProfile, TechProfile.user_id == User.id)
        .filter(User.role == "TECHNICIAN")
        .order_by(TechProfile.revenue_generated.desc())
        .limit(10)
        .all()
    )
    tech_performance = [
        {"name": name.split(" ")[0], "jobs": jobs or 0, "revenue": revenue or 0, "rating": rating or 0}
        for name, jobs, revenue, rating in tech_rows
    ]

    def count_jobs(*criteria) -> int:
        return db.query(func.count(Job.id)).filter(Job.created_at >= since, *criteria).scalar() or 0

    funnel = {
        "calls": round(leads_received * 1.4) if leads_received else 0,
        "leads": leads_received,
        "estimates": count_jobs(Job.job_type == "ESTIMATE"),
        "jobs": count_jobs(Job.status.in_(("SCHEDULED", "IN_PROGRESS", "COMPLETED"))),
        "installs": count_jobs(Job.job_type == "INSTALLATION", Job.status == "COMPLETED"),
    }

    zip_codes = [
        {"zip": zip_code, "count": count}
        for zip_code, count in db.query(Property.zip, func.count(Property.id))
        .group_by(Property.zip)
        .order_by(func.count(Property.id).desc())
        .limit(8)
        .all()
    ]

    top_services = [
        {"title": title, "count": count, "revenue": float(revenue or 0)}
        for title, count, revenue in db.query(Job.title, func.count(Job.id), func.sum(Job.actual_cost))
        .filter(Job.created_at >= since)
        .group_by(Job.title)
        .order_by(func.count(Job.id).desc())
        .limit(8)
        .all()
    ]

    return {
        "revenue_series": [
            {
                "date": short_date(m.date),
                "revenue": m.revenue or 0,
                "service": m.service_revenue or 0,
                "install": m.install_revenue or 0,
            }
            for m in metrics
        ],
        "kpis": {
            "total_revenue": total_revenue,
            "avg_daily_revenue": total_revenue / len(metrics) if metrics else 0,
            "total_jobs": total_jobs,
            "avg_ticket": total_revenue / total_jobs if total_jobs else 0,
            "lead_conversion_rate": leads_converted / leads_received * 100 if leads_received else 0,
            "customer_retention": paying_customers / total_customers * 100 if total_customers else 0,
        },
        "jobs_by_type": jobs_by_type,
        "leads_by_source": leads_by_source,
        "tech_performance": tech_performance,
        "funnel": funnel,
        "zip_codes": zip_codes,
        "top_services": top_services,
    }


# ---------------------------
# Settings
# ---------------------------
def settings_page(db: Session) -> dict:
    team = defaultdict(int)
    for role, count in db.query(User.role, func.count(User.id)).group_by(User.role).all():
        team[role] = count

    return {
        "company": {"name": "FD Pierce Company"},
        "business_hours": BUSINESS_HOURS,
        "integrations": INTEGRATIONS,
        "team": {role: team[role] for role in ("OWNER", "ADMIN", "DISPATCHER", "TECHNICIAN")},
    }
