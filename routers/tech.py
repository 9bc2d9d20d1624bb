from collections import Counter
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from db.init import get_db
from models.job import Job
from models.tech_profile import TechProfile
from services.dispatch import today_label
from services.loaders import job_views
from services.styles import JOB_TYPE_BADGE, PRIORITY_BADGE, badge
from utils.deps import current_user, role_required

router = APIRouter()

UPCOMING_STATUSES = ("PENDING", "SCHEDULED", "EN_ROUTE")


@router.get("")
def technician_day(db: Session = Depends(get_db), payload=Depends(role_required("TECHNICIAN"))):
    me = current_user(db, payload)
    today = date.today()

    jobs = (
        db.query(Job)
        .filter(Job.technician_id == me.id, Job.scheduled_date == today, Job.status != "CANCELLED")
        .order_by(Job.scheduled_start.asc(), Job.id.asc())
        .all()
    )
    views = job_views(db, jobs)
    profile = db.query(TechProfile).filter(TechProfile.user_id == me.id).first()

    cards = [
        {
            "id": j.id,
            "job_number": j.job_number,
            "title": j.title,
            "job_type": badge(JOB_TYPE_BADGE, j.job_type),
            "priority": badge(PRIORITY_BADGE, j.priority),
            "status": j.status,
            "start": j.scheduled_start,
            "end": j.scheduled_end,
            "customer": j.customer.model_dump(),
            "property": j.property.model_dump(),
            "description": j.description,
        }
        for j in views
    ]

    current = next((c for c in cards if c["status"] == "IN_PROGRESS"), None)
    upcoming = next((c for c in cards if c["status"] in UPCOMING_STATUSES), None)

    return {
        "technician": {
            "id": me.id,
            "name": me.name,
            "truck_number": profile.truck_number if profile else None,
        },
        "date": today_label(today),
        "counts": dict(Counter(c["status"] for c in cards)),
        "completed": sum(1 for c in cards if c["status"] == "COMPLETED"),
        "total": len(cards),
        "current_job": current,
        "next_job": upcoming,
        "jobs": cards,
    }
