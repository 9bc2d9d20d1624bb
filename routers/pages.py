# routers/pages.py
"""Staff dashboard pages. Each endpoint returns the page's view-model."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import case
from sqlalchemy.orm import Session

from db.init import get_db
from models.enums import STAFF_ROLES
from models.job import Job
from models.lead import Lead
from models.user import User
from services import reports
from services.dispatch import FILTER_MAP, DispatchBoard, today_label
from services.loaders import job_views, lead_views, technician_views
from services.overview import Overview
from services.pipeline import LeadPipeline, bucket_leads, lead_stats
from utils.deps import role_required

router = APIRouter(dependencies=[Depends(role_required(*STAFF_ROLES))])

# highest first
PRIORITY_RANK = case(
    (Job.priority == "EMERGENCY", 5),
    (Job.priority == "URGENT", 4),
    (Job.priority == "HIGH", 3),
    (Job.priority == "NORMAL", 2),
    (Job.priority == "LOW", 1),
    else_=0,
)


@router.get("")
def overview_page(db: Session = Depends(get_db)):
    return Overview(db).to_dict()


@router.get("/dispatch")
def dispatch_page(
    filter: str = Query("All"),
    selected: Optional[int] = None,
    db: Session = Depends(get_db),
):
    if filter not in FILTER_MAP:
        raise HTTPException(status_code=400, detail=f"Unknown filter: {filter}")

    today = date.today()

    jobs = (
        db.query(Job)
        .filter(
            Job.scheduled_date == today,
            Job.technician_id.isnot(None),
            Job.status != "CANCELLED",
        )
        .order_by(Job.scheduled_date.asc(), Job.scheduled_start.asc())
        .all()
    )
    technicians = db.query(User).filter(User.role == "TECHNICIAN").order_by(User.name.asc()).all()
    unassigned = (
        db.query(Job)
        .filter(Job.technician_id.is_(None), Job.status == "PENDING")
        .order_by(PRIORITY_RANK.desc(), Job.created_at.asc(), Job.id.asc())
        .limit(50)
        .all()
    )

    board = DispatchBoard(
        job_views(db, jobs),
        technician_views(db, technicians),
        job_views(db, unassigned),
        today_label(today),
        active_filter=filter,
    )
    if selected is not None:
        board.select(selected)
    return board.to_dict()


@router.get("/leads")
def leads_page(selected: Optional[int] = None, db: Session = Depends(get_db)):
    leads = lead_views(db.query(Lead).order_by(Lead.created_at.desc(), Lead.id.desc()).all())

    pipeline = LeadPipeline(bucket_leads(leads), lead_stats(leads))
    if selected is not None:
        pipeline.select(selected)
    return pipeline.to_dict()


@router.get("/jobs")
def jobs_page(db: Session = Depends(get_db)):
    return reports.jobs_page(db)


@router.get("/customers")
def customers_page(db: Session = Depends(get_db)):
    return reports.customers_page(db)


@router.get("/technicians")
def technicians_page(db: Session = Depends(get_db)):
    return reports.technicians_page(db)


@router.get("/memberships")
def memberships_page(db: Session = Depends(get_db)):
    return reports.memberships_page(db)


@router.get("/installs")
def installs_page(db: Session = Depends(get_db)):
    return reports.installs_page(db)


@router.get("/analytics")
def analytics_page(db: Session = Depends(get_db)):
    return reports.analytics_page(db)


@router.get("/settings")
def settings_page(db: Session = Depends(get_db)):
    return reports.settings_page(db)
