from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from db.init import get_db
from models.enums import STAFF_ROLES, JobPriority, JobStatus, JobType
from models.job import Job
from models.property import Property
from models.user import User
from models.views import JobView
from services.dispatch import parse_clock
from services.loaders import job_views
from utils.deps import role_required
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ["title", "description", "jobType", "customerId", "propertyId"]


def next_job_number(db: Session, year: Optional[int] = None) -> str:
    """FDP-<year>-<seq>, sequence restarting every year and padded to 3 digits."""
    year = year or datetime.now().year
    prefix = f"FDP-{year}-"

    last = 0
    for (number,) in db.query(Job.job_number).filter(Job.job_number.like(f"{prefix}%")).all():
        suffix = number[len(prefix):]
        if suffix.isdigit():
            last = max(last, int(suffix))
    return f"{prefix}{last + 1:03d}"


def job_to_dict(j: JobView) -> dict:
    return {
        "id": j.id,
        "jobNumber": j.job_number,
        "title": j.title,
        "description": j.description,
        "jobType": j.job_type,
        "priority": j.priority,
        "status": j.status,
        "scheduledDate": j.scheduled_date.isoformat() if j.scheduled_date else None,
        "scheduledStart": j.scheduled_start,
        "scheduledEnd": j.scheduled_end,
        "estimatedCost": j.estimated_cost,
        "completedAt": j.completed_at.isoformat() if j.completed_at else None,
        "createdAt": j.created_at.isoformat() if j.created_at else None,
        "customer": j.customer.model_dump(),
        "technician": j.technician.model_dump() if j.technician else None,
        "property": j.property.model_dump(),
    }


@router.get("/", dependencies=[Depends(role_required(*STAFF_ROLES))])
def list_jobs(
    status: Optional[str] = None,
    type: Optional[str] = None,
    techId: Optional[int] = None,
    limit: int = Query(50, ge=1),
    db: Session = Depends(get_db),
):
    try:
        q = db.query(Job)
        # unknown enum values are ignored rather than rejected
        if status in JobStatus.__members__:
            q = q.filter(Job.status == status)
        if type in JobType.__members__:
            q = q.filter(Job.job_type == type)
        if techId is not None:
            q = q.filter(Job.technician_id == techId)

        jobs = q.order_by(Job.created_at.desc(), Job.id.desc()).limit(min(limit, 200)).all()
        return [job_to_dict(j) for j in job_views(db, jobs)]
    except Exception as e:
        logger.exception(f"Failed to fetch jobs: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch jobs"})


@router.post("/", status_code=201, dependencies=[Depends(role_required(*STAFF_ROLES))])
def create_job(data: dict, db: Session = Depends(get_db)):
    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")

    if data["jobType"] not in JobType.__members__:
        raise HTTPException(status_code=400, detail=f"Invalid jobType: {data['jobType']}")
    priority = data.get("priority") or "NORMAL"
    if priority not in JobPriority.__members__:
        raise HTTPException(status_code=400, detail=f"Invalid priority: {priority}")

    customer = db.query(User).filter(User.id == data["customerId"]).first()
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    if not db.query(Property).filter(Property.id == data["propertyId"]).first():
        raise HTTPException(status_code=404, detail="Property not found")

    technician_id = data.get("technicianId")
    if technician_id is not None and not db.query(User).filter(
        User.id == technician_id, User.role == "TECHNICIAN"
    ).first():
        raise HTTPException(status_code=404, detail="Technician not found")

    for field in ("scheduledStart", "scheduledEnd"):
        value = data.get(field)
        if value is not None and (not isinstance(value, str) or parse_clock(value) is None):
            raise HTTPException(status_code=400, detail=f"Invalid {field}: expected HH:MM")

    try:
        scheduled_date = date.fromisoformat(str(data["scheduledDate"])[:10]) if data.get("scheduledDate") else None
        estimated_cost = float(data["estimatedCost"]) if data.get("estimatedCost") is not None else None
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid value: {e}")

    job = Job(
        job_number=next_job_number(db),
        title=data["title"],
        description=data["description"],
        job_type=data["jobType"],
        priority=priority,
        customer_id=customer.id,
        property_id=data["propertyId"],
        unit_id=data.get("unitId"),
        technician_id=technician_id,
        scheduled_date=scheduled_date,
        scheduled_start=data.get("scheduledStart"),
        scheduled_end=data.get("scheduledEnd"),
        estimated_cost=estimated_cost,
        status="SCHEDULED" if technician_id and scheduled_date else "PENDING",
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info(f"Created job {job.job_number} ({job.status})")

    return job_to_dict(job_views(db, [job])[0])
