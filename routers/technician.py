from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlalchemy.orm import Session
from db.init import get_db
from models.enums import STAFF_ROLES
from models.job import Job
from models.tech_profile import TechProfile
from models.user import User
from utils.deps import role_required
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def profile_to_dict(p: TechProfile) -> dict:
    return {
        "id": p.id,
        "skills": list(p.skills or []),
        "certifications": list(p.certifications or []),
        "hireDate": p.hire_date.isoformat() if p.hire_date else None,
        "truckNumber": p.truck_number,
        "isAvailable": bool(p.is_available),
        "avgRating": p.avg_rating or 0,
        "jobsCompleted": p.jobs_completed or 0,
        "revenueGenerated": p.revenue_generated or 0,
    }


@router.get("/", dependencies=[Depends(role_required(*STAFF_ROLES))])
def get_all_technicians(db: Session = Depends(get_db)):
    try:
        techs = db.query(User).filter(User.role == "TECHNICIAN").order_by(User.name.asc()).all()
        if not techs:
            return []
        ids = [t.id for t in techs]

        profiles = {p.user_id: p for p in db.query(TechProfile).filter(TechProfile.user_id.in_(ids)).all()}
        job_counts = dict(
            db.query(Job.technician_id, func.count(Job.id))
            .filter(Job.technician_id.in_(ids))
            .group_by(Job.technician_id)
            .all()
        )

        return [
            {
                "id": t.id,
                "name": t.name,
                "email": t.email,
                "phone": t.phone,
                "avatar": t.avatar,
                "createdAt": t.created_at.isoformat() if t.created_at else None,
                "techProfile": profile_to_dict(profiles[t.id]) if t.id in profiles else None,
                "jobCount": job_counts.get(t.id, 0),
            }
            for t in techs
        ]
    except Exception as e:
        logger.exception(f"Failed to fetch technicians: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch technicians"})
