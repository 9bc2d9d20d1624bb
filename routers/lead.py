from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from db.init import get_db
from models.enums import STAFF_ROLES, LeadSource, LeadStatus
from models.lead import Lead
from models.user import User
from utils.deps import role_required
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def lead_to_dict(ld: Lead, customer: Optional[User] = None) -> dict:
    return {
        "id": ld.id,
        "name": ld.name,
        "email": ld.email,
        "phone": ld.phone,
        "address": ld.address,
        "source": ld.source,
        "status": ld.status,
        "serviceNeeded": ld.service_needed,
        "description": ld.description,
        "urgency": ld.urgency,
        "estimatedValue": ld.estimated_value,
        "notes": ld.notes,
        "followUpDate": ld.follow_up_date.isoformat() if ld.follow_up_date else None,
        "assignedTo": ld.assigned_to,
        "createdAt": ld.created_at.isoformat() if ld.created_at else None,
        "customer": {
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "phone": customer.phone,
        }
        if customer
        else None,
    }


@router.get("/", dependencies=[Depends(role_required(*STAFF_ROLES))])
def list_leads(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
):
    try:
        q = db.query(Lead)
        if status in LeadStatus.__members__:
            q = q.filter(Lead.status == status)
        leads = q.order_by(Lead.created_at.desc(), Lead.id.desc()).all()

        # Batch preload linked customers
        customer_ids = {ld.customer_id for ld in leads if ld.customer_id is not None}
        customers = {}
        if customer_ids:
            customers = {u.id: u for u in db.query(User).filter(User.id.in_(customer_ids)).all()}

        return [lead_to_dict(ld, customers.get(ld.customer_id)) for ld in leads]
    except Exception as e:
        logger.exception(f"Failed to fetch leads: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch leads"})


@router.post("/", status_code=201, dependencies=[Depends(role_required(*STAFF_ROLES))])
def create_lead(data: dict, db: Session = Depends(get_db)):
    required = ["name", "phone", "serviceNeeded"]
    missing = [f for f in required if not data.get(f)]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")

    source = data.get("source")
    if source not in LeadSource.__members__:
        source = "WEBSITE"

    urgency = data.get("urgency")
    if urgency not in (None, ""):
        try:
            urgency = int(urgency)
        except (TypeError, ValueError):
            raise HTTPException(status_code=400, detail="urgency must be an integer between 0 and 10")
        if not 0 <= urgency <= 10:
            raise HTTPException(status_code=400, detail="urgency must be an integer between 0 and 10")
    else:
        urgency = None

    lead = Lead(
        name=data["name"],
        email=data.get("email"),
        phone=data["phone"],
        address=data.get("address"),
        source=source,
        service_needed=data["serviceNeeded"],
        description=data.get("description"),
        urgency=urgency,
        status="NEW",
    )
    db.add(lead)
    db.commit()
    db.refresh(lead)
    return lead_to_dict(lead)
