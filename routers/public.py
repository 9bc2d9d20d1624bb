from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.init import get_db
from models.lead import Lead
from models.service_request import ServiceRequest
from utils.email import send_service_request_email
from utils.sms import page_oncall
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

# service-request urgency -> lead urgency score (0-10)
URGENCY_SCORES = {
    "low": 2,
    "normal": 5,
    "high": 7,
    "emergency": 10,
}

SUCCESS_MESSAGE = "Service request submitted successfully. We will contact you shortly."


def _missing(data: dict, required) -> None:
    missing = [f for f in required if not data.get(f)]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(missing)}"
        )


def create_service_request(db: Session, data: dict, urgency: Optional[str] = None) -> ServiceRequest:
    """
    Persist the request and its NEW website lead together. Either both rows
    are committed or neither is.
    """
    urgency = (urgency or data.get("urgency") or "normal").lower()

    try:
        request = ServiceRequest(
            name=data["name"],
            email=data.get("email"),
            phone=data["phone"],
            address=data.get("address"),
            service_type=data["serviceType"],
            urgency=urgency,
            description=data["description"],
            preferred_date=data.get("preferredDate"),
            preferred_time=data.get("preferredTime"),
            status="new",
        )
        lead = Lead(
            name=data["name"],
            email=data.get("email"),
            phone=data["phone"],
            address=data.get("address"),
            source="WEBSITE",
            service_needed=data["serviceType"],
            description=data["description"],
            urgency=URGENCY_SCORES.get(urgency, 5),
            status="NEW",
        )
        db.add(request)
        db.add(lead)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(request)
    return request


def _notify_office(request: ServiceRequest) -> bool:
    ok, error = send_service_request_email(
        name=request.name,
        email=request.email,
        phone=request.phone,
        service_type=request.service_type,
        urgency=request.urgency,
        description=request.description,
        address=request.address,
        preferred_date=request.preferred_date,
    )
    if not ok:
        logger.error(f"Office notification failed for service request {request.id}: {error}")
    return ok


@router.post("/service-request", status_code=201)
def submit_service_request(data: dict, db: Session = Depends(get_db)):
    _missing(data, ["name", "email", "phone", "serviceType", "description"])
    try:
        request = create_service_request(db, data)
    except SQLAlchemyError as e:
        logger.exception(f"Failed to create service request: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to submit service request"})

    return {"message": SUCCESS_MESSAGE, "serviceRequestId": request.id}


@router.post("/contact", status_code=201)
def submit_contact_form(data: dict, db: Session = Depends(get_db)):
    _missing(data, ["name", "email", "phone", "serviceType", "description"])
    try:
        request = create_service_request(db, data)
    except SQLAlchemyError as e:
        logger.exception(f"Failed to save contact form: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to submit service request"})

    return {
        "message": SUCCESS_MESSAGE,
        "serviceRequestId": request.id,
        "notified": _notify_office(request),
    }


@router.post("/emergency", status_code=201)
def submit_emergency(data: dict, db: Session = Depends(get_db)):
    """Emergency form: name, phone, address and a free-text issue."""
    _missing(data, ["name", "phone", "address", "issue"])

    form = {
        "name": data["name"],
        "email": data.get("email"),
        "phone": data["phone"],
        "address": data["address"],
        "serviceType": data.get("serviceType") or "Emergency Repair",
        "description": data["issue"],
    }
    try:
        request = create_service_request(db, form, urgency="emergency")
    except SQLAlchemyError as e:
        logger.exception(f"Failed to save emergency request: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to submit service request"})

    emailed = _notify_office(request)
    paged = page_oncall(request.name, request.phone, f"{request.address}: {request.description}")

    return {
        "message": "Emergency request received. Our on-call technician will call you right away.",
        "serviceRequestId": request.id,
        "notified": emailed or paged,
    }
