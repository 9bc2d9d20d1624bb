from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from db.init import get_db
from models.invoice import Invoice
from models.job import Job
from models.membership import Membership
from models.property import Property
from models.unit import Unit
from models.user import User
from services.styles import JOB_STATUS_BADGE, JOB_TYPE_BADGE, MEMBERSHIP_PLAN_BADGE, label
from utils.deps import current_user, role_required

router = APIRouter()

OPEN_INVOICE_STATUSES = ("SENT", "OVERDUE")


def warranty_status(warranty_end, today: date) -> str:
    if not warranty_end:
        return "No warranty on file"
    if warranty_end < today:
        return "Out of warranty"
    return f"Warranty until {warranty_end.year}"


@router.get("")
def customer_portal(db: Session = Depends(get_db), payload=Depends(role_required("CUSTOMER"))):
    me = current_user(db, payload)
    today = date.today()

    jobs = (
        db.query(Job)
        .filter(Job.customer_id == me.id)
        .order_by(Job.scheduled_date.desc(), Job.created_at.desc())
        .all()
    )
    tech_ids = {j.technician_id for j in jobs if j.technician_id is not None}
    techs = {}
    if tech_ids:
        techs = {u.id: u.name for u in db.query(User.id, User.name).filter(User.id.in_(tech_ids)).all()}

    property_ids = [p.id for p in db.query(Property.id).filter(Property.customer_id == me.id).all()]
    units = []
    if property_ids:
        units = db.query(Unit).filter(Unit.property_id.in_(property_ids)).order_by(Unit.id.asc()).all()

    invoices = (
        db.query(Invoice)
        .filter(Invoice.customer_id == me.id, Invoice.status != "VOID")
        .order_by(Invoice.created_at.desc(), Invoice.id.desc())
        .all()
    )

    membership = (
        db.query(Membership)
        .filter(Membership.customer_id == me.id, Membership.status == "ACTIVE")
        .order_by(Membership.created_at.desc(), Membership.id.desc())
        .first()
    )

    return {
        "customer": {"id": me.id, "name": me.name, "email": me.email, "phone": me.phone},
        "service_history": [
            {
                "id": j.id,
                "job_number": j.job_number,
                "date": j.scheduled_date.isoformat() if j.scheduled_date else None,
                "job_type": label(JOB_TYPE_BADGE, j.job_type),
                "description": j.title,
                "technician": techs.get(j.technician_id),
                "cost": j.actual_cost if j.actual_cost is not None else j.estimated_cost,
                "status": label(JOB_STATUS_BADGE, j.status),
                "tech_notes": j.tech_notes,
            }
            for j in jobs
        ],
        "units": [
            {
                "id": u.id,
                "type": u.unit_type,
                "brand": u.brand,
                "model": u.model,
                "install_date": u.install_date.isoformat() if u.install_date else None,
                "last_service": u.last_service.isoformat() if u.last_service else None,
                "condition": u.condition,
                "warranty": warranty_status(u.warranty_end, today),
            }
            for u in units
        ],
        "invoices": [
            {
                "id": inv.id,
                "invoice_number": inv.invoice_number,
                "amount": inv.total,
                "status": inv.status,
                "date": inv.created_at.date().isoformat() if inv.created_at else None,
                "due_date": inv.due_date.isoformat() if inv.due_date else None,
            }
            for inv in invoices
        ],
        "balance_due": round(sum(inv.total or 0 for inv in invoices if inv.status in OPEN_INVOICE_STATUSES), 2),
        "membership": {
            "plan": label(MEMBERSHIP_PLAN_BADGE, membership.plan),
            "renewal_date": membership.renewal_date.isoformat() if membership.renewal_date else None,
            "monthly_rate": membership.monthly_rate,
            "discount": membership.discount or 0,
            "visits_remaining": max((membership.visits_per_year or 0) - (membership.visits_used or 0), 0),
        }
        if membership
        else None,
    }
