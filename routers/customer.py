from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from db.init import get_db
from models.enums import STAFF_ROLES
from models.invoice import Invoice
from models.membership import Membership
from models.property import Property
from models.user import User
from utils.deps import role_required
from collections import defaultdict
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", dependencies=[Depends(role_required(*STAFF_ROLES))])
def get_all_customers(db: Session = Depends(get_db)):
    try:
        customers = db.query(User).filter(User.role == "CUSTOMER").order_by(User.name.asc()).all()
        if not customers:
            return []
        ids = [c.id for c in customers]

        # ---- Batch preload properties, active memberships and paid invoices ----
        properties = defaultdict(list)
        for p in db.query(Property).filter(Property.customer_id.in_(ids)).all():
            properties[p.customer_id].append(
                {
                    "id": p.id,
                    "name": p.name,
                    "address": p.address,
                    "city": p.city,
                    "state": p.state,
                    "zip": p.zip,
                    "propertyType": p.property_type,
                }
            )

        memberships = defaultdict(list)
        for m in (
            db.query(Membership)
            .filter(Membership.customer_id.in_(ids), Membership.status == "ACTIVE")
            .all()
        ):
            memberships[m.customer_id].append(
                {
                    "id": m.id,
                    "plan": m.plan,
                    "status": m.status,
                    "startDate": m.start_date.isoformat() if m.start_date else None,
                    "renewalDate": m.renewal_date.isoformat() if m.renewal_date else None,
                    "monthlyRate": m.monthly_rate,
                    "visitsPerYear": m.visits_per_year,
                    "visitsUsed": m.visits_used,
                    "discount": m.discount,
                }
            )

        paid = defaultdict(list)
        for inv_customer, total in (
            db.query(Invoice.customer_id, Invoice.total)
            .filter(Invoice.customer_id.in_(ids), Invoice.status == "PAID")
            .all()
        ):
            paid[inv_customer].append(total or 0)

        return [
            {
                "id": c.id,
                "name": c.name,
                "email": c.email,
                "phone": c.phone,
                "avatar": c.avatar,
                "createdAt": c.created_at.isoformat() if c.created_at else None,
                "properties": properties[c.id],
                "memberships": memberships[c.id],
                "invoiceCount": len(paid[c.id]),
                "totalSpent": round(sum(paid[c.id]), 2),
            }
            for c in customers
        ]
    except Exception as e:
        logger.exception(f"Failed to fetch customers: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch customers"})
