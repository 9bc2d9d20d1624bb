# services/loaders.py
"""Assemble view models from ORM rows.

Lookups are batch-preloaded per call (one query per related table) so list
pages never issue a query per row.
"""
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from models.job import Job
from models.lead import Lead
from models.property import Property
from models.tech_profile import TechProfile
from models.user import User
from models.views import (
    CustomerRef,
    JobView,
    LeadView,
    PropertyRef,
    TechnicianRef,
    TechnicianView,
    TechProfileView,
)


def _users_by_id(db: Session, ids: Iterable[int]) -> Dict[int, User]:
    ids = {i for i in ids if i is not None}
    if not ids:
        return {}
    return {u.id: u for u in db.query(User).filter(User.id.in_(ids)).all()}


def _properties_by_id(db: Session, ids: Iterable[int]) -> Dict[int, Property]:
    ids = {i for i in ids if i is not None}
    if not ids:
        return {}
    return {p.id: p for p in db.query(Property).filter(Property.id.in_(ids)).all()}


def job_views(db: Session, jobs: List[Job]) -> List[JobView]:
    if not jobs:
        return []

    users = _users_by_id(
        db,
        [j.customer_id for j in jobs] + [j.technician_id for j in jobs],
    )
    properties = _properties_by_id(db, [j.property_id for j in jobs])

    views = []
    for j in jobs:
        cust = users.get(j.customer_id)
        tech = users.get(j.technician_id) if j.technician_id is not None else None
        prop = properties.get(j.property_id)

        views.append(
            JobView(
                id=j.id,
                job_number=j.job_number,
                title=j.title,
                description=j.description or "",
                job_type=j.job_type,
                priority=j.priority or "NORMAL",
                status=j.status or "PENDING",
                scheduled_date=j.scheduled_date,
                scheduled_start=j.scheduled_start,
                scheduled_end=j.scheduled_end,
                estimated_cost=j.estimated_cost,
                customer=CustomerRef(
                    id=j.customer_id,
                    name=cust.name if cust else "Unknown customer",
                    phone=cust.phone if cust else None,
                    email=cust.email if cust else None,
                ),
                technician=TechnicianRef(id=tech.id, name=tech.name) if tech else None,
                property=PropertyRef(
                    id=j.property_id,
                    address=prop.address if prop else "",
                    city=prop.city if prop else None,
                    state=prop.state if prop else None,
                    zip=prop.zip if prop else None,
                ),
                completed_at=j.completed_at,
                created_at=j.created_at,
            )
        )
    return views


def technician_views(db: Session, technicians: List[User]) -> List[TechnicianView]:
    if not technicians:
        return []

    profiles = {
        p.user_id: p
        for p in db.query(TechProfile)
        .filter(TechProfile.user_id.in_([t.id for t in technicians]))
        .all()
    }

    views = []
    for t in technicians:
        p = profiles.get(t.id)
        views.append(
            TechnicianView(
                id=t.id,
                name=t.name,
                tech_profile=TechProfileView(
                    id=p.id,
                    truck_number=p.truck_number,
                    is_available=bool(p.is_available),
                    skills=list(p.skills or []),
                )
                if p
                else None,
            )
        )
    return views


def lead_view(lead: Lead) -> LeadView:
    return LeadView(
        id=lead.id,
        name=lead.name,
        email=lead.email,
        phone=lead.phone,
        address=lead.address,
        source=lead.source or "WEBSITE",
        status=lead.status or "NEW",
        service_needed=lead.service_needed,
        description=lead.description,
        urgency=lead.urgency,
        estimated_value=lead.estimated_value,
        notes=lead.notes,
        follow_up_date=lead.follow_up_date,
        created_at=lead.created_at,
    )


def lead_views(leads: List[Lead]) -> List[LeadView]:
    return [lead_view(ld) for ld in leads]
