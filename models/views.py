"""Read-only view models handed to the dispatch board, lead pipeline and list pages.

These are assembled from ORM rows by ``services.loaders`` and serialized with
``model_dump(mode="json")`` in the routers.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CustomerRef(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class TechnicianRef(BaseModel):
    id: int
    name: str


class PropertyRef(BaseModel):
    id: int
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None


class JobView(BaseModel):
    id: int
    job_number: str
    title: str
    description: str = ""
    job_type: str
    priority: str = "NORMAL"
    status: str = "PENDING"
    scheduled_date: Optional[date] = None
    scheduled_start: Optional[str] = None
    scheduled_end: Optional[str] = None
    estimated_cost: Optional[float] = None
    customer: CustomerRef
    technician: Optional[TechnicianRef] = None
    property: PropertyRef
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class TechProfileView(BaseModel):
    id: int
    truck_number: Optional[str] = None
    is_available: bool = False
    skills: List[str] = Field(default_factory=list)


class TechnicianView(BaseModel):
    id: int
    name: str
    tech_profile: Optional[TechProfileView] = None


class LeadView(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: str
    address: Optional[str] = None
    source: str
    status: str
    service_needed: str
    description: Optional[str] = None
    urgency: Optional[int] = Field(default=None, ge=0, le=10)
    estimated_value: Optional[float] = None
    notes: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    created_at: datetime
