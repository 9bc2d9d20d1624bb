from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, TIMESTAMP, Text, func
from db.init import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    job_number = Column(String(20), unique=True, index=True, nullable=False)  # FDP-2026-001
    title = Column(String(150), nullable=False)
    description = Column(Text, default="")
    job_type = Column(String(20), nullable=False, index=True)
    priority = Column(String(20), default="NORMAL")
    status = Column(String(20), default="PENDING", index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    technician_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False)
    unit_id = Column(Integer, ForeignKey("units.id"), nullable=True)
    scheduled_date = Column(Date, nullable=True, index=True)
    scheduled_start = Column(String(5), nullable=True)  # "HH:MM"
    scheduled_end = Column(String(5), nullable=True)
    estimated_cost = Column(Float, nullable=True)
    actual_cost = Column(Float, nullable=True)
    tech_notes = Column(Text, nullable=True)
    completed_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, default=datetime.now, server_default=func.now())
