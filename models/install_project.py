from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Date, Text, TIMESTAMP, func
from db.init import Base


class InstallProject(Base):
    __tablename__ = "install_projects"

    id = Column(Integer, primary_key=True, index=True)
    project_number = Column(String(20), unique=True)
    customer_name = Column(String(150), nullable=False)
    customer_phone = Column(String(30))
    customer_email = Column(String(150), nullable=True)
    property_address = Column(String(250))
    equipment_ordered = Column(String(250))
    equipment_status = Column(String(50))
    permit_number = Column(String(50), nullable=True)
    permit_status = Column(String(50))
    scheduled_date = Column(Date, nullable=True)
    estimated_days = Column(Integer, default=1)
    total_cost = Column(Float, default=0.0)
    deposit_paid = Column(Float, default=0.0)
    balance_due = Column(Float, default=0.0)
    status = Column(String(30), default="PLANNING")
    notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP, default=datetime.now, server_default=func.now())
