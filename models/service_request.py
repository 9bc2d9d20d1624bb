from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func
from db.init import Base


class ServiceRequest(Base):
    __tablename__ = "service_requests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    email = Column(String(150), nullable=True)  # emergency form collects phone only
    phone = Column(String(30), nullable=False)
    address = Column(String(250), nullable=True)
    service_type = Column(String(100), nullable=False)
    urgency = Column(String(20), default="normal")  # low / normal / high / emergency
    description = Column(Text, nullable=False)
    preferred_date = Column(String(20), nullable=True)
    preferred_time = Column(String(20), nullable=True)
    status = Column(String(20), default="new")
    created_at = Column(TIMESTAMP, default=datetime.now, server_default=func.now())
