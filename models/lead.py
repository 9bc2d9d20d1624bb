from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, ForeignKey, Text, TIMESTAMP, func
from db.init import Base


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    name = Column(String(150), nullable=False)
    email = Column(String(150), nullable=True)
    phone = Column(String(30), nullable=False)
    address = Column(String(250), nullable=True)
    source = Column(String(20), default="WEBSITE")
    status = Column(String(20), default="NEW", index=True)
    service_needed = Column(String(250), nullable=False)
    description = Column(Text, nullable=True)
    urgency = Column(Integer, nullable=True)  # 0-10
    estimated_value = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    follow_up_date = Column(TIMESTAMP, nullable=True)
    assigned_to = Column(String(150), nullable=True)
    created_at = Column(TIMESTAMP, default=datetime.now, server_default=func.now())
