from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, ForeignKey, Date, TIMESTAMP, func
from db.init import Base


class Membership(Base):
    __tablename__ = "memberships"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    plan = Column(String(20), nullable=False)  # BRONZE / SILVER / GOLD / PLATINUM
    status = Column(String(20), default="ACTIVE")
    start_date = Column(Date, nullable=False)
    renewal_date = Column(Date, nullable=False)
    monthly_rate = Column(Float, nullable=False)
    visits_per_year = Column(Integer, default=0)
    visits_used = Column(Integer, default=0)
    discount = Column(Integer, default=0)  # percent off parts/labor
    created_at = Column(TIMESTAMP, default=datetime.now, server_default=func.now())
