from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, ForeignKey, Date, TIMESTAMP, func
from db.init import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(20), unique=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    subtotal = Column(Float, default=0.0)
    tax = Column(Float, default=0.0)
    total = Column(Float, nullable=False)  # dollars
    status = Column(String(20), default="DRAFT")  # DRAFT, SENT, PAID, OVERDUE, VOID
    due_date = Column(Date)
    paid_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, default=datetime.now, server_default=func.now())
