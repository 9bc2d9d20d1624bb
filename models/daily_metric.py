from sqlalchemy import Column, Integer, Float, Date
from db.init import Base


class DailyMetric(Base):
    __tablename__ = "daily_metrics"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, unique=True, index=True, nullable=False)
    revenue = Column(Float, default=0.0)
    jobs_completed = Column(Integer, default=0)
    jobs_scheduled = Column(Integer, default=0)
    leads_received = Column(Integer, default=0)
    leads_converted = Column(Integer, default=0)
    missed_calls = Column(Integer, default=0)
    avg_ticket = Column(Float, default=0.0)
    tech_utilization = Column(Float, default=0.0)
    membership_sales = Column(Integer, default=0)
    install_revenue = Column(Float, default=0.0)
    service_revenue = Column(Float, default=0.0)
