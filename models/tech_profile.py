from sqlalchemy import Column, Integer, String, Boolean, Float, Date, ForeignKey, JSON
from db.init import Base


class TechProfile(Base):
    __tablename__ = "tech_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    skills = Column(JSON, default=list)          # ["HVAC", "Refrigeration", ...]
    certifications = Column(JSON, default=list)
    hire_date = Column(Date, nullable=True)
    truck_number = Column(String(20), nullable=True)
    is_available = Column(Boolean, default=True)
    avg_rating = Column(Float, default=0.0)
    jobs_completed = Column(Integer, default=0)
    revenue_generated = Column(Float, default=0.0)
