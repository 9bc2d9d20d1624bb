from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey
from db.init import Base


class Unit(Base):
    __tablename__ = "units"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False)
    unit_type = Column(String(50))  # RTU / split system / walk-in cooler / ice machine
    brand = Column(String(50))
    model = Column(String(80))
    serial_number = Column(String(50))
    install_date = Column(Date, nullable=True)
    warranty_end = Column(Date, nullable=True)
    tonnage = Column(Float, nullable=True)
    condition = Column(String(20))  # Excellent / Good / Fair / Poor
    last_service = Column(Date, nullable=True)
