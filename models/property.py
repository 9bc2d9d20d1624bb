from sqlalchemy import Column, Integer, String, ForeignKey
from db.init import Base


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(150))
    address = Column(String(250), nullable=False)
    city = Column(String(100))
    state = Column(String(20))
    zip = Column(String(10), index=True)
    property_type = Column(String(50))  # restaurant / office / warehouse / ...
