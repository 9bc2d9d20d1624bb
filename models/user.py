from datetime import datetime

from sqlalchemy import Column, Integer, String, TIMESTAMP, func
from db.init import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    email = Column(String(150), unique=True, index=True, nullable=False)
    phone = Column(String(30))
    password_hash = Column(String)
    role = Column(String(20), default="CUSTOMER", index=True)  # OWNER / ADMIN / DISPATCHER / TECHNICIAN / CUSTOMER
    avatar = Column(String(512), nullable=True)
    created_at = Column(TIMESTAMP, default=datetime.now, server_default=func.now())
