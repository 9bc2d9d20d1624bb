# db/init.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv
import os

load_dotenv()

# ---- Database engine & Session ----
DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set in environment (.env)")

if DATABASE_URL.startswith("sqlite"):
    # in-memory sqlite must share one connection across threads
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ---- Base for ORM models ----
Base = declarative_base()


# ---- DB session dependency ----
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---- Initialization & optional seeding ----
def init_db(seed: bool = True):
    """
    Imports all model modules to register tables, creates them,
    and (optionally) seeds the demo owner/technician logins if they do not exist.
    """
    # Import models so their metadata is registered on Base
    from models import (  # noqa: F401
        user,
        tech_profile,
        property,
        unit,
        job,
        invoice,
        membership,
        lead,
        daily_metric,
        install_project,
        service_request,
    )

    # Create tables
    Base.metadata.create_all(bind=engine)

    if seed:
        _seed_demo_accounts()


DEMO_ACCOUNTS = [
    {
        "name": "Sarah Mann",
        "email": "sarah.mann@fdpierce.com",
        "password": "admin123",
        "role": "OWNER",
        "phone": "(502) 555-0001",
    },
    {
        "name": "Mike Johnson",
        "email": "tech@fdpierce.com",
        "password": "tech123",
        "role": "TECHNICIAN",
        "phone": "(502) 555-0101",
    },
]


def _seed_demo_accounts():
    """
    Insert the demo owner and technician if their emails do not already exist.
    The technician also gets a tech profile so it shows up on the dispatch board.
    """
    from sqlalchemy.orm import Session
    from models.user import User
    from models.tech_profile import TechProfile
    from utils.security import hash_password

    db: Session = SessionLocal()
    try:
        for acct in DEMO_ACCOUNTS:
            if db.query(User).filter(User.email == acct["email"]).first():
                continue
            user = User(
                name=acct["name"],
                email=acct["email"],
                phone=acct["phone"],
                role=acct["role"],
                password_hash=hash_password(acct["password"]),
            )
            db.add(user)
            db.flush()
            if acct["role"] == "TECHNICIAN":
                db.add(
                    TechProfile(
                        user_id=user.id,
                        skills=["HVAC", "Refrigeration"],
                        certifications=["EPA 608 Universal"],
                        truck_number="T-01",
                        is_available=True,
                    )
                )
        db.commit()
    finally:
        db.close()
