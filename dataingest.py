# dataingest.py
"""
Faker-based Data Ingestion for the FD Pierce backend

Usage:
  # (optional) tune volumes and seed via env
  export FAKER_SEED=42
  export NUM_TECHNICIANS=6
  export NUM_CUSTOMERS=25
  export NUM_HISTORY_JOBS=150
  export NUM_UNASSIGNED_JOBS=6
  export NUM_LEADS=60
  export NUM_METRIC_DAYS=60
  export NUM_INSTALLS=8

  python dataingest.py

Notes:
- Passwords are hashed via utils.security.hash_password
  - Demo owner / tech -> see db.init.DEMO_ACCOUNTS
  - Staff       -> "staff123"
  - Technicians -> "tech123"
  - Customers   -> "customer123"
- Today's and tomorrow's dispatch jobs are generated relative to the current
  date, so the dispatch board always has something to show.
"""

import os
import random
from datetime import date, datetime, timedelta
from typing import List

from faker import Faker
from sqlalchemy.orm import Session

from db.init import init_db, SessionLocal
from utils.security import hash_password

from models.user import User
from models.tech_profile import TechProfile
from models.property import Property
from models.unit import Unit
from models.job import Job
from models.invoice import Invoice
from models.membership import Membership
from models.lead import Lead
from models.daily_metric import DailyMetric
from models.install_project import InstallProject
from content.site import MEMBERSHIP_PLANS


# ----------------------- Config -----------------------
FAKER_SEED = int(os.getenv("FAKER_SEED", "42"))

NUM_TECHNICIANS = int(os.getenv("NUM_TECHNICIANS", "6"))
NUM_CUSTOMERS = int(os.getenv("NUM_CUSTOMERS", "25"))
NUM_HISTORY_JOBS = int(os.getenv("NUM_HISTORY_JOBS", "150"))
NUM_UNASSIGNED_JOBS = int(os.getenv("NUM_UNASSIGNED_JOBS", "6"))
NUM_LEADS = int(os.getenv("NUM_LEADS", "60"))
NUM_METRIC_DAYS = int(os.getenv("NUM_METRIC_DAYS", "60"))
NUM_INSTALLS = int(os.getenv("NUM_INSTALLS", "8"))

DEFAULT_STAFF_PASSWORD = os.getenv("DEFAULT_STAFF_PASSWORD", "staff123")
DEFAULT_TECH_PASSWORD = os.getenv("DEFAULT_TECH_PASSWORD", "tech123")
DEFAULT_CUSTOMER_PASSWORD = os.getenv("DEFAULT_CUSTOMER_PASSWORD", "customer123")

SKILLS = ["HVAC", "Refrigeration", "Ice Machines", "Electrical", "Plumbing", "Sheet Metal", "Controls", "Ductwork"]
CERTIFICATIONS = ["EPA 608 Universal", "NATE Certified", "OSHA 10", "Kentucky HVAC License"]
PROPERTY_TYPES = ["Restaurant", "Office", "Warehouse", "Retail", "Medical", "Hotel", "Church", "Grocery"]
UNIT_TYPES = ["Rooftop Unit", "Split System", "Walk-in Cooler", "Walk-in Freezer", "Ice Machine", "Reach-in Cooler"]
BRANDS = ["Carrier", "Trane", "Lennox", "York", "Hoshizaki", "Manitowoc", "Scotsman", "True"]
CONDITIONS = ["Excellent", "Good", "Fair", "Poor"]

JOB_TITLES = {
    "REPAIR": ["AC not cooling", "Compressor failure", "Thermostat replacement", "Blower motor repair"],
    "MAINTENANCE": ["Quarterly PM visit", "Coil cleaning", "Filter change - all units", "Seasonal tune-up"],
    "EMERGENCY": ["Walk-in freezer down", "No heat - emergency", "Refrigerant leak"],
    "INSTALLATION": ["New RTU install", "Ice machine install", "Split system replacement"],
    "INSPECTION": ["Annual safety inspection", "Pre-purchase inspection"],
    "WARRANTY": ["Warranty compressor swap"],
    "CALLBACK": ["Callback - noise after repair"],
    "ESTIMATE": ["Replacement estimate", "Ductwork estimate"],
}
JOB_TYPE_WEIGHTS = {
    "REPAIR": 30, "MAINTENANCE": 30, "EMERGENCY": 8, "INSTALLATION": 8,
    "INSPECTION": 8, "WARRANTY": 4, "CALLBACK": 4, "ESTIMATE": 8,
}
PRIORITIES = ["LOW", "NORMAL", "HIGH", "URGENT", "EMERGENCY"]
LEAD_SOURCES = ["WEBSITE", "PHONE", "REFERRAL", "GOOGLE_ADS", "FACEBOOK", "YELP", "BBB", "WALK_IN", "REPEAT"]
LEAD_STATUSES = ["NEW", "CONTACTED", "QUALIFIED", "ESTIMATE_SENT", "FOLLOW_UP", "WON", "LOST"]
INSTALL_STATUSES = ["PLANNING", "EQUIPMENT_ORDERED", "PERMIT_PENDING", "SCHEDULED", "IN_PROGRESS", "INSPECTION", "COMPLETE"]

# (start, end) slots for the dispatch grid
DAY_SLOTS = [("07:30", "09:00"), ("09:30", "11:30"), ("12:30", "14:00"), ("14:30", "16:30"), ("17:00", None)]


# ----------------------- Faker setup -----------------------
faker = Faker("en_US")
random.seed(FAKER_SEED)
Faker.seed(FAKER_SEED)


def _bool_biased(true_prob: float = 0.5) -> bool:
    return random.random() < true_prob


def _money(lo=100, hi=2500) -> float:
    return round(random.uniform(lo, hi), 2)


def _job_type() -> str:
    types = list(JOB_TYPE_WEIGHTS)
    return random.choices(types, weights=[JOB_TYPE_WEIGHTS[t] for t in types])[0]


class JobNumbers:
    """FDP-<year>-<seq> counter, one sequence per year."""

    def __init__(self, db: Session):
        self.last = {}
        for (number,) in db.query(Job.job_number).all():
            parts = number.split("-")
            if len(parts) != 3:
                continue
            _, year, seq = parts
            if year.isdigit() and seq.isdigit():
                self.last[int(year)] = max(self.last.get(int(year), 0), int(seq))

    def next(self, year: int) -> str:
        self.last[year] = self.last.get(year, 0) + 1
        return f"FDP-{year}-{self.last[year]:03d}"


# ----------------------- Seeders -----------------------
def seed_staff(db: Session) -> List[User]:
    staff: List[User] = []
    for role in ("ADMIN", "DISPATCHER"):
        email = f"{role.lower()}@fdpierce.com"
        exists = db.query(User).filter(User.email == email).first()
        if exists:
            staff.append(exists)
            continue
        user = User(
            name=faker.name(),
            email=email,
            phone=faker.numerify("(502) 555-####"),
            role=role,
            password_hash=hash_password(DEFAULT_STAFF_PASSWORD),
        )
        db.add(user)
        staff.append(user)
    db.commit()
    print(f"[seed] staff: {len(staff)}")
    return staff


def seed_technicians(db: Session, n=NUM_TECHNICIANS) -> List[User]:
    techs: List[User] = db.query(User).filter(User.role == "TECHNICIAN").all()
    while len(techs) < n:
        name = faker.name()
        email = f"{name.split()[0].lower()}.{faker.unique.numerify('###')}@fdpierce.com"
        user = User(
            name=name,
            email=email,
            phone=faker.numerify("(502) 555-####"),
            role="TECHNICIAN",
            password_hash=hash_password(DEFAULT_TECH_PASSWORD),
        )
        db.add(user)
        techs.append(user)
    db.flush()

    profiles = {user_id for (user_id,) in db.query(TechProfile.user_id).all()}
    for tech in techs:
        if tech.id in profiles:
            continue
        profiles.add(tech.id)
        db.add(
            TechProfile(
                user_id=tech.id,
                skills=random.sample(SKILLS, k=random.randint(2, 4)),
                certifications=random.sample(CERTIFICATIONS, k=random.randint(1, 3)),
                hire_date=faker.date_between(start_date="-15y", end_date="-6M"),
                truck_number=f"T-{len(profiles):02d}",
                is_available=_bool_biased(0.8),
                avg_rating=round(random.uniform(4.2, 5.0), 1),
                jobs_completed=random.randint(120, 1800),
                revenue_generated=_money(60000, 420000),
            )
        )
    db.commit()
    print(f"[seed] technicians: {len(techs)}")
    return techs


def seed_customers(db: Session, n=NUM_CUSTOMERS) -> List[User]:
    customers: List[User] = []
    for _ in range(max(0, n)):
        company = faker.company()
        email = faker.unique.company_email()
        exists = db.query(User).filter(User.email == email).first()
        if exists:
            customers.append(exists)
            continue
        c = User(
            name=company,
            email=email,
            phone=faker.numerify("(502) ###-####"),
            role="CUSTOMER",
            password_hash=hash_password(DEFAULT_CUSTOMER_PASSWORD),
        )
        db.add(c)
        customers.append(c)
    db.commit()
    print(f"[seed] customers: {len(customers)}")
    return customers


def seed_properties(db: Session, customers: List[User]) -> List[Property]:
    props: List[Property] = []
    for c in customers:
        for _ in range(random.randint(1, 2)):
            p = Property(
                customer_id=c.id,
                name=f"{c.name} - {faker.street_name()}",
                address=faker.street_address(),
                city=random.choice(["Louisville", "Jeffersontown", "St. Matthews", "Middletown", "Shively"]),
                state="KY",
                zip=random.choice(["40202", "40204", "40207", "40217", "40220", "40222", "40229", "40299"]),
                property_type=random.choice(PROPERTY_TYPES),
            )
            db.add(p)
            props.append(p)
    db.flush()

    units = 0
    for p in props:
        for _ in range(random.randint(1, 3)):
            installed = faker.date_between(start_date="-12y", end_date="-1y")
            db.add(
                Unit(
                    property_id=p.id,
                    unit_type=random.choice(UNIT_TYPES),
                    brand=random.choice(BRANDS),
                    model=faker.bothify("??-####").upper(),
                    serial_number=faker.bothify("SN########"),
                    install_date=installed,
                    warranty_end=installed + timedelta(days=365 * random.choice([1, 5, 10])),
                    tonnage=random.choice([None, 3.0, 5.0, 7.5, 10.0]),
                    condition=random.choice(CONDITIONS),
                    last_service=faker.date_between(start_date="-6M", end_date="today"),
                )
            )
            units += 1
    db.commit()
    print(f"[seed] properties: {len(props)}, units: {units}")
    return props


def _new_job(numbers: JobNumbers, prop: Property, job_type: str, **kwargs) -> Job:
    when = kwargs.get("scheduled_date") or date.today()
    return Job(
        job_number=numbers.next(when.year),
        title=random.choice(JOB_TITLES[job_type]),
        description=faker.sentence(nb_words=12),
        job_type=job_type,
        priority=kwargs.pop("priority", None) or ("EMERGENCY" if job_type == "EMERGENCY" else random.choice(PRIORITIES[:3])),
        customer_id=prop.customer_id,
        property_id=prop.id,
        estimated_cost=_money(150, 6000) if job_type != "INSTALLATION" else _money(6000, 18000),
        **kwargs,
    )


def seed_jobs(db: Session, techs: List[User], props: List[Property]) -> List[Job]:
    numbers = JobNumbers(db)
    today = date.today()
    jobs: List[Job] = []

    # History over the last 90 days
    for _ in range(max(0, NUM_HISTORY_JOBS)):
        when = today - timedelta(days=random.randint(1, 90))
        completed = _bool_biased(0.85)
        job = _new_job(
            numbers,
            random.choice(props),
            _job_type(),
            scheduled_date=when,
            technician_id=random.choice(techs).id,
            status="COMPLETED" if completed else random.choice(["CANCELLED", "CALLBACK", "ON_HOLD"]),
            scheduled_start="08:00",
            scheduled_end="10:00",
        )
        if completed:
            job.actual_cost = round(job.estimated_cost * random.uniform(0.8, 1.2), 2)
            job.completed_at = datetime.combine(when, datetime.min.time()) + timedelta(hours=random.randint(9, 17))
            job.tech_notes = faker.sentence(nb_words=15)
        jobs.append(job)

    # Today and tomorrow on the dispatch board
    for offset in (0, 1):
        day = today + timedelta(days=offset)
        for tech in techs:
            for start, end in random.sample(DAY_SLOTS, k=random.randint(2, 4)):
                status = "SCHEDULED"
                if offset == 0:
                    status = random.choice(["SCHEDULED", "EN_ROUTE", "IN_PROGRESS", "COMPLETED"])
                jobs.append(
                    _new_job(
                        numbers,
                        random.choice(props),
                        _job_type(),
                        scheduled_date=day,
                        technician_id=tech.id,
                        scheduled_start=start,
                        scheduled_end=end,
                        status=status,
                    )
                )

    # Unassigned queue
    for _ in range(max(0, NUM_UNASSIGNED_JOBS)):
        jobs.append(
            _new_job(
                numbers,
                random.choice(props),
                _job_type(),
                priority=random.choice(PRIORITIES),
                scheduled_date=today + timedelta(days=random.randint(0, 3)) if _bool_biased(0.5) else None,
                status="PENDING",
            )
        )

    db.add_all(jobs)
    db.commit()
    print(f"[seed] jobs: {len(jobs)}")
    return jobs


def seed_invoices(db: Session, jobs: List[Job]) -> List[Invoice]:
    invoices: List[Invoice] = []
    counter = (db.query(Invoice).count() or 0) + 1
    for job in jobs:
        if job.status != "COMPLETED" or job.actual_cost is None:
            continue
        subtotal = job.actual_cost
        tax = round(subtotal * 0.06, 2)
        status = random.choices(["PAID", "SENT", "OVERDUE"], weights=[80, 12, 8])[0]
        issued = job.completed_at or datetime.now()
        inv = Invoice(
            invoice_number=f"INV-{counter:04d}",
            job_id=job.id,
            customer_id=job.customer_id,
            subtotal=subtotal,
            tax=tax,
            total=round(subtotal + tax, 2),
            status=status,
            due_date=issued.date() + timedelta(days=30),
            paid_at=issued + timedelta(days=random.randint(0, 20)) if status == "PAID" else None,
        )
        counter += 1
        db.add(inv)
        invoices.append(inv)
    db.commit()
    print(f"[seed] invoices: {len(invoices)}")
    return invoices


def seed_memberships(db: Session, customers: List[User]) -> List[Membership]:
    memberships: List[Membership] = []
    today = date.today()
    for c in customers:
        if not _bool_biased(0.45):
            continue
        plan = random.choice(MEMBERSHIP_PLANS)
        start = faker.date_between(start_date="-2y", end_date="-1M")
        renewal = today + timedelta(days=random.randint(-20, 330))
        m = Membership(
            customer_id=c.id,
            plan=plan["plan"],
            status="EXPIRED" if renewal < today else random.choices(["ACTIVE", "PAUSED"], weights=[92, 8])[0],
            start_date=start,
            renewal_date=renewal,
            monthly_rate=plan["monthly_price"],
            visits_per_year=plan["visits_per_year"],
            visits_used=random.randint(0, plan["visits_per_year"]),
            discount=plan["parts_discount"],
        )
        db.add(m)
        memberships.append(m)
    db.commit()
    print(f"[seed] memberships: {len(memberships)}")
    return memberships


def seed_leads(db: Session, n: int = NUM_LEADS) -> List[Lead]:
    leads: List[Lead] = []
    now = datetime.now()
    for _ in range(max(0, n)):
        status = random.choice(LEAD_STATUSES)
        ld = Lead(
            name=faker.name(),
            email=faker.email() if _bool_biased(0.8) else None,
            phone=faker.numerify("(502) ###-####"),
            address=faker.street_address() if _bool_biased(0.7) else None,
            source=random.choice(LEAD_SOURCES),
            status=status,
            service_needed=random.choice(JOB_TITLES[_job_type()]),
            description=faker.sentence(nb_words=14),
            urgency=random.randint(1, 10) if _bool_biased(0.8) else None,
            estimated_value=_money(200, 15000) if _bool_biased(0.75) else None,
            notes=faker.sentence() if _bool_biased(0.4) else None,
            follow_up_date=now + timedelta(days=random.randint(1, 14)) if status == "FOLLOW_UP" else None,
            created_at=now - timedelta(days=random.randint(0, 45), hours=random.randint(0, 23)),
        )
        db.add(ld)
        leads.append(ld)
    db.commit()
    print(f"[seed] leads: {len(leads)}")
    return leads


def seed_daily_metrics(db: Session, days: int = NUM_METRIC_DAYS) -> List[DailyMetric]:
    metrics: List[DailyMetric] = []
    today = date.today()
    existing = {d for (d,) in db.query(DailyMetric.date).all()}
    for i in range(days, -1, -1):
        d = today - timedelta(days=i)
        if d in existing:
            continue
        weekend = d.weekday() >= 5
        service = _money(800, 3500) if not weekend else _money(0, 900)
        install = _money(0, 4000) if _bool_biased(0.4) else 0.0
        completed = random.randint(2, 14) if not weekend else random.randint(0, 3)
        received = random.randint(2, 12)
        m = DailyMetric(
            date=d,
            revenue=round(service + install, 2),
            jobs_completed=completed,
            jobs_scheduled=completed + random.randint(0, 4),
            leads_received=received,
            leads_converted=random.randint(0, received),
            missed_calls=random.randint(0, 6),
            avg_ticket=round((service + install) / completed, 2) if completed else 0.0,
            tech_utilization=round(random.uniform(55, 95), 1),
            membership_sales=random.randint(0, 2),
            install_revenue=install,
            service_revenue=service,
        )
        db.add(m)
        metrics.append(m)
    db.commit()
    print(f"[seed] daily_metrics: {len(metrics)}")
    return metrics


def seed_install_projects(db: Session, n: int = NUM_INSTALLS) -> List[InstallProject]:
    projects: List[InstallProject] = []
    year = date.today().year
    start = db.query(InstallProject).count() + 1
    for i in range(max(0, n)):
        total = _money(8000, 45000)
        deposit = round(total * random.choice([0.25, 0.33, 0.5]), 2)
        p = InstallProject(
            project_number=f"INST-{year}-{start + i:03d}",
            customer_name=faker.company(),
            customer_phone=faker.numerify("(502) ###-####"),
            customer_email=faker.company_email(),
            property_address=faker.street_address(),
            equipment_ordered=f"{random.choice(BRANDS)} {random.choice(UNIT_TYPES)}",
            equipment_status=random.choice(["Not Ordered", "Ordered", "In Transit", "Delivered"]),
            permit_number=faker.bothify("MEC-#####") if _bool_biased(0.6) else None,
            permit_status=random.choice(["Not Required", "Pending", "Approved"]),
            scheduled_date=date.today() + timedelta(days=random.randint(-10, 45)),
            estimated_days=random.randint(1, 5),
            total_cost=total,
            deposit_paid=deposit,
            balance_due=round(total - deposit, 2),
            status=random.choice(INSTALL_STATUSES),
            notes=faker.sentence() if _bool_biased(0.5) else None,
        )
        db.add(p)
        projects.append(p)
    db.commit()
    print(f"[seed] install_projects: {len(projects)}")
    return projects


# ----------------------- Main -----------------------
def main():
    # Schema plus the two demo logins
    init_db(seed=True)

    db = SessionLocal()
    try:
        seed_staff(db)
        techs = seed_technicians(db, NUM_TECHNICIANS)
        customers = seed_customers(db, NUM_CUSTOMERS)
        props = seed_properties(db, customers)

        jobs = seed_jobs(db, techs, props)
        seed_invoices(db, jobs)
        seed_memberships(db, customers)

        seed_leads(db, NUM_LEADS)
        seed_daily_metrics(db, NUM_METRIC_DAYS)
        seed_install_projects(db, NUM_INSTALLS)

        print("\n✅ Faker ingestion completed.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
