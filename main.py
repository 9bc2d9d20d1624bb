from fastapi import FastAPI
from db.init import init_db
from dotenv import load_dotenv
import os

load_dotenv()

from routers import (
    auth, dashboard, jobs, lead, customer, technician, public, pages, portal, tech, site
)
from fastapi.middleware.cors import CORSMiddleware


origins = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,https://fdpierce.com,https://www.fdpierce.com",
    ).split(",")
    if o.strip()
]


app = FastAPI(title="FD Pierce Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,          # cannot be ["*"] if allow_credentials=True
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
@app.on_event("startup")
def startup():
    init_db()

@app.get("/health")
def health_check():
    return {"status": "ok"}

# API
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard API"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["Jobs"])
app.include_router(lead.router, prefix="/api/leads", tags=["Leads"])
app.include_router(customer.router, prefix="/api/customers", tags=["Customers"])
app.include_router(technician.router, prefix="/api/technicians", tags=["Technicians"])
app.include_router(public.router, prefix="/api", tags=["Public"])

# Pages
app.include_router(pages.router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(portal.router, prefix="/portal", tags=["Customer Portal"])
app.include_router(tech.router, prefix="/tech", tags=["Technician"])
app.include_router(site.router, prefix="/site", tags=["Site"])


@app.get("/")
def root():
    return {"message": "FD Pierce Backend running successfully"}
