# content/site.py
"""Static tables behind the public website and the settings page."""

COMPANY = {
    "name": "FD Pierce Company",
    "phone": "(502) 555-0100",
    "email": "service@fdpierce.com",
    "city": "Louisville, KY",
    "founded": 1978,
    "license": "HM06960",
}

STATS = [
    {"value": "47+", "label": "Years"},
    {"value": "16+", "label": "Technicians"},
    {"value": "A+", "label": "BBB Rating"},
    {"value": "24/7", "label": "Emergency"},
]

SERVICES = [
    {
        "slug": "commercial-hvac",
        "title": "Commercial HVAC",
        "summary": "Heating, ventilation and air conditioning for commercial properties.",
        "features": [
            "Heating system installation, repair, and maintenance",
            "Commercial cooling and air conditioning services",
            "Building automation and control systems",
            "Rooftop unit (RTU) service and replacement",
        ],
    },
    {
        "slug": "refrigeration",
        "title": "Commercial Refrigeration",
        "summary": "Walk-in coolers, freezers, and commercial refrigeration systems.",
        "features": [
            "Walk-in cooler and freezer installation and repair",
            "Display case maintenance and retrofitting",
            "Refrigerant leak detection and repair",
        ],
    },
    {
        "slug": "ice-machines",
        "title": "Ice Machines",
        "summary": "Installation, repair and maintenance for all ice machine brands.",
        "features": [
            "Hoshizaki sales, installation, and service",
            "Manitowoc ice machine repair and maintenance",
            "Water filtration system installation",
        ],
    },
    {
        "slug": "maintenance",
        "title": "Preventive Maintenance",
        "summary": "Scheduled maintenance plans that keep systems efficient.",
        "features": [
            "Seasonal tune-ups",
            "Evaporator and condenser coil cleaning",
            "Comprehensive system inspections and diagnostics",
        ],
    },
    {
        "slug": "emergency",
        "title": "24/7 Emergency Service",
        "summary": "Round-the-clock emergency repair.",
        "features": [
            "Emergency dispatch 365 days a year",
            "All brands and equipment types serviced",
            "Priority scheduling for critical failures",
        ],
    },
    {
        "slug": "installations",
        "title": "New Installations",
        "summary": "Design and installation of new commercial systems.",
        "features": [
            "Custom system design and engineering",
            "Manual J load calculations",
            "Commissioning, testing, and balancing",
        ],
    },
]

TESTIMONIALS = [
    {"name": "Robert Chen", "company": "Louisville Convention Center", "rating": 5},
    {"name": "Maria Torres", "company": "Derby City Market", "rating": 5},
    {"name": "James Whitfield", "company": "Norton Healthcare", "rating": 5},
]

SERVICE_AREAS = [
    "Louisville",
    "Jeffersontown",
    "Shively",
    "Okolona",
    "Hillview",
    "Shepherdsville",
    "Middletown",
    "St. Matthews",
    "Prospect",
    "Lyndon",
    "Fern Creek",
    "Pleasure Ridge Park",
    "Valley Station",
    "Newburg",
    "Fairdale",
    "Mt. Washington",
]

SERVICE_TYPES = [
    "Commercial HVAC",
    "Commercial Refrigeration",
    "Ice Machines",
    "Preventive Maintenance",
    "New Installation",
    "Emergency Repair",
    "System Inspection",
    "Other",
]

TIMELINE = [
    {"year": 1978, "title": "Company Founded"},
    {"year": 1987, "title": "BBB Accreditation"},
    {"year": 2000, "title": "Refrigeration Expansion"},
    {"year": 2010, "title": "Ice Machine Division"},
    {"year": 2024, "title": "New Ownership"},
    {"year": 2025, "title": "Digital Transformation"},
]

CERTIFICATIONS = [
    {"title": "BBB A+ Rated", "detail": "Accredited since 1987"},
    {"title": "EPA Certified", "detail": "Section 608 Universal"},
    {"title": "NATE Certified", "detail": "Industry-recognized excellence"},
    {"title": "Kentucky Licensed", "detail": "License #HM06960"},
    {"title": "Insured & Bonded", "detail": "Full commercial coverage"},
]

OPENINGS = [
    {"title": "Commercial HVAC Technician", "type": "Full-time", "location": "Louisville, KY"},
    {"title": "Refrigeration Technician", "type": "Full-time", "location": "Louisville, KY"},
    {"title": "HVAC Apprentice", "type": "Full-time", "location": "Louisville, KY"},
    {"title": "Service Dispatcher", "type": "Full-time", "location": "Louisville, KY"},
]

FINANCING_TIERS = [
    {"name": "Standard", "rate": "0%", "term_months": 12},
    {"name": "Low Rate", "rate": "5.99%", "term_months": 36},
    {"name": "Extended", "rate": "7.99%", "term_months": 60},
]

FINANCING_FAQS = [
    {
        "question": "Can I finance both equipment and installation labor?",
        "answer": "Yes. Financing covers equipment, labor, ductwork and controls in one monthly payment.",
    },
    {
        "question": "What happens if I want to pay off the balance early?",
        "answer": "There are no prepayment penalties on any plan.",
    },
    {
        "question": "Do you offer financing for maintenance plans?",
        "answer": "Maintenance is covered by the monthly membership plans instead.",
    },
]

MEMBERSHIP_PLANS = [
    {"plan": "BRONZE", "name": "Bronze", "monthly_price": 29, "visits_per_year": 1, "parts_discount": 10},
    {"plan": "SILVER", "name": "Silver", "monthly_price": 49, "visits_per_year": 2, "parts_discount": 15},
    {"plan": "GOLD", "name": "Gold", "monthly_price": 79, "visits_per_year": 2, "parts_discount": 20},
    {"plan": "PLATINUM", "name": "Platinum", "monthly_price": 129, "visits_per_year": 4, "parts_discount": 25},
]

MEMBERSHIP_FAQS = [
    {
        "question": "Can I cancel my membership at any time?",
        "answer": "Yes. Memberships are month-to-month with 30 days written notice.",
    },
    {
        "question": "When does my first maintenance visit happen?",
        "answer": "Within 30 days of enrollment.",
    },
    {
        "question": "Does my membership cover multiple units?",
        "answer": "Each membership covers one system; multi-system discounts are available.",
    },
]

REVIEWS = [
    {"name": "Michael Torres", "company": "Torres Restaurant Group", "rating": 5},
    {"name": "Jennifer Walsh", "company": "Walsh Properties LLC", "rating": 5},
    {"name": "Robert Chen", "company": "Louisville Medical Associates", "rating": 5},
    {"name": "Amanda Brooks", "company": "Fresh Market Grocers", "rating": 4},
    {"name": "David Patterson", "company": "Patterson Warehousing", "rating": 5},
    {"name": "Karen Mitchell", "company": "Bluegrass Event Center", "rating": 5},
    {"name": "James Nakamura", "company": "Sakura Sushi & Ramen", "rating": 5},
    {"name": "Lisa Hernandez", "company": "Comfort Inn Louisville South", "rating": 4},
    {"name": "Thomas Baker", "company": "Baker Automotive Group", "rating": 5},
    {"name": "Sandra Williams", "company": "Louisville Community Church", "rating": 5},
    {"name": "Mark Sullivan", "company": "Sullivan Law Offices", "rating": 5},
    {"name": "Diana Foster", "company": "Riverfront Retirement Living", "rating": 4},
]

REVIEW_SOURCES = [
    {"name": "Google", "count": "150+"},
    {"name": "Yelp", "count": "35+"},
    {"name": "BBB", "count": "20+"},
]

EMERGENCY_TYPES = [
    "Complete Cooling Failure",
    "Heating System Failure",
    "Refrigerant Leak",
    "Unusual Odors or Smoke",
    "Electrical Issues",
    "Walk-in Cooler/Freezer Failure",
]

BUSINESS_HOURS = [
    {"day": "Monday", "hours": "7:00 AM - 6:00 PM", "closed": False},
    {"day": "Tuesday", "hours": "7:00 AM - 6:00 PM", "closed": False},
    {"day": "Wednesday", "hours": "7:00 AM - 6:00 PM", "closed": False},
    {"day": "Thursday", "hours": "7:00 AM - 6:00 PM", "closed": False},
    {"day": "Friday", "hours": "7:00 AM - 5:00 PM", "closed": False},
    {"day": "Saturday", "hours": "8:00 AM - 12:00 PM", "closed": False},
    {"day": "Sunday", "hours": "", "closed": True},
]

INTEGRATIONS = [
    {"name": "Google Maps API", "description": "Routing & geocoding"},
    {"name": "Twilio SMS", "description": "Text messaging"},
    {"name": "Stripe Payments", "description": "Payment processing"},
    {"name": "QuickBooks", "description": "Accounting sync"},
    {"name": "Google Analytics", "description": "Web analytics"},
]


def average_rating(reviews) -> float:
    if not reviews:
        return 0
    return round(sum(r["rating"] for r in reviews) / len(reviews), 1)


PAGES = {
    "home": lambda: {
        "company": COMPANY,
        "stats": STATS,
        "services": [{"slug": s["slug"], "title": s["title"], "summary": s["summary"]} for s in SERVICES],
        "testimonials": TESTIMONIALS,
        "service_areas": SERVICE_AREAS[:12],
    },
    "about": lambda: {"company": COMPANY, "timeline": TIMELINE, "certifications": CERTIFICATIONS},
    "services": lambda: {"services": SERVICES},
    "careers": lambda: {"openings": OPENINGS},
    "financing": lambda: {"tiers": FINANCING_TIERS, "faqs": FINANCING_FAQS},
    "memberships": lambda: {"plans": MEMBERSHIP_PLANS, "faqs": MEMBERSHIP_FAQS},
    "reviews": lambda: {
        "reviews": REVIEWS,
        "sources": REVIEW_SOURCES,
        "average_rating": average_rating(REVIEWS),
        "count": len(REVIEWS),
    },
    "contact": lambda: {
        "company": COMPANY,
        "service_areas": SERVICE_AREAS,
        "service_types": SERVICE_TYPES,
        "business_hours": BUSINESS_HOURS,
    },
    "emergency": lambda: {"phone": COMPANY["phone"], "emergency_types": EMERGENCY_TYPES},
}
