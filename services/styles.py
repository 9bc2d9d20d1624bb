# services/styles.py
"""Enum -> display label / badge variant lookups used by every page view-model."""

JOB_TYPE_BADGE = {
    "REPAIR": {"variant": "info", "label": "Repair"},
    "MAINTENANCE": {"variant": "success", "label": "Maintenance"},
    "EMERGENCY": {"variant": "danger", "label": "Emergency"},
    "INSTALLATION": {"variant": "default", "label": "Installation"},
    "INSPECTION": {"variant": "warning", "label": "Inspection"},
    "WARRANTY": {"variant": "info", "label": "Warranty"},
    "CALLBACK": {"variant": "warning", "label": "Callback"},
    "ESTIMATE": {"variant": "default", "label": "Estimate"},
}

PRIORITY_BADGE = {
    "EMERGENCY": {"variant": "danger", "label": "Emergency"},
    "URGENT": {"variant": "danger", "label": "Urgent"},
    "HIGH": {"variant": "warning", "label": "High"},
    "NORMAL": {"variant": "info", "label": "Normal"},
    "LOW": {"variant": "default", "label": "Low"},
}

JOB_STATUS_BADGE = {
    "COMPLETED": {"variant": "success", "label": "Completed"},
    "IN_PROGRESS": {"variant": "info", "label": "In Progress"},
    "EN_ROUTE": {"variant": "info", "label": "En Route"},
    "SCHEDULED": {"variant": "warning", "label": "Scheduled"},
    "PENDING": {"variant": "default", "label": "Pending"},
    "ON_HOLD": {"variant": "warning", "label": "On Hold"},
    "CANCELLED": {"variant": "danger", "label": "Cancelled"},
    "CALLBACK": {"variant": "warning", "label": "Callback"},
}

LEAD_SOURCE_BADGE = {
    "WEBSITE": {"variant": "info", "label": "Website"},
    "PHONE": {"variant": "success", "label": "Phone"},
    "REFERRAL": {"variant": "default", "label": "Referral"},
    "GOOGLE_ADS": {"variant": "danger", "label": "Google Ads"},
    "FACEBOOK": {"variant": "info", "label": "Facebook"},
    "YELP": {"variant": "danger", "label": "Yelp"},
    "BBB": {"variant": "success", "label": "BBB"},
    "WALK_IN": {"variant": "default", "label": "Walk-In"},
    "REPEAT": {"variant": "info", "label": "Repeat"},
}

MEMBERSHIP_PLAN_BADGE = {
    "BRONZE": {"variant": "warning", "label": "Bronze"},
    "SILVER": {"variant": "default", "label": "Silver"},
    "GOLD": {"variant": "warning", "label": "Gold"},
    "PLATINUM": {"variant": "info", "label": "Platinum"},
}

_DEFAULT = {"variant": "default"}


def badge(table: dict, value: str) -> dict:
    """Look up a badge; unknown values fall back to the raw value as label."""
    found = table.get(value)
    if found is None:
        return {**_DEFAULT, "label": value.replace("_", " ").title() if value else ""}
    return dict(found)


def label(table: dict, value: str) -> str:
    return badge(table, value)["label"]
