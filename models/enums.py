"""Canonical enum values shared by the ORM models, view models and routers.

Values are stored as plain strings in the database.
"""

import enum


class Role(str, enum.Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    DISPATCHER = "DISPATCHER"
    TECHNICIAN = "TECHNICIAN"
    CUSTOMER = "CUSTOMER"


STAFF_ROLES = (Role.OWNER.value, Role.ADMIN.value, Role.DISPATCHER.value)


class JobType(str, enum.Enum):
    REPAIR = "REPAIR"
    MAINTENANCE = "MAINTENANCE"
    EMERGENCY = "EMERGENCY"
    INSTALLATION = "INSTALLATION"
    INSPECTION = "INSPECTION"
    WARRANTY = "WARRANTY"
    CALLBACK = "CALLBACK"
    ESTIMATE = "ESTIMATE"


class JobPriority(str, enum.Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"
    EMERGENCY = "EMERGENCY"


class JobStatus(str, enum.Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    EN_ROUTE = "EN_ROUTE"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    CALLBACK = "CALLBACK"


class LeadSource(str, enum.Enum):
    WEBSITE = "WEBSITE"
    PHONE = "PHONE"
    REFERRAL = "REFERRAL"
    GOOGLE_ADS = "GOOGLE_ADS"
    FACEBOOK = "FACEBOOK"
    YELP = "YELP"
    BBB = "BBB"
    WALK_IN = "WALK_IN"
    REPEAT = "REPEAT"


class LeadStatus(str, enum.Enum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    QUALIFIED = "QUALIFIED"
    ESTIMATE_SENT = "ESTIMATE_SENT"
    FOLLOW_UP = "FOLLOW_UP"
    WON = "WON"
    LOST = "LOST"


TERMINAL_LEAD_STATUSES = (LeadStatus.WON.value, LeadStatus.LOST.value)


class InvoiceStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    VOID = "VOID"


class MembershipPlan(str, enum.Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"


class MembershipStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    PAUSED = "PAUSED"


class InstallStatus(str, enum.Enum):
    PLANNING = "PLANNING"
    EQUIPMENT_ORDERED = "EQUIPMENT_ORDERED"
    PERMIT_PENDING = "PERMIT_PENDING"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    INSPECTION = "INSPECTION"
    COMPLETE = "COMPLETE"
