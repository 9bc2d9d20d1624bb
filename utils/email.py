import os
import html
import logging
from typing import Optional, Tuple

from utils.brevo import post

logger = logging.getLogger(__name__)

BREVO_FROM_EMAIL = os.getenv("BREVO_FROM_EMAIL", "")
BREVO_FROM_NAME = os.getenv("BREVO_FROM_NAME", "FD Pierce Company")

# inbox that receives website service requests
OFFICE_EMAIL = os.getenv("OFFICE_EMAIL", "service@fdpierce.com")

REQUEST_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
        .card {{ max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #e5e7eb; }}
        h2 {{ margin: 0 0 16px; border-bottom: 2px solid #2563eb; padding-bottom: 8px; }}
        th {{ text-align: left; color: #2563eb; padding-right: 12px; }}
        .issue {{ margin-top: 16px; padding: 12px; background: #f9fafb; border-left: 4px solid #2563eb; white-space: pre-wrap; }}
    </style>
</head>
<body>
    <div class="card">
        <h2>{title}</h2>
        <table>{rows}</table>
        <div class="issue">{description}</div>
    </div>
</body>
</html>
"""


def send_email(
    to_email: str,
    subject: str,
    body: str,
    is_html: bool = True,
    reply_to: Optional[dict] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Send one transactional email.
    Returns (success, error_message).
    """
    payload = {
        "sender": {"name": BREVO_FROM_NAME, "email": BREVO_FROM_EMAIL},
        "to": [{"email": to_email}],
        "subject": subject,
        "htmlContent" if is_html else "textContent": body,
    }
    if reply_to:
        payload["replyTo"] = reply_to
    return post("/smtp/email", payload, target=to_email)


def send_service_request_email(
    name: str,
    email: Optional[str],
    phone: str,
    service_type: str,
    urgency: str,
    description: str,
    address: Optional[str] = None,
    preferred_date: Optional[str] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Forward a website contact / emergency form submission to the office inbox.
    Replies go straight to the customer when they left an email.
    """
    emergency = urgency == "emergency"
    subject = f"{'EMERGENCY ' if emergency else ''}Service Request: {service_type} - {name}"

    fields = [
        ("From", f"{name} ({email})" if email else name),
        ("Phone", phone),
        ("Service", service_type),
        ("Urgency", urgency),
        ("Address", address),
        ("Preferred date", preferred_date),
    ]
    rows = "".join(
        f"<tr><th>{label}</th><td>{html.escape(str(value))}</td></tr>"
        for label, value in fields
        if value
    )
    body = REQUEST_TEMPLATE.format(
        title="Emergency Service Request" if emergency else "New Service Request",
        rows=rows,
        description=html.escape(description),
    )

    reply_to = {"email": email, "name": name} if email else None
    return send_email(OFFICE_EMAIL, subject, body, is_html=True, reply_to=reply_to)
