import os
import logging
from typing import Optional

from utils.brevo import post

logger = logging.getLogger(__name__)

SMS_SENDER = os.getenv("BREVO_SMS_SENDER", "FDPierce")

# on-call dispatcher, paged for emergency requests
ONCALL_PHONE = os.getenv("ONCALL_PHONE", "")


def send_sms(recipient_number: str, message: str, sender: Optional[str] = None) -> bool:
    """Send a transactional SMS. Returns True when Brevo accepted it."""
    ok, _ = post(
        "/transactionalSMS/sms",
        {
            "sender": sender or SMS_SENDER,
            "recipient": recipient_number,
            "content": message,
            "type": "transactional",
        },
        target=recipient_number,
    )
    if ok:
        logger.info(f"SMS sent to {recipient_number}")
    return ok


def page_oncall(name: str, phone: str, summary: str) -> bool:
    if not ONCALL_PHONE:
        logger.warning("ONCALL_PHONE is not set; skipping emergency page")
        return False
    # single SMS segment
    return send_sms(ONCALL_PHONE, f"EMERGENCY: {name} {phone} - {summary}"[:160])
