import os
import logging
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)

BREVO_API_KEY = os.getenv("BREVO_API_KEY", "")
BREVO_BASE_URL = "https://api.brevo.com/v3"


def post(path: str, payload: dict, target: str) -> Tuple[bool, Optional[str]]:
    """
    POST a JSON payload to the Brevo v3 API.
    Returns (ok, error_message). `target` is the recipient, used in log lines.
    """
    if not BREVO_API_KEY:
        error = "BREVO_API_KEY is not set"
        logger.error(f"Cannot send to {target}: {error}")
        return False, error

    headers = {
        "api-key": BREVO_API_KEY,
        "accept": "application/json",
        "content-type": "application/json",
    }
    try:
        response = requests.post(f"{BREVO_BASE_URL}{path}", json=payload, headers=headers, timeout=10)
    except requests.exceptions.RequestException as e:
        logger.error(f"Network error sending to {target}: {e}")
        return False, str(e)

    if response.ok:
        return True, None

    try:
        detail = response.json().get("message", response.text)
    except ValueError:
        detail = response.text
    error = f"Brevo returned {response.status_code} for {target}: {detail}"
    logger.error(error)
    return False, error
