#pakli/services/outages_client.py
import logging

import requests

logger = logging.getLogger(__name__)

TIMEOUT = 15


def get_outages(base_url: str, session: requests.Session | None = None) -> list[dict]:
    """Fetch outage records from a running API. Any failure is logged and yields []."""
    url = f"{base_url.rstrip('/')}/api/outages"
    http = session or requests
    try:
        r = http.get(url, timeout=TIMEOUT)
        r.raise_for_status()
        result = r.json()
        if not isinstance(result, dict) or not result.get("success") or not isinstance(result.get("data"), list):
            raise ValueError("Invalid API response format")
        if result.get("warning"):
            logger.warning("Outages API answered with fallback data: %s", result["warning"])
        return result["data"]
    except (requests.RequestException, ValueError) as e:
        logger.error(f"[get_outages] Failed: {e}")
        return []
