"""Thin client for the Travel Compositor import backend function."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)

GENERIC_FETCH_ERROR = "Fout bij ophalen reis van Travel Compositor"

# Microsites with credentials configured on the import function.
TC_MICROSITES: List[Dict[str, str]] = [
    {"id": "rondreis-planner", "name": "Rondreis Planner", "emoji": "🌍"},
    {"id": "reisbureaunederland", "name": "Reisbureau Nederland", "emoji": "🇳🇱"},
    {"id": "symphonytravel", "name": "Symphony Travel", "emoji": "🎵"},
    {"id": "pacificislandtravel", "name": "Pacific Island Travel", "emoji": "🏝️"},
    {"id": "newreisplan", "name": "New Reisplan", "emoji": "✈️"},
]


class TcImportError(RuntimeError):
    """Raised when a travel cannot be fetched from Travel Compositor."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if body.get("error"):
            return str(body["error"])
        if body.get("message"):
            return str(body["message"])
    return f"{GENERIC_FETCH_ERROR} ({response.status_code})"


def fetch_tc_travel(
    travel_id: str,
    microsite_id: Optional[str] = None,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> Dict[str, Any]:
    """Fetch one travel as the import function's JSON payload.

    Without ``microsite_id`` the import function tries every configured
    microsite.
    """

    settings = get_settings()
    url = settings.tc_import_url
    if not url:
        raise TcImportError("SUPABASE_URL is not configured. Set it in the environment or .env file.")

    body: Dict[str, str] = {"travelId": travel_id.strip()}
    if microsite_id:
        body["micrositeId"] = microsite_id
    headers = {"Content-Type": "application/json"}
    if settings.supabase_anon_key:
        headers["Authorization"] = f"Bearer {settings.supabase_anon_key}"
        headers["apikey"] = settings.supabase_anon_key

    logger.info(
        "Fetching travel %s %s", body["travelId"], f"from {microsite_id}" if microsite_id else "(auto-detect)"
    )
    try:
        with httpx.Client(timeout=settings.tc_import_timeout, transport=transport) as client:
            resp = client.post(url, json=body, headers=headers)
    except httpx.HTTPError as exc:
        raise TcImportError(f"{GENERIC_FETCH_ERROR}: {exc}") from exc

    if resp.is_error:
        raise TcImportError(_error_message(resp))
    try:
        data = resp.json()
    except ValueError as exc:
        raise TcImportError(f"{GENERIC_FETCH_ERROR}: invalid JSON response") from exc
    if not isinstance(data, dict):
        return {}
    return data
