"""Server-side analytics clients.

Facebook Conversions API and Google Analytics 4 Measurement Protocol.
Both clients return a result dict instead of raising:

    {"status": "success", "response": {...}}
    {"status": "error", "message": "..."}

Configuration comes from ``settings.FACEBOOK_PIXEL`` and
``settings.GOOGLE_ANALYTICS``, overridden by values saved from the admin
panel in the ``Setting`` table (see ``facebook_pixel()`` and
``google_analytics()``).
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Any

import httpx
from django.conf import settings

from megashop.core.models import Setting

logger = logging.getLogger(__name__)

FACEBOOK_GRAPH_URL = "https://graph.facebook.com/v19.0/{pixel_id}/events"
FACEBOOK_TEST_EVENT_CODE = "TEST12345"
GA_COLLECT_URL = "https://www.google-analytics.com/mp/collect"
GA_DEBUG_COLLECT_URL = "https://www.google-analytics.com/debug/mp/collect"
GA_CLIENT_ID_SESSION_KEY = "ga_client_id"

PIXEL_SETTING_GROUP = "facebook_pixel"
GA_SETTING_GROUP = "google_analytics"


def _response_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _post(url: str, payload: dict, transport: httpx.BaseTransport | None = None) -> httpx.Response:
    with httpx.Client(timeout=settings.ANALYTICS_HTTP_TIMEOUT, transport=transport) as client:
        return client.post(url, json=payload)


@dataclass
class FacebookPixel:
    """Facebook Conversions API client."""

    pixel_id: str = ""
    access_token: str = ""
    debug_mode: bool = False
    enabled: bool = True
    transport: httpx.BaseTransport | None = None

    @property
    def configured(self) -> bool:
        return bool(self.enabled and self.pixel_id and self.access_token)

    def build_payload(
        self,
        name: str,
        params: dict | None = None,
        source_url: str = "",
        timestamp: int | None = None,
    ) -> dict:
        payload = {
            "access_token": self.access_token,
            "data": [
                {
                    "event_name": name or "CustomEvent",
                    "event_time": timestamp or int(time.time()),
                    "action_source": "website",
                    "event_source_url": source_url,
                    "custom_data": params or {},
                }
            ],
        }
        if self.debug_mode:
            payload["test_event_code"] = FACEBOOK_TEST_EVENT_CODE
        return payload

    def post_event(
        self,
        name: str,
        params: dict | None = None,
        source_url: str = "",
        timestamp: int | None = None,
    ) -> dict:
        """Send one event. Never raises."""
        if not self.configured:
            logger.debug(
                "Facebook Pixel disabled or missing configuration",
                extra={
                    "enabled": self.enabled,
                    "pixel_id": "set" if self.pixel_id else "not set",
                    "access_token": "set" if self.access_token else "not set",
                },
            )
            return {
                "status": "error",
                "message": "Facebook Pixel is disabled or not configured properly",
            }

        url = FACEBOOK_GRAPH_URL.format(pixel_id=self.pixel_id)
        payload = self.build_payload(name, params, source_url, timestamp)
        try:
            response = _post(url, payload, self.transport)
        except httpx.HTTPError as e:
            logger.error("Facebook Pixel error: %s", e)
            return {"status": "error", "message": str(e)}

        body = _response_json(response)
        if self.debug_mode:
            logger.debug("Facebook Pixel event posted", extra={"event": name, "response": body})
        return {
            "status": "success" if response.is_success else "error",
            "response": body,
        }


@dataclass
class GoogleAnalytics:
    """GA4 Measurement Protocol client.

    Events need a client id; views get one with ``session_client_id()``.
    """

    measurement_id: str = ""
    api_secret: str = ""
    debug_mode: bool = False
    enabled: bool = True
    client_id: str = ""
    transport: httpx.BaseTransport | None = None

    @property
    def configured(self) -> bool:
        return bool(self.enabled and self.measurement_id and self.api_secret)

    @property
    def collect_url(self) -> str:
        return GA_DEBUG_COLLECT_URL if self.debug_mode else GA_COLLECT_URL

    def post_event(self, name: str, params: dict | None = None) -> dict:
        """Send one event. Never raises."""
        if not self.configured:
            logger.debug(
                "Google Analytics disabled or missing configuration",
                extra={
                    "enabled": self.enabled,
                    "measurement_id": "set" if self.measurement_id else "not set",
                    "api_secret": "set" if self.api_secret else "not set",
                },
            )
            return {
                "status": "error",
                "message": "Google Analytics is disabled or not configured properly",
            }

        if not self.client_id:
            logger.debug("Google Analytics client ID not set")
            return {"status": "error", "message": "Client ID not set"}

        url = str(
            httpx.URL(
                self.collect_url,
                params={"measurement_id": self.measurement_id, "api_secret": self.api_secret},
            )
        )
        payload = {
            "client_id": self.client_id,
            "events": [{"name": name, "params": params or {}}],
        }
        try:
            response = _post(url, payload, self.transport)
        except httpx.HTTPError as e:
            logger.error("Google Analytics error: %s", e)
            return {"status": "error", "message": str(e)}

        body = _response_json(response)
        if self.debug_mode:
            logger.debug("Google Analytics event posted", extra={"event": name, "response": body})
        return {
            "status": "success" if response.is_success else "error",
            "response": body,
        }


# =============================================================================
# Stored configuration
# =============================================================================


def pixel_config() -> dict:
    """Effective Facebook Pixel settings: admin overrides on top of settings."""
    defaults = settings.FACEBOOK_PIXEL
    return {
        "pixel_id": Setting.get_value("facebook_pixel_id", defaults["PIXEL_ID"]) or "",
        "access_token": Setting.get_value("facebook_pixel_access_token", defaults["ACCESS_TOKEN"]) or "",
        "debug_mode": bool(Setting.get_value("facebook_pixel_debug_mode", defaults["DEBUG_MODE"])),
        "enabled": bool(Setting.get_value("facebook_pixel_enabled", defaults["ENABLED"])),
    }


def ga_config() -> dict:
    """Effective Google Analytics settings: admin overrides on top of settings."""
    defaults = settings.GOOGLE_ANALYTICS
    return {
        "measurement_id": Setting.get_value("google_analytics_measurement_id", defaults["MEASUREMENT_ID"]) or "",
        "api_secret": Setting.get_value("google_analytics_api_secret", defaults["API_SECRET"]) or "",
        "debug_mode": bool(Setting.get_value("google_analytics_debug_mode", defaults["DEBUG_MODE"])),
        "enabled": bool(Setting.get_value("google_analytics_enabled", defaults["ENABLED"])),
    }


def save_pixel_config(pixel_id, access_token, debug_mode, enabled):
    Setting.set_value("facebook_pixel_id", pixel_id or "", PIXEL_SETTING_GROUP)
    Setting.set_value("facebook_pixel_access_token", access_token or "", PIXEL_SETTING_GROUP)
    Setting.set_value("facebook_pixel_debug_mode", bool(debug_mode), PIXEL_SETTING_GROUP)
    Setting.set_value("facebook_pixel_enabled", bool(enabled), PIXEL_SETTING_GROUP)


def save_ga_config(measurement_id, api_secret, debug_mode, enabled):
    Setting.set_value("google_analytics_measurement_id", measurement_id or "", GA_SETTING_GROUP)
    Setting.set_value("google_analytics_api_secret", api_secret or "", GA_SETTING_GROUP)
    Setting.set_value("google_analytics_debug_mode", bool(debug_mode), GA_SETTING_GROUP)
    Setting.set_value("google_analytics_enabled", bool(enabled), GA_SETTING_GROUP)


def facebook_pixel(**overrides) -> FacebookPixel:
    """Client built from the stored configuration."""
    return FacebookPixel(**{**pixel_config(), **overrides})


def google_analytics(client_id: str = "", **overrides) -> GoogleAnalytics:
    """Client built from the stored configuration."""
    return GoogleAnalytics(client_id=client_id, **{**ga_config(), **overrides})


def new_client_id() -> str:
    """Client id in the ``<random>.<unix time>`` shape used by gtag."""
    return f"{random.randint(1_000_000_000, 2_147_483_647)}.{int(time.time())}"


def session_client_id(request) -> str:
    """The session's GA client id, created on first use."""
    client_id = request.session.get(GA_CLIENT_ID_SESSION_KEY)
    if not client_id:
        client_id = new_client_id()
        request.session[GA_CLIENT_ID_SESSION_KEY] = client_id
    return client_id
