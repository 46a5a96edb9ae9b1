"""Tests for the Facebook Pixel and Google Analytics clients."""

import json

import httpx
import pytest

from megashop.integrations import analytics
from megashop.integrations.analytics import FacebookPixel, GoogleAnalytics


def recording_transport(requests, status=200, body=None):
    """MockTransport that records each request and answers with ``body``."""

    def handler(request):
        requests.append(request)
        return httpx.Response(status, json=body if body is not None else {"events_received": 1})

    return httpx.MockTransport(handler)


def failing_transport():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


# =============================================================================
# Facebook Pixel
# =============================================================================


class TestFacebookPixel:
    def test_posts_event_to_graph_api(self):
        requests = []
        pixel = FacebookPixel(
            pixel_id="123456",
            access_token="token",
            transport=recording_transport(requests),
        )

        result = pixel.post_event("Purchase", {"value": 1500, "currency": "BDT"}, source_url="https://shop.test/")

        assert result == {"status": "success", "response": {"events_received": 1}}
        sent = requests[0]
        assert str(sent.url) == "https://graph.facebook.com/v19.0/123456/events"
        payload = json.loads(sent.content)
        assert payload["access_token"] == "token"
        event = payload["data"][0]
        assert event["event_name"] == "Purchase"
        assert event["action_source"] == "website"
        assert event["custom_data"] == {"value": 1500, "currency": "BDT"}
        assert "test_event_code" not in payload

    def test_debug_mode_adds_test_event_code(self):
        pixel = FacebookPixel(pixel_id="1", access_token="t", debug_mode=True)

        payload = pixel.build_payload("TestEvent", timestamp=1700000000)

        assert payload["test_event_code"] == "TEST12345"
        assert payload["data"][0]["event_time"] == 1700000000

    def test_disabled_pixel_sends_nothing(self):
        requests = []
        pixel = FacebookPixel(
            pixel_id="1",
            access_token="t",
            enabled=False,
            transport=recording_transport(requests),
        )

        result = pixel.post_event("Purchase")

        assert result["status"] == "error"
        assert result["message"] == "Facebook Pixel is disabled or not configured properly"
        assert requests == []

    def test_missing_token_counts_as_not_configured(self):
        assert FacebookPixel(pixel_id="1").configured is False

    def test_error_response_is_reported(self):
        pixel = FacebookPixel(
            pixel_id="1",
            access_token="bad",
            transport=recording_transport([], status=400, body={"error": {"message": "Invalid token"}}),
        )

        result = pixel.post_event("Purchase")

        assert result["status"] == "error"
        assert result["response"]["error"]["message"] == "Invalid token"

    def test_network_error_does_not_raise(self):
        pixel = FacebookPixel(pixel_id="1", access_token="t", transport=failing_transport())

        result = pixel.post_event("Purchase")

        assert result == {"status": "error", "message": "connection refused"}


# =============================================================================
# Google Analytics
# =============================================================================


class TestGoogleAnalytics:
    def test_posts_event_with_credentials_in_query(self):
        requests = []
        ga = GoogleAnalytics(
            measurement_id="G-TEST",
            api_secret="secret",
            client_id="555.1700000000",
            transport=recording_transport(requests, status=204, body={}),
        )

        result = ga.post_event("purchase", {"value": 10})

        assert result["status"] == "success"
        sent = requests[0]
        assert sent.url.path == "/mp/collect"
        assert sent.url.params["measurement_id"] == "G-TEST"
        assert sent.url.params["api_secret"] == "secret"
        payload = json.loads(sent.content)
        assert payload == {
            "client_id": "555.1700000000",
            "events": [{"name": "purchase", "params": {"value": 10}}],
        }

    def test_debug_mode_uses_validation_endpoint(self):
        requests = []
        ga = GoogleAnalytics(
            measurement_id="G-TEST",
            api_secret="secret",
            debug_mode=True,
            client_id="1.2",
            transport=recording_transport(requests, body={"validationMessages": []}),
        )

        result = ga.post_event("test_event")

        assert requests[0].url.path == "/debug/mp/collect"
        assert result["response"] == {"validationMessages": []}

    def test_client_id_is_required(self):
        requests = []
        ga = GoogleAnalytics(
            measurement_id="G-TEST",
            api_secret="secret",
            transport=recording_transport(requests),
        )

        assert ga.post_event("purchase") == {"status": "error", "message": "Client ID not set"}
        assert requests == []

    def test_not_configured(self):
        result = GoogleAnalytics(measurement_id="G-TEST", client_id="1.2").post_event("purchase")

        assert result["message"] == "Google Analytics is disabled or not configured properly"


# =============================================================================
# Stored configuration
# =============================================================================


@pytest.mark.django_db
class TestStoredConfig:
    def test_defaults_come_from_settings(self, settings):
        settings.GOOGLE_ANALYTICS = {
            "MEASUREMENT_ID": "G-ENV",
            "API_SECRET": "env-secret",
            "DEBUG_MODE": False,
            "ENABLED": True,
        }

        assert analytics.ga_config() == {
            "measurement_id": "G-ENV",
            "api_secret": "env-secret",
            "debug_mode": False,
            "enabled": True,
        }

    def test_saved_values_override_settings(self):
        analytics.save_pixel_config("999", "saved-token", debug_mode=True, enabled=True)

        pixel = analytics.facebook_pixel()

        assert pixel.pixel_id == "999"
        assert pixel.access_token == "saved-token"
        assert pixel.debug_mode is True
        assert pixel.configured

    def test_saved_false_disables_client(self):
        analytics.save_ga_config("G-1", "s", debug_mode=False, enabled=False)

        assert analytics.google_analytics(client_id="1.2").configured is False

    def test_overrides_win_over_stored_values(self):
        analytics.save_ga_config("G-1", "s", debug_mode=False, enabled=True)

        ga = analytics.google_analytics(client_id="1.2", debug_mode=True)

        assert ga.debug_mode is True
        assert ga.collect_url == analytics.GA_DEBUG_COLLECT_URL
