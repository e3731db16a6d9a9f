"""Tests for HttpDispatcher.create_request."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import httpx
import pytest

from xero_client.core.interfaces import Signer, Throttle
from xero_client.exceptions import ConfigurationError
from xero_client.http import HttpDispatcher


class TestTargetUri:
    """Test composing the target URI."""

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_blank_query_leaves_query_absent(self, dispatcher, query):
        request = dispatcher.create_request("/api.xro/2.0/Invoices", "GET", query=query)

        assert request.url.path == "/api.xro/2.0/Invoices"
        assert request.url.query == b""
        assert "?" not in str(request.url)

    def test_query_becomes_query_component(self, dispatcher):
        request = dispatcher.create_request(
            "/api.xro/2.0/Invoices", "GET", query="page=2&order=Date"
        )

        assert request.url.query == b"page=2&order=Date"
        assert str(request.url) == (
            "https://api.example.test/api.xro/2.0/Invoices?page=2&order=Date"
        )

    def test_query_replaces_base_address_query(self, http_client):
        dispatcher = HttpDispatcher(
            "https://api.example.test/?stale=1", client=http_client
        )

        request = dispatcher.create_request("/Contacts", "GET", query="where=x")

        assert request.url.query == b"where=x"

    def test_question_mark_in_endpoint_escaped(self, dispatcher):
        request = dispatcher.create_request("/Invoices?x=1", "GET")

        assert request.url.raw_path == b"/Invoices%3Fx=1"
        assert request.url.query == b""

    def test_hash_in_endpoint_escaped_with_query(self, dispatcher):
        request = dispatcher.create_request("/Items/A#1", "GET", query="page=2")

        assert request.url.raw_path == b"/Items/A%231?page=2"
        assert request.url.query == b"page=2"
        assert request.url.fragment == ""

    def test_endpoint_replaces_base_address_path(self, http_client):
        dispatcher = HttpDispatcher(
            "https://api.example.test/api.xro/2.0", client=http_client
        )

        request = dispatcher.create_request("payroll.xro/1.0/Employees", "GET")

        assert str(request.url) == "https://api.example.test/payroll.xro/1.0/Employees"

    def test_blank_base_url_rejected(self, http_client):
        with pytest.raises(ConfigurationError):
            HttpDispatcher("  ", client=http_client)


class TestHeaders:
    """Test headers attached while building a request."""

    def test_defaults(self, dispatcher):
        request = dispatcher.create_request("/Invoices", "GET")

        assert request.method == "GET"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Accept-Encoding"] == "gzip, deflate"
        assert "If-Modified-Since" not in request.headers
        assert "Authorization" not in request.headers

    def test_accept_override(self, dispatcher):
        request = dispatcher.create_request("/Invoices/1", "GET", accept="application/pdf")

        assert request.headers["Accept"] == "application/pdf"

    def test_fixed_timeout(self, dispatcher):
        request = dispatcher.create_request("/Invoices", "GET")

        assert request.extensions["timeout"] == {
            "connect": 330.0,
            "read": 330.0,
            "write": 330.0,
            "pool": 330.0,
        }

    def test_if_modified_since_naive_treated_as_utc(self, dispatcher):
        dispatcher.modified_since = datetime(2024, 1, 2, 3, 4, 5)

        request = dispatcher.create_request("/Invoices", "GET")

        assert request.headers["If-Modified-Since"] == "Tue, 02 Jan 2024 03:04:05 GMT"

    def test_if_modified_since_aware_converted_to_gmt(self, dispatcher):
        dispatcher.modified_since = datetime(
            2024, 1, 2, 13, 4, 5, tzinfo=timezone(timedelta(hours=10))
        )

        request = dispatcher.create_request("/Invoices", "GET")

        assert request.headers["If-Modified-Since"] == "Tue, 02 Jan 2024 03:04:05 GMT"

    def test_default_user_agent_embeds_consumer_key(self, dispatcher):
        request = dispatcher.create_request("/Invoices", "GET")

        assert request.headers["User-Agent"] == "Xero Api wrapper - CONSUMERKEY123"

    def test_user_agent_override(self, dispatcher):
        dispatcher.user_agent = "my-app/1.0"

        request = dispatcher.create_request("/Invoices", "GET")

        assert request.headers["User-Agent"] == "my-app/1.0"

    def test_blank_user_agent_override_ignored(self, dispatcher):
        dispatcher.user_agent = "   "

        request = dispatcher.create_request("/Invoices", "GET")

        assert request.headers["User-Agent"] == "Xero Api wrapper - CONSUMERKEY123"

    def test_user_agent_without_consumer(self, http_client):
        dispatcher = HttpDispatcher("https://api.example.test", client=http_client)

        request = dispatcher.create_request("/Invoices", "GET")

        assert request.headers["User-Agent"] == "Xero Api wrapper"

    def test_add_header_last_value_wins(self, dispatcher):
        dispatcher.add_header("Xero-Tenant-Id", "first")
        dispatcher.add_header("Xero-Tenant-Id", "second")

        request = dispatcher.create_request("/Invoices", "GET")

        assert request.headers.get_list("Xero-Tenant-Id") == ["second"]
        assert dispatcher.headers == {"Xero-Tenant-Id": "second"}

    def test_headers_property_is_a_copy(self, dispatcher):
        dispatcher.headers["X-Ignored"] = "1"

        request = dispatcher.create_request("/Invoices", "GET")

        assert "X-Ignored" not in request.headers


class TestSigning:
    """Test delegation to the signer."""

    def test_signature_used_verbatim(self, make_dispatcher, consumer, api_user):
        signer = MagicMock(spec=Signer)
        signer.get_signature.return_value = 'OAuth oauth_token="abc"'
        dispatcher = make_dispatcher(signer=signer)

        request = dispatcher.create_request("/Invoices", "PUT", query="summarizeErrors=false")

        assert request.headers["Authorization"] == 'OAuth oauth_token="abc"'
        signer.get_signature.assert_called_once_with(
            consumer, api_user, request.url, "PUT", consumer
        )

    def test_signer_sees_full_uri(self, make_dispatcher):
        signer = MagicMock(spec=Signer)
        signer.get_signature.return_value = "sig"
        dispatcher = make_dispatcher(signer=signer)

        dispatcher.create_request("/Invoices", "GET", query="page=3")

        uri = signer.get_signature.call_args.args[2]
        assert isinstance(uri, httpx.URL)
        assert str(uri) == "https://api.example.test/Invoices?page=3"

    def test_signature_recomputed_per_request(self, make_dispatcher):
        signer = MagicMock(spec=Signer)
        signer.get_signature.side_effect = ["sig-1", "sig-2"]
        dispatcher = make_dispatcher(signer=signer)

        first = dispatcher.create_request("/Invoices", "GET")
        second = dispatcher.create_request("/Invoices", "GET")

        assert first.headers["Authorization"] == "sig-1"
        assert second.headers["Authorization"] == "sig-2"

    def test_signer_error_propagates(self, make_dispatcher):
        signer = MagicMock(spec=Signer)
        signer.get_signature.side_effect = RuntimeError("certificate missing")
        dispatcher = make_dispatcher(signer=signer)

        with pytest.raises(RuntimeError, match="certificate missing"):
            dispatcher.create_request("/Invoices", "GET")


class TestThrottle:
    """Test the rate limiter gate."""

    def test_waits_once_per_request(self, make_dispatcher):
        throttle = MagicMock(spec=Throttle)
        dispatcher = make_dispatcher(throttle=throttle)

        dispatcher.create_request("/Invoices", "GET")
        dispatcher.create_request("/Invoices", "GET")

        assert throttle.wait_until_limit.call_count == 2

    def test_waits_after_signing(self, make_dispatcher):
        order: list[str] = []
        signer = MagicMock(spec=Signer)
        signer.get_signature.side_effect = lambda *args: order.append("sign") or "sig"
        throttle = MagicMock(spec=Throttle)
        throttle.wait_until_limit.side_effect = lambda: order.append("wait")
        dispatcher = make_dispatcher(signer=signer, throttle=throttle)

        dispatcher.create_request("/Invoices", "GET")

        assert order == ["sign", "wait"]

    def test_send_happens_after_wait(self, make_dispatcher, fake_api):
        order: list[str] = []
        throttle = MagicMock(spec=Throttle)
        throttle.wait_until_limit.side_effect = lambda: order.append("wait")
        fake_api.on_request = lambda request: order.append("send")
        dispatcher = make_dispatcher(throttle=throttle)

        dispatcher.get("/Invoices")

        assert order == ["wait", "send"]

    def test_throttle_error_prevents_send(self, make_dispatcher, fake_api):
        throttle = MagicMock(spec=Throttle)
        throttle.wait_until_limit.side_effect = TimeoutError("limiter closed")
        dispatcher = make_dispatcher(throttle=throttle)

        with pytest.raises(TimeoutError):
            dispatcher.get("/Invoices")

        assert fake_api.requests == []
