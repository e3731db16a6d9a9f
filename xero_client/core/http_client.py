"""HTTP transport construction for the Xero API client.

The dispatcher issues blocking calls, so the factory builds ``httpx.Client``
instances. Timeouts are applied per request by the dispatcher.
"""

import os
from pathlib import Path
from typing import Any

import httpx
import structlog

from xero_client.config.constants import DEFAULT_TIMEOUT_SECONDS
from xero_client.config.core import HTTPSettings


logger = structlog.get_logger(__name__)


class HTTPClientFactory:
    """Factory for creating HTTP clients.

    Provides centralized configuration for HTTP clients with:
    - Proxy and CA bundle selection from the environment
    - Redirects followed, so callers only see the final response
    - Optional HTTP/2
    """

    @staticmethod
    def create_client(
        *,
        settings: HTTPSettings | None = None,
        **kwargs: Any,
    ) -> httpx.Client:
        """Create a blocking HTTP client.

        Args:
            settings: Optional HTTP settings section
            **kwargs: Additional httpx.Client arguments

        Returns:
            Configured httpx.Client instance
        """
        settings = settings or HTTPSettings()

        proxy = _get_proxy_url()

        verify = settings.verify
        if isinstance(verify, bool) and verify:
            verify = _get_ssl_context()

        transport = httpx.HTTPTransport(
            http2=settings.http2,
            verify=verify,
            proxy=proxy,
        )

        client_config: dict[str, Any] = {
            "timeout": httpx.Timeout(DEFAULT_TIMEOUT_SECONDS),
            "transport": transport,
            "follow_redirects": True,
            **kwargs,
        }

        logger.debug(
            "http_client_created",
            http2=settings.http2,
            has_proxy=proxy is not None,
            verify=verify if isinstance(verify, bool) else "ca_bundle",
        )

        return httpx.Client(**client_config)


def _get_proxy_url() -> str | None:
    """Get proxy URL from environment variables.

    Returns:
        str or None: Proxy URL if any proxy is set
    """
    # For HTTPS requests, prioritize HTTPS_PROXY
    https_proxy = os.environ.get("HTTPS_PROXY") or os.environ.get("https_proxy")
    all_proxy = os.environ.get("ALL_PROXY")
    http_proxy = os.environ.get("HTTP_PROXY") or os.environ.get("http_proxy")

    proxy_url = https_proxy or all_proxy or http_proxy

    if proxy_url:
        logger.debug("proxy_configured", proxy_url=proxy_url)

    return proxy_url


def _get_ssl_context() -> str | bool:
    """Get SSL verification configuration from environment variables.

    Returns:
        SSL verification configuration:
        - Path to CA bundle file
        - True for default verification
        - False to disable verification (insecure)
    """
    ca_bundle = os.environ.get("REQUESTS_CA_BUNDLE") or os.environ.get("SSL_CERT_FILE")

    ssl_verify = os.environ.get("SSL_VERIFY", "true").lower()

    if ca_bundle and Path(ca_bundle).exists():
        logger.info("ssl_ca_bundle_configured", ca_bundle_path=ca_bundle)
        return ca_bundle
    elif ssl_verify in ("false", "0", "no"):
        logger.warning(
            "ssl_verification_disabled",
            ssl_verify_value=ssl_verify,
            security_warning=True,
        )
        return False
    else:
        return True
