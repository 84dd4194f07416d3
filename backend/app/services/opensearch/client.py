# Wazuh indexer (OpenSearch) client configuration and search

import logging
from typing import Any, Optional
from urllib.parse import urlparse

from opensearchpy import OpenSearch, RequestsHttpConnection

from app.core.config import settings


_LOGGER = logging.getLogger(__name__)


def _get_opensearch_config() -> dict[str, Any]:
    parsed = urlparse(settings.indexer_url)
    host = parsed.hostname or "localhost"
    port = parsed.port or 9200
    use_ssl = parsed.scheme == "https"

    config: dict[str, Any] = {
        "hosts": [{"host": host, "port": port}],
        "use_ssl": use_ssl,
        "connection_class": RequestsHttpConnection,
        "http_auth": (settings.indexer_username, settings.indexer_password),
    }

    if use_ssl:
        # The Wazuh indexer ships with a self-signed certificate by default.
        config["verify_certs"] = settings.indexer_verify_certs
        config["ssl_show_warn"] = False

    return config


_opensearch_client: Optional[OpenSearch] = None


def get_client() -> OpenSearch:
    """Return the shared OpenSearch client, creating it on first use."""
    global _opensearch_client
    if _opensearch_client is None:
        config = _get_opensearch_config()
        config["timeout"] = 30
        config["max_retries"] = 2
        config["retry_on_timeout"] = True
        config["retry_on_status"] = [502, 503, 504]
        _opensearch_client = OpenSearch(**config)
    return _opensearch_client


def reset_client() -> None:
    """Drop the cached client; the next get_client() call reconnects."""
    global _opensearch_client
    if _opensearch_client is not None:
        try:
            _opensearch_client.close()
        except Exception as error:
            _LOGGER.debug("closing opensearch client failed: %s", error)
    _opensearch_client = None


def search_alerts(body: dict[str, Any], index: Optional[str] = None) -> dict[str, Any]:
    """Run a search against the alerts index pattern and return the raw response."""
    client = get_client()
    return client.search(index=index or settings.alerts_index_pattern, body=body)
