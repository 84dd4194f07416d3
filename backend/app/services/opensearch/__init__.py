"""
Wazuh indexer (OpenSearch) access.

  - get_client(): shared opensearch-py client configured from settings
  - reset_client(): drop the cached client (e.g. after credential changes)
  - search_alerts(): search the alerts index pattern (default wazuh-alerts-*)
"""

from .client import get_client, reset_client, search_alerts

__all__ = [
    "get_client",
    "reset_client",
    "search_alerts",
]
