"""
Hunting API against a live Wazuh indexer (RUN_OPENSEARCH_TESTS=1).
"""
import pytest

pytestmark = [pytest.mark.integration, pytest.mark.requires_opensearch]


class TestHuntingAPI:

    @pytest.mark.asyncio
    async def test_search_without_filters(self, async_client):
        response = await async_client.get("/api/hunting", params={"size": "5"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["size"] == 5
        assert len(data["data"]) <= 5
        assert data["total"] >= len(data["data"])

    @pytest.mark.asyncio
    async def test_search_with_filters(self, async_client):
        response = await async_client.get(
            "/api/hunting",
            params={"desc": "ss", "level_gte": "3", "start": "1700000000", "sort": "asc"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        for row in data["data"]:
            assert set(row) >= {"id", "agentName", "ruleLevel", "groups"}

    def test_cluster_reachable(self, opensearch_client):
        assert opensearch_client.ping()
