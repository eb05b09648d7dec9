"""
API tests for the GraphQL boundary.

Use cases are replaced through FastAPI dependency overrides; the lifespan
(and with it the shared HTTP client) is never started.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from repo_insights.domain.entities import (
    RepositoryDetails,
    RepositorySummary,
    Visibility,
    WebhookConfig,
)
from repo_insights.domain.exceptions import RepositoryNotFoundError
from repo_insights.interface.app import create_app
from repo_insights.interface.dependencies import get_details_use_case, get_list_use_case
from repo_insights.interface.routes import schema
from tests.fixtures.github_fixtures import create_test_webhook

DETAILS_QUERY = """
query Details($names: [String!]!, $owner: String!, $fileType: String) {
  fetchRepositoriesDetails(repoNames: $names, owner: $owner, fileType: $fileType) {
    name
    size
    owner
    visibility
    numberOfFiles
    fileContent
    activeWebhooks {
      id
      name
      active
      events
      config { content_type insecure_ssl url }
      created_at
      ping_url
      last_response { code status message }
    }
  }
}
"""


@pytest.fixture
def list_use_case():
    use_case = Mock()
    use_case.execute = AsyncMock(return_value=[])
    return use_case


@pytest.fixture
def details_use_case():
    use_case = Mock()
    use_case.execute = AsyncMock(return_value=[])
    return use_case


@pytest.fixture
def client(list_use_case, details_use_case):
    app = create_app()
    app.dependency_overrides[get_list_use_case] = lambda: list_use_case
    app.dependency_overrides[get_details_use_case] = lambda: details_use_case
    return TestClient(app)


def _post(client, query, variables=None):
    response = client.post("/graphql", json={"query": query, "variables": variables or {}})
    return response.json()


class TestListRepositories:
    """Test the listRepositories query."""

    def test_returns_repositories(self, client, list_use_case):
        list_use_case.execute.return_value = [
            RepositorySummary(name="alpha", owner="octocat", size=12),
            RepositorySummary(name="beta", owner="octocat", size=None),
        ]

        body = _post(client, "{ listRepositories { name size owner } }")

        assert body["data"]["listRepositories"] == [
            {"name": "alpha", "size": 12, "owner": "octocat"},
            {"name": "beta", "size": None, "owner": "octocat"},
        ]

    def test_empty(self, client):
        body = _post(client, "{ listRepositories { name } }")

        assert body["data"]["listRepositories"] == []


class TestFetchRepositoriesDetails:
    """Test the fetchRepositoriesDetails query."""

    def test_forwards_arguments_and_maps_output(self, client, details_use_case):
        hook = create_test_webhook(
            5,
            config=WebhookConfig(content_type="json", insecure_ssl="0", url="https://x"),
            created_at="2019-06-03T00:57:16Z",
            ping_url="https://api.github.com/repos/octocat/alpha/hooks/5/pings",
        )
        details_use_case.execute.return_value = [
            RepositoryDetails(
                name="alpha",
                owner="octocat",
                visibility=Visibility.PRIVATE,
                number_of_files=3,
                size=99,
                file_content="print('hi')",
                active_webhooks=[hook],
            )
        ]

        body = _post(
            client,
            DETAILS_QUERY,
            {"names": ["alpha"], "owner": "octocat", "fileType": "py"},
        )

        details_use_case.execute.assert_awaited_once_with(["alpha"], "py", "octocat")
        [item] = body["data"]["fetchRepositoriesDetails"]
        assert item["name"] == "alpha"
        assert item["size"] == 99
        assert item["visibility"] == "PRIVATE"
        assert item["numberOfFiles"] == 3
        assert item["fileContent"] == "print('hi')"
        [webhook] = item["activeWebhooks"]
        assert webhook["id"] == 5
        assert webhook["events"] == ["push"]
        assert webhook["config"] == {"content_type": "json", "insecure_ssl": "0", "url": "https://x"}
        assert webhook["created_at"] == "2019-06-03T00:57:16Z"
        assert webhook["ping_url"].endswith("/pings")
        assert webhook["last_response"] == {"code": None, "status": None, "message": None}

    def test_file_type_is_optional(self, client, details_use_case):
        _post(client, DETAILS_QUERY, {"names": [], "owner": "octocat"})

        details_use_case.execute.assert_awaited_once_with([], None, "octocat")

    def test_domain_error_fails_whole_query(self, client, details_use_case):
        details_use_case.execute.side_effect = RepositoryNotFoundError("beta is gone")

        body = _post(
            client,
            DETAILS_QUERY,
            {"names": ["alpha", "beta"], "owner": "octocat", "fileType": "py"},
        )

        assert body["data"] is None
        [error] = body["errors"]
        assert error["message"] == "beta is gone"
        assert error["extensions"]["code"] == "NOT_FOUND"

    def test_unexpected_error_is_masked(self, client, details_use_case):
        details_use_case.execute.side_effect = RuntimeError("token=abc leaked")

        body = _post(client, DETAILS_QUERY, {"names": ["alpha"], "owner": "octocat"})

        [error] = body["errors"]
        assert "leaked" not in error["message"]
        assert error["extensions"]["code"] == "INTERNAL_SERVER_ERROR"


def test_invalid_query_is_rejected(client):
    body = _post(client, "{ doesNotExist }")

    [error] = body["errors"]
    assert error["extensions"]["code"] == "GRAPHQL_VALIDATION_FAILED"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_number_of_files_documents_missing_branch():
    sdl = schema.as_str()

    assert "0 when the pinned branch does not exist" in sdl
