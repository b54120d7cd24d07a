import pytest
from fastapi.testclient import TestClient

from conftest import FakeHost, dir_entry, file_entry
from repo_inspector.domain.entities import HostRepository, Webhook
from repo_inspector.domain.exceptions import HostRejectedError
from repo_inspector.interface.app import create_app
from repo_inspector.interface.dependencies import get_host_factory

DETAILS_QUERY = """
query Details($token: String!, $owner: String!, $repoName: String!) {
  getRepositoryDetails(token: $token, owner: $owner, repoName: $repoName) {
    name size owner isPrivate numberOfFiles ymlContent activeWebhooks forkedFrom
  }
}
"""

LIST_QUERY = """
query List($token: String!) {
  listRepositories(token: $token) { name size owner forkedFrom }
}
"""


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def client(fake_host):
    app = create_app()
    tokens = []

    def factory(credential):
        tokens.append(credential.token)
        return fake_host

    app.dependency_overrides[get_host_factory] = lambda: factory
    test_client = TestClient(app)
    test_client.tokens = tokens
    return test_client


def _post(client, query, **variables):
    resp = client.post("/graphql", json={"query": query, "variables": variables})
    assert resp.status_code == 200
    return resp.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_list_repositories(client, fake_host):
    fake_host.repositories = [
        HostRepository(name="one", size=3, owner="octo"),
        HostRepository(name="two", size=9, owner="octo", parent_full_name="up/two"),
    ]

    body = _post(client, LIST_QUERY, token="abc")

    assert "errors" not in body
    assert body["data"]["listRepositories"] == [
        {"name": "one", "size": 3, "owner": "octo", "forkedFrom": None},
        {"name": "two", "size": 9, "owner": "octo", "forkedFrom": "up/two"},
    ]
    assert client.tokens == ["abc"]


def test_get_repository_details(client, fake_host):
    fake_host.repository = HostRepository(
        name="demo", size=50, owner="octo", is_private=True
    )
    fake_host.tree = {
        "": [file_entry("README.md"), dir_entry("deploy")],
        "deploy": [file_entry("deploy/app.yml")],
    }
    fake_host.contents = {"https://raw.example.test/deploy/app.yml": "replicas: 2\n"}
    fake_host.webhooks = [Webhook("https://ci.example.test/hook")]

    body = _post(client, DETAILS_QUERY, token="abc", owner="octo", repoName="demo")

    assert "errors" not in body
    assert body["data"]["getRepositoryDetails"] == {
        "name": "demo",
        "size": 50,
        "owner": "octo",
        "isPrivate": True,
        "numberOfFiles": 2,
        "ymlContent": "replicas: 2\n",
        "activeWebhooks": ["https://ci.example.test/hook"],
        "forkedFrom": None,
    }


def test_details_failure_returns_single_error_without_partial_data(client, fake_host):
    fake_host.failures["list_webhooks"] = HostRejectedError(404, "Not Found")

    body = _post(client, DETAILS_QUERY, token="abc", owner="octo", repoName="demo")

    assert body["data"] is None
    assert len(body["errors"]) == 1
    error = body["errors"][0]
    assert "Not Found" in error["message"]
    assert error["extensions"]["code"] == "AGGREGATION_FAILED"
    kinds = [cause["kind"] for cause in error["extensions"]["causes"]]
    assert kinds == ["AGGREGATION_FAILED", "HOST_REJECTED"]
    assert error["extensions"]["causes"][1]["status"] == 404


def test_list_failure_is_reported(client, fake_host):
    fake_host.failures["list_user_repositories"] = HostRejectedError(401, "Bad credentials")

    body = _post(client, LIST_QUERY, token="bad")

    assert body["data"] is None
    assert body["errors"][0]["extensions"]["code"] == "AGGREGATION_FAILED"
    assert "Bad credentials" in body["errors"][0]["message"]
