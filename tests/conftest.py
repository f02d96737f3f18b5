import httpx
import pytest

from ghdash.core.db import Store
from ghdash.github_client import GitHubClient

API_URL = "https://api.github.test"

OCTO = {
    "id": 42,
    "login": "octo",
    "name": "Octo Cat",
    "avatar_url": "https://avatars.example.com/u/42",
}
HUBOT = {
    "id": 7,
    "login": "hubot",
    "name": "Hubot",
    "avatar_url": "https://avatars.example.com/u/7",
}


def make_pr_item(item_id, number, author=OCTO, repo="octo/widgets", updated_at="2024-05-01T12:00:00Z", **extra):
    item = {
        "id": item_id,
        "number": number,
        "title": f"PR #{number}",
        "user": {"login": author["login"], "id": author["id"]},
        "html_url": f"https://github.com/{repo}/pull/{number}",
        "repository_url": f"https://api.github.com/repos/{repo}",
        "state": "open",
        "created_at": "2024-04-30T08:00:00Z",
        "updated_at": updated_at,
        "closed_at": None,
        "draft": False,
        "pull_request": {"merged_at": None},
    }
    item.update(extra)
    return item


class FakeGitHub:
    """In-process stand-in for the GitHub REST API.

    Tokens map to profiles in `users`; unknown tokens get 403. The tokens
    "network-down" and "server-error" simulate transport and 5xx failures.
    """

    def __init__(self):
        self.users = {}
        self.pulls = {}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        token = request.headers.get("Authorization", "").removeprefix("Bearer ")
        if token == "network-down":
            raise httpx.ConnectError("connection refused", request=request)
        if token == "server-error":
            return httpx.Response(500, json={"message": "Server Error"})

        profile = self.users.get(token)
        if profile is None:
            return httpx.Response(403, json={"message": "Bad credentials"})
        if request.url.path == "/user":
            return httpx.Response(200, json=profile)
        if request.url.path == "/search/issues":
            items = self.pulls.get(profile["login"], [])
            per_page = int(request.url.params.get("per_page", 30))
            page = int(request.url.params.get("page", 1))
            chunk = items[(page - 1) * per_page:page * per_page]
            return httpx.Response(200, json={"total_count": len(items), "items": chunk})
        return httpx.Response(404, json={"message": "Not Found"})

    def client_factory(self, token: str) -> GitHubClient:
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler),
            headers={"Authorization": f"Bearer {token}"},
        )
        return GitHubClient(client, base_url=API_URL)


@pytest.fixture
def github():
    fake = FakeGitHub()
    fake.users["abc123"] = dict(OCTO)
    return fake


@pytest.fixture
def store(tmp_path):
    s = Store(tmp_path / "ghdash.db")
    s.ensure_schema()
    s.connect()
    yield s
    if s.is_connected:
        s.close()
