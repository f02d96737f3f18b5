# ghdash/schemas.py
from datetime import datetime
from pydantic import BaseModel


def to_epoch(value: str | None) -> int | None:
    """GitHub ISO-8601 timestamp ("2024-05-01T12:00:00Z") to epoch seconds."""
    if not value:
        return None
    return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp())


class UserProfile(BaseModel):
    id: int
    login: str
    name: str
    avatar_url: str

    class Config:
        from_attributes = True

    @classmethod
    def from_github(cls, data: dict) -> "UserProfile":
        # `name` is null on GitHub accounts that never set one
        return cls(
            id=data["id"],
            login=data["login"],
            name=data.get("name") or data["login"],
            avatar_url=data.get("avatar_url") or "",
        )


class PullRequestEntry(BaseModel):
    id: int
    number: int
    title: str
    author: str
    author_id: int
    url: str
    repo_owner: str
    repo_name: str
    state: str
    created_at: int
    updated_at: int
    closed_at: int | None = None
    is_draft: bool = False
    review_decision: str = ""
    merged_at: int | None = None

    @classmethod
    def from_search_item(cls, item: dict) -> "PullRequestEntry":
        """Build an entry from one item of GitHub's /search/issues response."""
        # repository_url: https://api.github.com/repos/{owner}/{name}
        owner, name = item["repository_url"].rstrip("/").split("/")[-2:]
        user = item.get("user") or {}
        pr = item.get("pull_request") or {}
        return cls(
            id=item["id"],
            number=item["number"],
            title=item.get("title") or "",
            author=user.get("login", ""),
            author_id=user.get("id", 0),
            url=item.get("html_url") or "",
            repo_owner=owner,
            repo_name=name,
            state=item.get("state") or "open",
            created_at=to_epoch(item.get("created_at")) or 0,
            updated_at=to_epoch(item.get("updated_at")) or 0,
            closed_at=to_epoch(item.get("closed_at")),
            is_draft=bool(item.get("draft", False)),
            merged_at=to_epoch(pr.get("merged_at")),
        )
