# ghdash/github_client.py
import logging
from typing import Union

import httpx

from ghdash.core.config import settings
from ghdash.core.errors import BadCredentialError, UnknownError
from ghdash.schemas import PullRequestEntry, UserProfile

logger = logging.getLogger(__name__)

# GitHub search never returns more than this many results for one query.
SEARCH_RESULT_LIMIT = 1000


class GitHubClient:
    def __init__(self, client_or_token: Union[httpx.AsyncClient, str], base_url: str | None = None):
        self.base_url = (base_url or settings.GITHUB_API_URL).rstrip("/")
        self.timeout = httpx.Timeout(settings.GITHUB_TIMEOUT_SECONDS)

        # If caller passed an AsyncClient, reuse it (tests and long-lived callers do this).
        if isinstance(client_or_token, httpx.AsyncClient):
            self.client = client_or_token
            self.headers = None
        else:
            # If caller passed a token string, build headers and use ad-hoc clients.
            self.client = None
            access_token = str(client_or_token)
            self.headers = {
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/vnd.github+json",
            }

    async def get_authenticated_user(self) -> UserProfile:
        resp = await self._request("GET", f"{self.base_url}/user")
        try:
            return UserProfile.from_github(resp.json())
        except (ValueError, KeyError) as e:
            raise UnknownError("Unexpected /user response from GitHub", resp.status_code) from e

    async def search_pull_requests(self, login: str, state: str = "open") -> list[PullRequestEntry]:
        """Pull requests authored by `login`, most recently updated first.

        Follows result pages until a short page, `total_count`, or the search
        API's result cap is reached.
        """
        per_page = settings.GHDASH_PR_PAGE_SIZE
        pulls: list[PullRequestEntry] = []
        gh_page = 1
        while True:
            params = {
                "q": f"is:pr state:{state} author:{login}",
                "sort": "updated",
                "order": "desc",
                "per_page": per_page,
                "page": gh_page,
            }
            resp = await self._request("GET", f"{self.base_url}/search/issues", params=params)
            try:
                data = resp.json()
                items = data.get("items", [])
                total = min(int(data.get("total_count", 0)), SEARCH_RESULT_LIMIT)
                pulls.extend(PullRequestEntry.from_search_item(item) for item in items)
            except (ValueError, KeyError) as e:
                raise UnknownError("Unexpected search response from GitHub", resp.status_code) from e

            if len(items) < per_page or len(pulls) >= total:
                break
            gh_page += 1
        return pulls

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Run one request and classify failures into BadCredentialError / UnknownError."""
        try:
            if self.client:
                resp = await self.client.request(method, url, timeout=self.timeout, **kwargs)
            else:
                async with httpx.AsyncClient(headers=self.headers, timeout=self.timeout) as client:
                    resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("GitHub API %s %s returned %s", method, url, status)
            if status in (401, 403):
                raise BadCredentialError("GitHub rejected the access token", status) from e
            raise UnknownError(f"GitHub API error: {status}", status) from e
        except httpx.HTTPError as e:
            logger.warning("GitHub API %s %s failed: %s", method, url, e)
            raise UnknownError(f"GitHub API request failed: {e}") from e
        return resp
