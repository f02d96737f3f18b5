# ghdash/services/session_service.py
import asyncio
import logging
from typing import Callable

from sqlalchemy import String, cast, delete, func, insert, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ghdash.core.db import Store, storage_errors
from ghdash.core.errors import TokenNotFoundError, UserNotSetError
from ghdash.core.log_utils import redact_token
from ghdash.github_client import GitHubClient
from ghdash.models import Token, User, UserRefresh
from ghdash.schemas import PullRequestEntry, UserProfile

logger = logging.getLogger(__name__)


def upsert_user(db: Session, profile: UserProfile) -> None:
    # GitHub logins are reusable: a cached row for another account id that still
    # holds this login gets it suffixed with its id so `users.login` stays unique.
    db.execute(
        update(User)
        .where(User.login == profile.login, User.id != profile.id)
        .values(login=User.login + ":" + cast(User.id, String))
        .execution_options(synchronize_session=False)
    )

    # Full overwrite of every column, keyed by GitHub id.
    stmt = sqlite_insert(User).values(
        id=profile.id,
        login=profile.login,
        name=profile.name,
        avatar_url=profile.avatar_url,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[User.id],
        set_={
            "login": stmt.excluded.login,
            "name": stmt.excluded.name,
            "avatar_url": stmt.excluded.avatar_url,
        },
    )
    db.execute(stmt)


def store_token(db: Session, token: str, user_id: int | None) -> None:
    # OR REPLACE drops an identical (token, user_id) row and writes a fresh one,
    # so a re-submitted token gets a new, highest id.
    db.execute(insert(Token).prefix_with("OR REPLACE").values(token=token, user_id=user_id))


def ensure_refresh_row(db: Session, user_id: int) -> None:
    db.execute(
        sqlite_insert(UserRefresh)
        .values(id=user_id, refresh_at=None)
        .on_conflict_do_nothing(index_elements=[UserRefresh.id])
    )


def _latest_token_id():
    return select(func.max(Token.id)).scalar_subquery()


class SessionService:
    """Active credential and current user, resolved from the local store.

    The active token is the `tokens` row with the highest id. Only
    `identify`, `set_active_token` and `fetch_pull_requests` talk to GitHub.
    """

    def __init__(self, store: Store, client_factory: Callable[[str], GitHubClient] = GitHubClient):
        self.store = store
        self.client_factory = client_factory

    async def identify(self, token: str) -> UserProfile:
        client = self.client_factory(token)
        user = await client.get_authenticated_user()
        logger.debug("Token %s belongs to %s", redact_token(token), user.login)
        return user

    async def set_active_token(self, token: str) -> UserProfile:
        logger.info("Setting token %s", redact_token(token))
        user = await self.identify(token)
        await asyncio.to_thread(self._store_user_and_token, user, token)
        logger.info("User %s (%s) and token have been set", user.login, user.id)
        return user

    def _store_user_and_token(self, user: UserProfile, token: str) -> None:
        with self.store.session() as db:
            with storage_errors("store user and token"):
                try:
                    upsert_user(db, user)
                    store_token(db, token, user.id)
                    ensure_refresh_row(db, user.id)
                    db.commit()
                except Exception:
                    db.rollback()
                    raise

    def get_active_token(self) -> str:
        with self.store.session() as db:
            with storage_errors("read active token"):
                token = db.execute(
                    select(Token.token).where(Token.id == _latest_token_id())
                ).scalar_one_or_none()

        if token is None:
            raise TokenNotFoundError()
        return token

    def get_current_user(self) -> UserProfile:
        linked_user = select(Token.user_id).where(Token.id == _latest_token_id()).scalar_subquery()
        with self.store.session() as db:
            with storage_errors("read current user"):
                user = db.execute(select(User).where(User.id == linked_user)).scalar_one_or_none()

        if user is None:
            logger.debug("No user linked to the active token")
            raise UserNotSetError()
        return UserProfile.model_validate(user)

    def clear_active_token(self) -> int:
        """Forget every stored token (logout). Returns the number of rows removed."""
        with self.store.session() as db:
            with storage_errors("clear tokens"):
                try:
                    removed = db.execute(
                        delete(Token).execution_options(synchronize_session=False)
                    ).rowcount
                    db.commit()
                except Exception:
                    db.rollback()
                    raise

        logger.info("Cleared %d stored token(s)", removed)
        return removed

    async def fetch_pull_requests(self, token: str | None = None) -> list[PullRequestEntry]:
        """Open pull requests authored by the token's owner, straight from GitHub.

        Defaults to the active token. The cached login is used when the token is
        the active one; otherwise the owner is looked up with `identify`.
        """
        token, login = await asyncio.to_thread(self._cached_login, token)
        if login is None:
            login = (await self.identify(token)).login

        client = self.client_factory(token)
        pulls = await client.search_pull_requests(login)
        logger.info("Fetched %d pull request(s) for %s", len(pulls), login)
        return pulls

    def _cached_login(self, token: str | None) -> tuple[str, str | None]:
        try:
            active = self.get_active_token()
        except TokenNotFoundError:
            if token is None:
                raise
            return token, None

        if token is not None and token != active:
            return token, None
        try:
            return active, self.get_current_user().login
        except UserNotSetError:
            return active, None
