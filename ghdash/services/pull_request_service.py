# ghdash/services/pull_request_service.py
import asyncio
import logging
import time

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ghdash.core.config import settings
from ghdash.core.db import Store, storage_errors
from ghdash.models import Issue, PullRequest, UserIssue, UserRefresh
from ghdash.schemas import PullRequestEntry, UserProfile
from ghdash.services.session_service import SessionService

logger = logging.getLogger(__name__)

_ISSUE_FIELDS = (
    "number", "title", "author", "author_id", "url", "repo_owner", "repo_name",
    "state", "created_at", "updated_at", "closed_at",
)
_PULL_FIELDS = ("is_draft", "review_decision", "merged_at")


def upsert_pull_request(db: Session, entry: PullRequestEntry) -> None:
    """Write one entry into `issues` + `pull_requests`. `last_viewed` is local and kept."""
    issue_values = {f: getattr(entry, f) for f in _ISSUE_FIELDS}
    stmt = sqlite_insert(Issue).values(id=entry.id, is_pull_request=True, **issue_values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Issue.id],
        set_={f: stmt.excluded[f] for f in (*_ISSUE_FIELDS, "is_pull_request")},
    )
    db.execute(stmt)

    pull_values = {f: getattr(entry, f) for f in _PULL_FIELDS}
    stmt = sqlite_insert(PullRequest).values(id=entry.id, **pull_values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[PullRequest.id],
        set_={f: stmt.excluded[f] for f in _PULL_FIELDS},
    )
    db.execute(stmt)


class PullRequestService:
    def __init__(self, store: Store, sessions: SessionService):
        self.store = store
        self.sessions = sessions

    async def sync_pull_requests(self, now: int | None = None) -> list[PullRequestEntry]:
        """Fetch the current user's open pull requests and reconcile them into the cache.

        Entries are upserted and linked to the user; pull requests the user was
        linked to that are no longer listed get unlinked. The user's
        `refresh_at` is pushed forward by the configured refresh interval.
        """
        user = await asyncio.to_thread(self.sessions.get_current_user)
        entries = await self.sessions.fetch_pull_requests()
        now = int(time.time()) if now is None else now
        unlinked = await asyncio.to_thread(self._reconcile, user, entries, now)

        logger.info(
            "Synced %d pull request(s) for %s, unlinked %d", len(entries), user.login, unlinked
        )
        return entries

    def _reconcile(self, user: UserProfile, entries: list[PullRequestEntry], now: int) -> int:
        fetched_ids = [e.id for e in entries]
        with self.store.session() as db:
            with storage_errors("reconcile pull requests"):
                try:
                    for entry in entries:
                        upsert_pull_request(db, entry)
                        db.execute(
                            sqlite_insert(UserIssue)
                            .values(user_id=user.id, issue_id=entry.id)
                            .on_conflict_do_nothing()
                        )

                    stale = select(PullRequest.id).where(PullRequest.id.not_in(fetched_ids))
                    unlinked = db.execute(
                        delete(UserIssue)
                        .where(UserIssue.user_id == user.id)
                        .where(UserIssue.issue_id.in_(stale))
                        .execution_options(synchronize_session=False)
                    ).rowcount

                    refresh = sqlite_insert(UserRefresh).values(
                        id=user.id, refresh_at=now + settings.GHDASH_REFRESH_INTERVAL
                    )
                    db.execute(
                        refresh.on_conflict_do_update(
                            index_elements=[UserRefresh.id],
                            set_={"refresh_at": refresh.excluded.refresh_at},
                        )
                    )
                    db.commit()
                except Exception:
                    db.rollback()
                    raise
        return unlinked

    def list_cached_pull_requests(self, user_id: int | None = None) -> list[PullRequestEntry]:
        if user_id is None:
            user_id = self.sessions.get_current_user().id

        query = (
            select(Issue, PullRequest)
            .join(PullRequest, PullRequest.id == Issue.id)
            .join(UserIssue, UserIssue.issue_id == Issue.id)
            .where(UserIssue.user_id == user_id)
            .order_by(Issue.updated_at.desc(), Issue.id.desc())
        )
        with self.store.session() as db:
            with storage_errors("read cached pull requests"):
                rows = db.execute(query).all()

        return [
            PullRequestEntry(
                id=issue.id,
                **{f: getattr(issue, f) for f in _ISSUE_FIELDS},
                **{f: getattr(pull, f) for f in _PULL_FIELDS},
            )
            for issue, pull in rows
        ]

    def mark_viewed(self, issue_id: int, when: int | None = None) -> bool:
        """Stamp `last_viewed` on a cached issue. False when the issue is not cached."""
        when = int(time.time()) if when is None else when
        with self.store.session() as db:
            with storage_errors("mark issue viewed"):
                updated = db.execute(
                    update(Issue)
                    .where(Issue.id == issue_id)
                    .values(last_viewed=when)
                    .execution_options(synchronize_session=False)
                ).rowcount
                db.commit()
        return updated > 0
