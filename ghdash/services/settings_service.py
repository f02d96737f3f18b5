# ghdash/services/settings_service.py
from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from ghdash.core.db import Store, storage_errors
from ghdash.models import Setting


class SettingsService:
    """Process-wide key/value settings kept in the `settings` table."""

    def __init__(self, store: Store):
        self.store = store

    def get(self, key: str, default: str | None = None) -> str | None:
        with self.store.session() as db:
            with storage_errors(f"read setting {key!r}"):
                value = db.execute(select(Setting.value).where(Setting.key == key)).scalar_one_or_none()
        return default if value is None else value

    def set(self, key: str, value: str) -> None:
        stmt = sqlite_insert(Setting).values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(index_elements=[Setting.key], set_={"value": stmt.excluded.value})
        with self.store.session() as db:
            with storage_errors(f"write setting {key!r}"):
                db.execute(stmt)
                db.commit()

    def delete(self, key: str) -> bool:
        with self.store.session() as db:
            with storage_errors(f"delete setting {key!r}"):
                removed = db.execute(
                    delete(Setting).where(Setting.key == key).execution_options(synchronize_session=False)
                ).rowcount
                db.commit()
        return removed > 0

    def all(self) -> dict[str, str]:
        with self.store.session() as db:
            with storage_errors("read settings"):
                rows = db.execute(select(Setting.key, Setting.value).order_by(Setting.key)).all()
        return {key: value for key, value in rows}
