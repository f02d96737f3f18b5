# ghdash/core/db.py
import enum
import logging
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base

from ghdash.core.errors import StorageError, StoreStateError

logger = logging.getLogger(__name__)

# SQLAlchemy Base class (for our models)
Base = declarative_base()


class StoreState(enum.Enum):
    UNCONNECTED = "unconnected"
    CONNECTED = "connected"
    CLOSED = "closed"


def _enable_foreign_keys(dbapi_conn, _record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def _make_engine(url: str):
    # Sessions are opened from worker threads (asyncio.to_thread) as well as the loop thread.
    engine = create_engine(url, pool_pre_ping=True, connect_args={"check_same_thread": False})
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


class Store:
    """File-backed SQLite store.

    Lifecycle is one-way: UNCONNECTED -> CONNECTED -> CLOSED. Schema creation
    happens in `ensure_schema()` and is independent of the lifecycle, so it can
    run before `connect()`.
    """

    def __init__(self, path):
        self.path = Path(path)
        self.url = f"sqlite:///{self.path}"
        self._engine = None
        self._session_factory = None
        self._state = StoreState.UNCONNECTED

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is StoreState.CONNECTED

    def ensure_schema(self) -> bool:
        """Create the database file and all tables if the file is missing.

        Returns True when the schema was created, False when the file already
        existed (nothing is written in that case). A failure removes the
        partially created file and raises StorageError.
        """
        if self.path.exists():
            return False

        # Models must be registered on Base.metadata before create_all.
        import ghdash.models  # noqa: F401

        self.path.parent.mkdir(parents=True, exist_ok=True)
        engine = _make_engine(self.url)
        try:
            with engine.begin() as conn:
                Base.metadata.create_all(bind=conn)
        except SQLAlchemyError as e:
            engine.dispose()
            self.path.unlink(missing_ok=True)
            raise StorageError(f"Unable to create database schema at {self.path}") from e
        engine.dispose()

        logger.info("Database created at %s", self.path)
        return True

    def connect(self) -> None:
        if self._state is StoreState.CONNECTED:
            raise StoreStateError("Attempting to connect to connected database")
        if self._state is StoreState.CLOSED:
            raise StoreStateError("Attempting to reconnect a closed database")

        self._engine = _make_engine(self.url)
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self._engine
        )
        self._state = StoreState.CONNECTED
        logger.debug("Connected to %s", self.url)

    def pool(self) -> sessionmaker:
        if self._state is not StoreState.CONNECTED:
            raise StoreStateError(
                f"Attempting to obtain pool for {self._state.value} database"
            )
        return self._session_factory

    @contextmanager
    def session(self):
        db = self.pool()()
        try:
            yield db
        finally:
            db.close()

    def close(self) -> None:
        if self._state is not StoreState.CONNECTED:
            raise StoreStateError(f"Attempting to close {self._state.value} database")
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._state = StoreState.CLOSED


@contextmanager
def storage_errors(action: str):
    """Re-raise SQLAlchemy failures as StorageError naming the failed action."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Storage failure while trying to %s: %s", action, e)
        raise StorageError(f"Unable to {action}") from e
