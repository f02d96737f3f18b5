# ghdash/main.py
import logging

from fastapi import FastAPI

from ghdash.api.pull_routes import router as pull_routes_router
from ghdash.api.session_routes import router as session_routes_router
from ghdash.core.config import settings
from ghdash.core.db import Store
from ghdash.core.log_utils import configure_logging
from ghdash.github_client import GitHubClient
from ghdash.services.pull_request_service import PullRequestService
from ghdash.services.session_service import SessionService

logger = logging.getLogger(__name__)


def create_app(store: Store | None = None, client_factory=GitHubClient) -> FastAPI:
    store = store or Store(settings.GHDASH_DB_PATH)
    sessions = SessionService(store, client_factory=client_factory)

    app = FastAPI(title="ghdash backend")
    app.state.store = store
    app.state.sessions = sessions
    app.state.pulls = PullRequestService(store, sessions)

    # Include routers
    app.include_router(session_routes_router)
    app.include_router(pull_routes_router)

    @app.on_event("startup")
    def on_startup():
        configure_logging(settings.LOG_LEVEL)
        # Schema is only created for a missing database file; existing files are left as-is.
        store.ensure_schema()
        store.connect()
        logger.info("Store ready at %s", store.path)

    @app.on_event("shutdown")
    def on_shutdown():
        if store.is_connected:
            store.close()

    @app.get("/health")
    async def health():
        return {"status": "ok", "store": store.state.value}

    return app


app = create_app()
