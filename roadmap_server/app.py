"""FastAPI application serving roadmap progress."""

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roadmap.backends.base import ProgressBackend
from roadmap.config import configure_logging, get_cors_origins, get_db_path
from roadmap.models.roadmap_graph import Roadmap
from roadmap.models.user_profile import UserProfile
from roadmap.sdk.roadmap_loader import load_roadmap
from roadmap.store import ProgressStore
from roadmap_server.db import open_progress_backend
from roadmap_server.progress_routes import router as progress_router
from roadmap_server.roadmap_routes import router as roadmap_router

load_dotenv()  # load environment variables from .env file

VERSION = "0.1.0"


def create_app(
    backend: ProgressBackend | None = None,
    roadmap: Roadmap | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        backend: progress storage; the sqlite file at ROADMAP_DB_PATH if None
        roadmap: graph to track; loaded from disk if None
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open storage and load the roadmap on startup, drain writes on shutdown."""
        app.state.backend = backend or await open_progress_backend()
        app.state.roadmap = roadmap or load_roadmap()
        app.state.user = UserProfile()
        store = ProgressStore(app.state.backend)
        await store.initialize_nodes(app.state.roadmap.nodes)
        app.state.store = store
        yield
        await store.flush()
        await app.state.backend.close()

    app = FastAPI(
        title="Roadmap Progress API",
        description="Local API for roadmap topic status and progress statistics",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(progress_router, prefix="/api")
    app.include_router(roadmap_router, prefix="/api")

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {
            "status": "ok",
            "version": VERSION,
            "progress_db": str(get_db_path()),
            "endpoints": {
                "progress": "/api/progress",
                "roadmap": "/api/roadmap",
                "stats": "/api/roadmap/stats",
                "user": "/api/user",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(app, host="127.0.0.1", port=8000)
