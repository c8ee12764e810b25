import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from gps_tracking.config import Settings, get_settings
from gps_tracking.database import Database
from gps_tracking.routers.auth import router as auth_router
from gps_tracking.routers.drivers import router as drivers_router
from gps_tracking.routers.vehicles import router as vehicles_router
from gps_tracking.seed import seed_data
from gps_tracking.storage import DocumentStore
from gps_tracking.utils.exceptions import register_exception_handlers

SERVICE_NAME = "gps-tracking-api"
VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    db: Database = app.state.db
    await db.create_tables()
    async with db.session_factory() as session:
        await seed_data(session, app.state.settings)
    yield
    await db.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="GPS Tracking API",
        description="API documentation for GPS Tracking system",
        version=VERSION,
        docs_url=settings.docs_url,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url)
    app.state.documents = DocumentStore(settings.upload_dir)
    os.makedirs(settings.upload_dir, exist_ok=True)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/api")
    app.include_router(drivers_router, prefix="/api")
    app.include_router(vehicles_router, prefix="/api")

    app.mount(
        settings.uploads_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health_check():
        return {"status": "success", "service": SERVICE_NAME, "version": VERSION}

    return app
