import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from scheduling_api.core import config
from scheduling_api.core.logging_config import configure_logging
from scheduling_api.database import Base, engine, ensure_appointment_schema
from scheduling_api.models import appointment, option, post  # noqa: F401
from scheduling_api.routes import appointment_routes, greeting_routes, post_routes, settings_routes

logger = logging.getLogger(__name__)

ROUTES = (
    (appointment_routes.router, '/medical/v1'),
    (settings_routes.router, '/custom/v1'),
    (greeting_routes.router, '/custom/v1'),
    (post_routes.router, '/custom/v1'),
)


def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_database()
    yield


def create_app() -> FastAPI:
    config.validate_runtime_config()
    configure_logging()

    app = FastAPI(title='Scheduling API', lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
        expose_headers=['X-Total-Count'],
    )

    @app.get('/')
    def root():
        return {'status': 'Scheduling API Running'}

    for router, prefix in ROUTES:
        app.include_router(router, prefix=prefix)

    return app


app = create_app()
