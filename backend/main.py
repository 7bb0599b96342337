# backend/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from config import settings
from database import init_db
from utils.exceptions import register_exception_handlers
from utils.request_tracking import RequestCounter, install_request_tracking
from utils.sessions import build_session_store

# Routers
from routes.auth import router as auth_router
from routes.employees import router as employees_router
from routes.account import router as account_router
from routes.web_employees import router as web_employees_router
from routes.dashboard import router as dashboard_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables and the bootstrap admin account
    init_db()
    logger.info("Database initialized")
    yield


def create_app(*, initialize_db: bool = True) -> FastAPI:
    app = FastAPI(
        title="Employees API",
        version="1.0.0",
        lifespan=lifespan if initialize_db else None,
    )

    # Process-wide state owned by the app
    app.state.request_counter = RequestCounter()
    app.state.session_store = build_session_store()

    # CORS Configuration
    origins = [
        "http://localhost:4200",
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_tracking(app)
    register_exception_handlers(app)

    # Router registration
    app.include_router(auth_router)
    app.include_router(employees_router)
    app.include_router(account_router)
    app.include_router(web_employees_router)
    app.include_router(dashboard_router)

    @app.get("/")
    def read_root():
        return {"message": "Employees API is running"}

    return app


app = create_app()
