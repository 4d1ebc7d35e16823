import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app import models  # noqa: F401  (registers every table on Base.metadata)
from app.config import get_settings
from app.database import Base, SessionLocal, engine
from app.services.gateway import DataGateway, GatewayError
from app.utils.security import hash_password

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _seed_admin_user() -> None:
    """Create the default admin account when no admin exists yet."""
    db = SessionLocal()
    try:
        gateway = DataGateway(db)
        if gateway.count("users", eq={"role": "admin"}) > 0:
            logger.info("Admin user present, skipping seed")
            return
        gateway.insert(
            "users",
            {
                "email": settings.ADMIN_EMAIL,
                "password_hash": hash_password(settings.ADMIN_PASSWORD),
                "first_name": "Administrador",
                "last_name": "Óptica",
                "role": "admin",
                "is_active": True,
            },
        )
        logger.info("Default admin created: %s", settings.ADMIN_EMAIL)
    except GatewayError:
        logger.exception("Could not seed the default admin user")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception("Could not create database tables")
        raise
    _seed_admin_user()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.warning(
        "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/api/health")
def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from app.routers import auth  # noqa: E402

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])

from app.routers import dashboard  # noqa: E402

app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])

from app.routers import clients  # noqa: E402

app.include_router(clients.router, prefix="/api/clients", tags=["Clientes"])

from app.routers import contracts  # noqa: E402

app.include_router(contracts.router, prefix="/api/contracts", tags=["Contratos"])

# Inventory
from app.routers import crystals, frames  # noqa: E402

app.include_router(frames.router, prefix="/api/frames", tags=["Armaduras"])
app.include_router(crystals.router, prefix="/api/crystals", tags=["Cristales"])

from app.routers import tasks  # noqa: E402

app.include_router(tasks.router, prefix="/api/tasks", tags=["Tareas"])

from app.routers import users  # noqa: E402

app.include_router(users.router, prefix="/api/users", tags=["Usuarios"])

# Exportación (Excel)
from app.routers import exportacion  # noqa: E402

app.include_router(exportacion.router, prefix="/api/exportar", tags=["Exportación"])
