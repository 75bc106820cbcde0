# bakery/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi import Depends, FastAPI, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException

from bakery.core.config import get_settings
from bakery.core.errors import AppError
from bakery.database import Database, get_database
from bakery.repositories.admin_repo import AdminUserRepository
from bakery.services.admin_service import AdminService

# Import models so SQLModel metadata is populated before create_all()
from bakery.models import admin_user as _admin_user_models  # noqa: F401
from bakery.models import branch as _branch_models  # noqa: F401
from bakery.models import category as _category_models  # noqa: F401
from bakery.models import customer as _customer_models  # noqa: F401
from bakery.models import order as _order_models  # noqa: F401
from bakery.models import payment_method as _payment_method_models  # noqa: F401
from bakery.models import product as _product_models  # noqa: F401

# Routers
from bakery.routers.admin import router as admin_router
from bakery.routers.branches import router as branches_router
from bakery.routers.categories import router as categories_router
from bakery.routers.orders import router as orders_router
from bakery.routers.payment_methods import router as payment_methods_router
from bakery.routers.products import router as products_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
      - Create the first admin account if configured and none exists.

    Shutdown:
      - Dispose the engine's connection pool.
    """
    db = get_database()
    logger.info("🔄 Startup: Connecting to database...")
    try:
        db.create_all()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise

    with db.session() as session:
        admin = AdminService(AdminUserRepository()).ensure_initial_admin(
            session,
            settings.FIRST_ADMIN_USERNAME,
            settings.FIRST_ADMIN_EMAIL,
            settings.FIRST_ADMIN_PASSWORD,
        )
        if admin is not None:
            logger.info(f"👤 Startup: created initial admin '{admin.username}'.")

    yield

    db.dispose()
    logger.info("👋 Shutdown: DB connections closed.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
)


# --- CORS configuration ---

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error rendering ---


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    body = {"success": False, "error": exc.code, "message": exc.message}
    if exc.details:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(categories_router, prefix=settings.API_PREFIX)
app.include_router(branches_router, prefix=settings.API_PREFIX)
app.include_router(payment_methods_router, prefix=settings.API_PREFIX)
app.include_router(orders_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {"status": "ok", "service": "bakery-api"}


@app.get(f"{settings.API_PREFIX}/health")
def health(db: Database = Depends(get_database)):
    """Health check endpoint; verifies the database answers."""
    db.ping()
    return {"success": True, "message": "Server is running", "database": "ok"}
