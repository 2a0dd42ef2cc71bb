from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from app.utils.supabase_client_handlers import create_supabase_client, close_supabase_client
from app.configs.app_settings import settings
from app.custom_error import ValidationError, ServerError, STATUS_CODE_TO_ERROR_CODE
from app.routes.auth_routes import auth_router
from app.routes.onboarding_routes import onboarding_router
from app.routes.profile_routes import profile_router
from app.routes.worker_public_routes import worker_public_router
from app.routes.upload_routes import upload_router
from app.routes.report_routes import report_router
from app.routes.admin.admin_worker_routes import admin_worker_router
from app.routes.admin.admin_client_routes import admin_client_router
from app.routes.admin.admin_booking_routes import admin_booking_router
from app.routes.admin.admin_report_routes import admin_report_router
from app.routes.admin.admin_action_routes import admin_action_router
from app.routes.admin.admin_stats_routes import admin_stats_router
from app.routes.admin.admin_user_routes import admin_user_router
from app.routes.admin.admin_settings_routes import admin_settings_router
from app.routes.admin.admin_upload_routes import admin_upload_router
import logging

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # before yield = code to run during startup
    await create_supabase_client()
    logger.info("✅ Supabase async client initialized")

    yield
    # after yield = code to run during shutdown
    await close_supabase_client()
    logger.info("✅ Supabase client closed")


app = FastAPI(title="Marketplace API", version="1.0.0", lifespan=lifespan)


# Every error leaves the API as {"error": message, "code": CODE}.
# AppError subclasses carry their own code, plain HTTPExceptions (404 route not found, 405...) get one from the status.
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    code = getattr(exc, "code", None) or STATUS_CODE_TO_ERROR_CODE.get(exc.status_code, ServerError.code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail, "code": code}, headers=getattr(exc, "headers", None))


# Runs for invalid request bodies, query and path params
@app.exception_handler(RequestValidationError)
async def custom_request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", []) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else "Validation error"

    logger.info(f"Request validation failed on {request.url.path} - {message}")
    return JSONResponse(status_code=422, content={"error": message, "code": ValidationError.code, "errors": jsonable_encoder(errors)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
# the onboarding router goes before the public worker router so /workers/onboarding is not read as a worker id
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(onboarding_router, prefix=settings.API_V1_STR)
app.include_router(profile_router, prefix=settings.API_V1_STR)
app.include_router(worker_public_router, prefix=settings.API_V1_STR)
app.include_router(upload_router, prefix=settings.API_V1_STR)
app.include_router(report_router, prefix=settings.API_V1_STR)
app.include_router(admin_worker_router, prefix=settings.API_V1_STR)
app.include_router(admin_client_router, prefix=settings.API_V1_STR)
app.include_router(admin_booking_router, prefix=settings.API_V1_STR)
app.include_router(admin_report_router, prefix=settings.API_V1_STR)
app.include_router(admin_action_router, prefix=settings.API_V1_STR)
app.include_router(admin_stats_router, prefix=settings.API_V1_STR)
app.include_router(admin_user_router, prefix=settings.API_V1_STR)
app.include_router(admin_settings_router, prefix=settings.API_V1_STR)
app.include_router(admin_upload_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {"message": "Welcome to Marketplace API"}
