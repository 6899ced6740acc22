# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.database import ensure_indexes, get_db, ping
from app.routes.auth import auth_router
from app.routes.bookings import booking_router
from app.routes.services import service_router
from app.routes.upload import upload_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="BookIt API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api/auth")
app.include_router(service_router, prefix="/api/services")
app.include_router(booking_router, prefix="/api/bookings")
app.include_router(upload_router, prefix="/api/upload")


@app.get("/")
async def root():
    return {"message": "BookIt API", "status": "running"}


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# DB connectivity check
@app.on_event("startup")
async def startup_db_check():
    db = get_db()
    if await ping(db):
        await ensure_indexes(db)
        logger.info("MongoDB connected successfully.")
