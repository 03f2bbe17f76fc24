from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import ConnectionFailure
from app.core.config import get_settings
from app.core.lifespan import lifespan
from app.api.v1.routers.health import router as health_router
from app.api.v1.routers.recommendations import router as recommendations_router
from app.api.v1.routers.products import router as products_router
from app.api.v1.routers.cart import router as cart_router
from app.api.v1.routers.wishlist import router as wishlist_router
from app.api.v1.routers.users import router as users_router
from app.api.v1.routers.ai import router as ai_router
from app.core.logging import configure_logging

from fastapi.middleware.cors import CORSMiddleware
import logging

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV, e.g. "https://shop.example.com,https://admin.example.com"
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or ["http://localhost:3000"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Errors -------
# Covers AutoReconnect and ServerSelectionTimeoutError (subclasses)
@app.exception_handler(ConnectionFailure)
async def mongo_unavailable_handler(request: Request, exc: ConnectionFailure):
    logger.error(f"MongoDB unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "MongoDB unavailable (connection/TLS)."})

# ------- Routes -------
app.include_router(health_router)
app.include_router(recommendations_router)   # AI recommendations with fallbacks
app.include_router(products_router)          # catalog + admin CRUD
app.include_router(cart_router)
app.include_router(wishlist_router)
app.include_router(users_router)             # profile, orders
app.include_router(ai_router)                # Gemini key status / test
