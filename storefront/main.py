"""
FastAPI Application Entry Point - Storefront
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from storefront import __version__
from storefront.config import settings
from storefront.database import init_db
from storefront.errors import register_error_handlers
from storefront.log import setup_logging
from storefront.ratelimit import RateLimitMiddleware, SlidingWindowLimiter
from storefront.api import admin, cart, contact, discounts, health, orders, products, reviews, wholesale

setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Storefront",
    description="Shop and back-office API: catalog, cart, orders, discounts and sales reports",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Best-effort abuse mitigation for login and checkout
rate_limiter = SlidingWindowLimiter(settings.RATE_LIMIT_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS)
app.add_middleware(RateLimitMiddleware, limiter=rate_limiter, prefixes=settings.RATE_LIMITED_PREFIXES)

register_error_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(products.router)
app.include_router(products.admin_router)
app.include_router(wholesale.router)
app.include_router(wholesale.admin_router)
app.include_router(cart.router)
app.include_router(orders.router)
app.include_router(orders.customer_router)
app.include_router(discounts.router)
app.include_router(discounts.admin_router)
app.include_router(reviews.router)
app.include_router(reviews.admin_router)
app.include_router(contact.router)
app.include_router(contact.admin_router)
app.include_router(admin.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.on_event("startup")
def startup_event():
    """Initialize database on startup"""
    logger.info("Starting %s...", settings.SERVICE_NAME)
    init_db()
    logger.info("Database initialized")
    logger.info("%s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down %s...", settings.SERVICE_NAME)
