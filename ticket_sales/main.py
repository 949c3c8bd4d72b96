"""
Main FastAPI application for Ticket Sales Service.
Handles application startup, middleware, and routing.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticket_sales import __version__
from ticket_sales.api.v1.router import router as api_router
from ticket_sales.core.exceptions import ErrorCode, PurchaseError
from ticket_sales.db.database import db_manager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ErrorCode.INVALID_QUANTITY: 400,
    ErrorCode.PAYMENT_FAILED: 402,
    ErrorCode.TIER_NOT_FOUND: 404,
    ErrorCode.INSUFFICIENT_STOCK: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("Starting Ticket Sales Service...")

    try:
        await db_manager.initialize()
        await db_manager.create_tables()
        logger.info("Ticket Sales Service started successfully")
    except Exception as e:
        logger.error(f"Failed to start Ticket Sales Service: {e}")
        raise

    yield

    logger.info("Shutting down Ticket Sales Service...")
    await db_manager.close()
    logger.info("Ticket Sales Service shut down successfully")


# Create FastAPI application
app = FastAPI(
    title="Ticket Sales Service",
    description="Ticket tier catalog with oversell-safe purchases",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add request processing time to response headers."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(PurchaseError)
async def purchase_exception_handler(request: Request, exc: PurchaseError):
    """Translate purchase errors into their HTTP status."""
    status_code = ERROR_STATUS_CODES.get(exc.error_code, 500)
    if status_code >= 500:
        logger.error(f"Purchase failed: {exc}")
        details = {}
    else:
        logger.warning(f"Purchase rejected: {exc}")
        details = exc.details

    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": exc.error_code.value,
            "error_message": exc.message,
            "details": details,
            "timestamp": datetime.now().isoformat()
        }
    )


# HTTP exception handler
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTP exception handler for FastAPI HTTP exceptions."""
    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": "HTTP_ERROR",
            "error_message": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.now().isoformat()
        }
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_SERVER_ERROR",
            "error_message": "An internal server error occurred",
            "timestamp": datetime.now().isoformat()
        }
    )


app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": "Ticket Sales Service",
        "version": __version__,
        "status": "running",
        "endpoints": {
            "tickets": "/api/v1/tickets",
            "bookings": "/api/v1/bookings",
            "health": "/api/v1/health",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def simple_health_check():
    """Simple health check endpoint."""
    return {"status": "healthy", "service": "ticket_sales"}
