import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from airsense.config import (
    CORS_ORIGINS,
    LIVE_FEED_AUTO_CONNECT,
    LIVE_FEED_MAX_RECONNECT_ATTEMPTS,
    LIVE_FEED_RECONNECT_INTERVAL,
    LIVE_FEED_SENSOR_ID,
    LIVE_FEED_URL,
)
from airsense.database import create_tables
from airsense.logging_config import setup_logging
from airsense.routes.auth import router as auth_router
from airsense.routes.buildings import router as buildings_router
from airsense.routes.dashboard import router as dashboard_router
from airsense.routes.live import router as live_router
from airsense.routes.rooms import router as rooms_router
from airsense.routes.sensor_data import router as sensor_data_router
from airsense.sensors import LiveFeedClient

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="AirSense", version="0.1.0")
logger.info("FastAPI app created")

# Include routers
app.include_router(auth_router)
app.include_router(buildings_router)
app.include_router(rooms_router)
app.include_router(sensor_data_router)
app.include_router(live_router)
app.include_router(dashboard_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# One gateway connection for the whole app; connected on startup
app.state.live_feed = LiveFeedClient(
    LIVE_FEED_URL,
    sensor_id=LIVE_FEED_SENSOR_ID,
    auto_connect=LIVE_FEED_AUTO_CONNECT,
    reconnect_interval=LIVE_FEED_RECONNECT_INTERVAL,
    max_reconnect_attempts=LIVE_FEED_MAX_RECONNECT_ATTEMPTS,
)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    logger.info("AirSense starting up")
    await create_tables()
    await app.state.live_feed.start()
    logger.info("API docs available at http://localhost:8000/docs")


@app.on_event("shutdown")
async def shutdown_event():
    await app.state.live_feed.aclose()
    logger.info("AirSense shut down")


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
