import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DATABASE_PATH = os.getenv("DATABASE_PATH", "../data/airsense.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", str(Path(__file__).parent.parent.parent / "logs"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")]

# Auth
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))

# Shared key for gateways posting readings; ingestion is open when unset
INGEST_API_KEY = os.getenv("INGEST_API_KEY") or None

# Live feed from the local sensor gateway (Node-RED)
LIVE_FEED_URL = os.getenv("LIVE_FEED_URL", "ws://localhost:1880/ws/sensors")
LIVE_FEED_AUTO_CONNECT = os.getenv("LIVE_FEED_AUTO_CONNECT", "true").lower() == "true"
LIVE_FEED_RECONNECT_INTERVAL = float(os.getenv("LIVE_FEED_RECONNECT_INTERVAL", "2.0"))
LIVE_FEED_MAX_RECONNECT_ATTEMPTS = int(os.getenv("LIVE_FEED_MAX_RECONNECT_ATTEMPTS", "5"))
LIVE_FEED_SENSOR_ID = os.getenv("LIVE_FEED_SENSOR_ID", "sensor_001")
