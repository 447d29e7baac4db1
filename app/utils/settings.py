# app/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", 2))
PRODUCT_HASH_KEY = os.getenv("PRODUCT_HASH_KEY", "Product")
STORE_BACKEND = os.getenv("STORE_BACKEND", "redis").lower()
STARTUP_WAIT_ATTEMPTS = int(os.getenv("STARTUP_WAIT_ATTEMPTS", 5))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
