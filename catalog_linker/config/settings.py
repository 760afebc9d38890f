"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Catalog export ---
CATALOG_EXPORT_PATH: str = os.getenv("CATALOG_EXPORT_PATH", "data/export_activity_library.tsv")

# --- Annotation ---
ANNOTATOR_INDEX_CACHE_SIZE: int = int(os.getenv("ANNOTATOR_INDEX_CACHE_SIZE", "64"))

# --- Starred store (Redis) ---
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
STARRED_STORAGE_KEY: str = os.getenv("STARRED_STORAGE_KEY", "refold-starred-activities")

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
