import os
from pathlib import Path

# Dataset file read once at startup
DATA_PATH = Path(os.getenv("TITANIC_DATA_PATH", "data/tested.csv"))

LOG_LEVEL = os.getenv("TITANIC_LOG_LEVEL", "INFO")

# Default row count for /api/data/preview
PREVIEW_LIMIT = int(os.getenv("TITANIC_PREVIEW_LIMIT", "10"))
