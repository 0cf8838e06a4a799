# tilbrowser/config.py
import os
from pathlib import Path


# Root of the note tree: data/til/<category>/<slug>.md
DATA_DIR = Path(os.environ.get("TIL_DATA_DIR", str(Path.cwd() / "data" / "til")))

# The catalog is rebuilt from disk after this many seconds (1 hour).
CACHE_TTL_SECONDS = float(os.environ.get("TIL_CACHE_TTL_SECONDS", "3600"))

# Base URL used for the "View source" link on rendered notes.
SOURCE_URL = os.environ.get(
    "TIL_SOURCE_URL", "https://github.com/jbranchaud/til/blob/master"
).rstrip("/")

LOG_LEVEL = os.environ.get("TIL_LOG_LEVEL", "INFO").upper()

HOST = os.environ.get("TIL_HOST", "127.0.0.1")
PORT = int(os.environ.get("TIL_PORT", "8000"))
