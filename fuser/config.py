import os
from dotenv import load_dotenv

load_dotenv()

# Remote fusion service - loaded from .env
FUSER_API_URL = os.getenv("FUSER_API_URL", "https://api.dinoherd.cc")
FUSER_API_TOKEN = os.getenv("FUSER_API_TOKEN")
FUSER_POLL_INTERVAL = float(os.getenv("FUSER_POLL_INTERVAL", "2"))
FUSER_MAX_POLL_ATTEMPTS = int(os.getenv("FUSER_MAX_POLL_ATTEMPTS", "150"))

# Grid bounds (rows and columns are bounded independently)
MIN_COLUMNS = 1
MAX_COLUMNS = 8
MIN_ROWS = 1
MAX_ROWS = 10

# Border bounds
MIN_BORDER_WIDTH = 0
MAX_BORDER_WIDTH = 8

# Defaults for a fresh composition
DEFAULT_COLUMNS = 3
DEFAULT_ROWS = 2
DEFAULT_BORDER_WIDTH = 2
DEFAULT_BORDER_COLOR = "#000000"

# Supplementary uploads are audio tracks
ALLOWED_UPLOAD_SUFFIXES = (".mp3",)
