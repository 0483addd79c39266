"""Server configuration values."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
DATABASE_URL = os.getenv("CHAT_DATABASE_URL", f"sqlite:///{BASE_DIR / 'chat_room.db'}")

# Sweep interval and staleness threshold are independent tunables.
SWEEP_INTERVAL_SECONDS = float(os.getenv("CHAT_SWEEP_INTERVAL_SECONDS", "15"))
STALE_AFTER_SECONDS = float(os.getenv("CHAT_STALE_AFTER_SECONDS", "10"))

HOST = os.getenv("CHAT_HOST", "0.0.0.0")
PORT = int(os.getenv("CHAT_PORT", "5000"))

LOG_FILE = Path(os.getenv("CHAT_LOG_FILE", str(BASE_DIR / "server.log")))
LOG_LEVEL = os.getenv("CHAT_LOG_LEVEL", "INFO")

BROADCAST = "Todos"
JOIN_TEXT = "entra na sala..."
LEAVE_TEXT = "sai da sala..."
