import os
from dotenv import load_dotenv

load_dotenv()  # Load from .env file


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Storage
DATA_DIR = os.getenv("ECHO_DATA_DIR", "data")
DATABASE_NAME = os.getenv("ECHO_DATABASE_NAME", "echo.db")
DATABASE_IN_MEMORY = _env_bool("ECHO_DATABASE_IN_MEMORY", "false")
SEED_SAMPLE_DATA = _env_bool("ECHO_SEED_SAMPLE_DATA", "true")

# Logging
LOG_LEVEL = os.getenv("ECHO_LOG_LEVEL", "INFO").upper()

# Credentials (held in memory only, never written to the database)
CLAUDE_API_KEY = os.getenv("CLAUDE_API_KEY")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Claude
CLAUDE_BASE_URL = os.getenv("CLAUDE_BASE_URL", "https://api.anthropic.com/v1")
CLAUDE_API_VERSION = os.getenv("CLAUDE_API_VERSION", "2023-06-01")
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-3-7-sonnet-20250219")
CLAUDE_MAX_TOKENS = int(os.getenv("CLAUDE_MAX_TOKENS", "1024"))

# Gemini
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "models/gemini-2.0-flash")

# HTTP
AI_REQUEST_TIMEOUT = float(os.getenv("AI_REQUEST_TIMEOUT", "30"))
