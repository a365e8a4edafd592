"""Environment configuration and logging setup for the audit backend.

Values are read from a .env file in the backend root, e.g.:

ANTHROPIC_API_KEY=your_real_key_here
LOG_LEVEL=DEBUG
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "").strip()
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "").strip() or "claude-3-5-sonnet-latest"
CLAUDE_MAX_TOKENS = int(os.getenv("CLAUDE_MAX_TOKENS", "1500"))
CLAUDE_TEMPERATURE = float(os.getenv("CLAUDE_TEMPERATURE", "0.3"))

FETCH_TIMEOUT_SECONDS = float(os.getenv("AUDIT_FETCH_TIMEOUT_SECONDS", "30"))
FETCH_MAX_REDIRECTS = int(os.getenv("AUDIT_FETCH_MAX_REDIRECTS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

NOISY_LOGGERS = ("urllib3", "httpx", "anthropic")


def configure_logging(level: str | int = LOG_LEVEL) -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s")
    )

    root_logger = logging.getLogger()
    log_level = getattr(logging, level.upper(), logging.INFO) if isinstance(level, str) else level
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
