"""Configuration loader for the charter checkout service."""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Stripe
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")

# Public base URL used to build checkout redirect targets
PUBLIC_URL = os.getenv("PUBLIC_URL", "http://localhost:3000").rstrip("/")

# Quote desk (human-reviewed requests)
QUOTE_REQUEST_URL = os.getenv("QUOTE_REQUEST_URL", "")
QUOTE_REQUEST_TIMEOUT = float(os.getenv("QUOTE_REQUEST_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def validate():
    """Log any missing provider credentials."""
    missing = []
    if not STRIPE_SECRET_KEY:
        missing.append("STRIPE_SECRET_KEY")
    if not QUOTE_REQUEST_URL:
        missing.append("QUOTE_REQUEST_URL")
    if missing:
        logger.warning(f"Missing config: {', '.join(missing)}. Checkout features may not work.")
    return missing
