"""
Runtime settings for the budget optimizer.
Values come from the environment (or a local .env file).
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Strategy used when a caller does not pick one (matches the planning screen default)
DEFAULT_OPTIMIZATION_METHOD = os.getenv("DEFAULT_OPTIMIZATION_METHOD", "benefit")

# Allowed gap between category amounts and the stated total, in dollars
ALLOCATION_TOLERANCE = float(os.getenv("ALLOCATION_TOLERANCE", "0.01"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


def configure_logging(level: Optional[str] = None):
    """Apply LOG_LEVEL to the root logger"""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
