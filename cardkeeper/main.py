"""Session bootstrap for a presentation layer."""

import logging

from cardkeeper.config import settings
from cardkeeper.services.inventory import InventorySystem

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from settings (debug forces DEBUG)."""
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_inventory() -> InventorySystem:
    """Start a new in-memory inventory session."""
    configure_logging()
    logger.info("Starting %s session", settings.app_name)
    return InventorySystem()
