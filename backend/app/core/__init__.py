from app.core.config import Settings, get_settings, settings
from app.core.logging import ProposalLogger, get_logger

__all__ = ["Settings", "get_settings", "settings", "ProposalLogger", "get_logger"]
