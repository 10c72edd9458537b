# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""Package-wide logger for Hydrakey."""
import logging

logger: logging.Logger = logging.getLogger("hydrakey")
