# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for schemargs."""
import logging

logger: logging.Logger = logging.getLogger("schemargs")
