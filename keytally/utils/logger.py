# -*- coding: utf-8 -*-
"""
logger.py
---------
Logging utilities for the keystroke tracker.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from datetime import datetime

TELEMETRY_LOGGER = "telemetry"


def setup_logging(level=logging.INFO, log_dir="logs", rotation_size_mb=10, rotation_count=5):
    """Setup application logging"""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Create logs directory
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler with rotation
    log_file = os.path.join(log_dir, f"keytally_{datetime.now().strftime('%Y%m%d')}.log")
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=rotation_size_mb * 1024 * 1024,
        backupCount=rotation_count,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Outbound frame log (separate file for wire traffic)
    wire_log_file = os.path.join(log_dir, f"telemetry_{datetime.now().strftime('%Y%m%d')}.log")
    wire_handler = logging.handlers.RotatingFileHandler(
        wire_log_file,
        maxBytes=rotation_size_mb * 1024 * 1024,
        backupCount=rotation_count,
        encoding='utf-8'
    )
    wire_formatter = logging.Formatter(
        '%(asctime)s.%(msecs)03d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    wire_handler.setFormatter(wire_formatter)

    wire_logger = logging.getLogger(TELEMETRY_LOGGER)
    wire_logger.handlers.clear()
    wire_logger.addHandler(wire_handler)
    wire_logger.setLevel(logging.INFO)
    wire_logger.propagate = False  # Don't propagate to root logger

    logging.info("Logging system initialized")
