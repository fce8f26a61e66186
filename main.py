#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
main.py
-------
keytally - Main Entry Point

Launches the editor window, counts keystrokes typed into it and streams the
count to the local WebSocket server.
"""

import sys
import logging
from argparse import ArgumentParser

from PyQt5.QtWidgets import QApplication

from keytally.core.config_manager import ConfigManager
from keytally.core.tracker import KeystrokeTracker
from keytally.gui.main_window import MainWindow
from keytally.link.telemetry_link import TelemetryLink
from keytally.utils.logger import setup_logging


def parse_args(argv=None):
    parser = ArgumentParser(description="Count keystrokes and stream them over WebSocket")
    parser.add_argument("file", nargs="?", help="File to open on startup")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--url", default=None, help="WebSocket endpoint (overrides config)")
    parser.add_argument("--workspace", default=None, help="Folder to open as the workspace")
    parser.add_argument("--log-level", default=None, help="Logging level (overrides config)")
    return parser.parse_args(argv)


def main():
    """Main application entry point"""
    args = parse_args()

    config = ConfigManager(args.config).load_config()
    if args.url:
        config.link.url = args.url
    if args.workspace:
        config.tracker.workspace = args.workspace
    if args.log_level:
        config.app.logging_level = args.log_level

    setup_logging(
        level=config.app.logging_level,
        log_dir=config.app.log_dir,
        rotation_size_mb=config.app.logging_file_rotation_size,
        rotation_count=config.app.logging_file_rotation_count,
    )
    logger = logging.getLogger(__name__)
    logger.info("=== keytally starting ===")

    try:
        app = QApplication(sys.argv)
        app.setApplicationName("keytally")
        app.setApplicationVersion("1.0.0")

        main_window = MainWindow(config)
        tracker = KeystrokeTracker(main_window, config, link=TelemetryLink(config))

        main_window.workspace_changed.connect(tracker.refresh_status)
        app.aboutToQuit.connect(tracker.deactivate)

        if args.file:
            main_window.open_file(args.file)

        tracker.activate()
        main_window.show()

        logger.info("Application initialized successfully")

        sys.exit(app.exec_())

    except Exception as e:
        logger.error(f"Failed to start application: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
