#!/usr/bin/env python3
"""
Script to score the synthetic transaction set and serve the dashboard.
"""

import os
import sys
import argparse
import logging

# Add project root to path
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from config.config_loader import load_config, setup_logging
from dashboard.app import FraudDetectionDashboard


def main():
    """Main dashboard script."""
    parser = argparse.ArgumentParser(description="Serve the fraud scoring dashboard")
    parser.add_argument("--config", default=None, help="Path to YAML configuration")
    parser.add_argument("--host", default=None, help="Host to bind")
    parser.add_argument("--port", type=int, default=None, help="Port to bind")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    args = parser.parse_args()

    # Setup logging, replaced by the configured handlers once loaded
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
        config.validate_config()
        setup_logging(config.get_logging_config(), force=True)

        logger.info("Scoring synthetic transactions")
        dashboard = FraudDetectionDashboard(config.to_dict())
        dashboard.run(
            host=args.host,
            port=args.port,
            debug=args.debug or config.get("dashboard.debug", False),
        )
        return 0

    except Exception as e:
        logger.error(f"Error running dashboard: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
