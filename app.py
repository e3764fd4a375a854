#!/usr/bin/env python3
"""
Run script for the GSA Asset Registry
"""

import argparse
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file before the app reads its configuration
load_dotenv()

from gsa_registry import create_app
from gsa_registry.build import build_database
from gsa_registry.logger import get_logger

logger = get_logger("gsa_registry.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='GSA Asset Registry')
    parser.add_argument('--build-only', action='store_true',
                        help='Build database tables and exit without starting the web server')
    parser.add_argument('--no-debug-data', action='store_false', dest='enable_debug_data',
                        help='Do not insert debug vehicles, equipment and furniture')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()
    
    # Note: run `python generate_env.py` to create a .env file with a SECRET_KEY
    app = create_app()
    
    logger.debug("Starting GSA Asset Registry...")
    build_database(enable_debug_data=args.enable_debug_data, app=app)
    
    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)
    
    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')
    
    # USE_RELOADER: Enable/disable auto-reloader (default: False)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')
    
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))
    
    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")
    
    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
