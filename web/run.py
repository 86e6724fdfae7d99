"""
Record API Entry Point
"""
import logging
import sys

from recordhub import create_app
from recordhub.config import Config, ConfigurationError


def setup_logging(level: str = 'INFO', log_file: str = None):
    """Configure logging for the application."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        # Use UTF-8 encoding for file handler to support Unicode characters
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def main():
    """Run the record API"""
    try:
        Config.validate()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(Config.LOG_LEVEL, Config.LOG_FILE)

    app = create_app()

    # Run the application
    app.run(
        host=Config.API_HOST,
        port=Config.API_PORT,
        debug=Config.API_DEBUG,
        use_reloader=Config.API_DEBUG
    )


if __name__ == '__main__':
    main()
