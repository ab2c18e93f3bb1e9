import logging

from xrdgen.cli import app

logger = logging.getLogger(__name__)


def main():
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Generation stopped by user")


if __name__ == "__main__":
    main()
