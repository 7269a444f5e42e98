"""
MyToken - Deployment Entry Point
Runs scripts/deploy_contract.py with logging configured
"""

import os
import sys
from loguru import logger

from scripts.deploy_contract import deploy_contract
from utils.exceptions import ConfigurationError, DeployerError

LOG_DIR = "data/logs"


def configure_logging():
    """Colored stderr at INFO, rotating file at DEBUG"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level="INFO"
    )
    os.makedirs(LOG_DIR, exist_ok=True)
    logger.add(
        os.path.join(LOG_DIR, "deploy.log"),
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG"
    )


def main() -> int:
    """Deploy and map the outcome to an exit code"""
    logger.info("=" * 70)
    logger.info("MyToken Contract Deployment")
    logger.info("=" * 70)

    try:
        deploy_contract()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2
    except DeployerError as e:
        logger.error(f"Deployment failed: {e}")
        if getattr(e, 'tx_hash', None):
            logger.error(f"Transaction hash: {e.tx_hash}")
        return 1

    return 0


def cli() -> int:
    """Console entry point"""
    configure_logging()
    return main()


if __name__ == "__main__":
    sys.exit(cli())
