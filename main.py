"""
Main entry point for Ticket Sales Service.
"""

import asyncio
import logging

import uvicorn

from ticket_sales.core.config import config
from ticket_sales.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    server_config = asyncio.run(config.get_server_config())
    setup_logging(server_config["log_level"])

    logger.info(f"Starting Ticket Sales Service on {server_config['host']}:{server_config['port']}")

    uvicorn.run(
        "ticket_sales.main:app",
        host=server_config["host"],
        port=server_config["port"],
        reload=server_config["reload"],
        log_level=server_config["log_level"],
        access_log=True
    )
