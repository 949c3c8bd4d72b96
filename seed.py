#!/usr/bin/env python3
"""
Seed the ticket catalog with the default tiers.
Safe to run repeatedly: tiers that already exist by name are skipped.
"""

import asyncio
import logging

from ticket_sales.core.logging_config import setup_logging
from ticket_sales.db.database import db_manager
from ticket_sales.services.ticket_service import ticket_service

logger = logging.getLogger(__name__)


async def main():
    logger.info("Seeding database...")
    await db_manager.initialize()
    try:
        await db_manager.create_tables()
        created = await ticket_service.seed_default_tiers()
        for tier in created:
            logger.info(f"Created tier {tier.name} ({tier.quantity} @ {tier.price})")
    finally:
        await db_manager.close()
    logger.info("Seeding finished.")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
