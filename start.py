#!/usr/bin/env python3
import asyncio
import logging

from church_manager import create_app

logger = logging.getLogger("start")


async def main():
    app = create_app()
    try:
        logger.info("Attempting to initialize the database...")
        await app.initialize()
        churches = await app.church_service.get_all()
        logger.info(f"Database ready with {len(churches)} churches")
        for church in churches:
            logger.info(f"  {church.name}: {church.total_members} members")
    finally:
        await app.close()


if __name__ == "__main__":
    asyncio.run(main())
