import sys
import os

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)  # relative imports

import asyncio

from church_manager import create_app
from church_manager.exceptions import StorageError


async def reset_database():
    """Remove every member and church from the local database"""
    app = create_app()
    try:
        await app.initialize()
        churches = await app.church_repository.get_all_churches()
        print(f"Deleting {len(churches)} churches and all their members...")
        await app.church_repository.clear_all_records()
        print("Database reset successfully!")
    except StorageError as e:
        print(f"Error resetting database: {e}")
        raise
    finally:
        await app.close()


if __name__ == "__main__":
    asyncio.run(reset_database())
