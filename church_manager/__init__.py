import logging
from dataclasses import dataclass
from typing import Optional

from church_manager.config import Config
from church_manager.database import Database
from church_manager.repositories import ChurchRepository, MemberRepository
from church_manager.services import ChurchService, MemberService


@dataclass
class ChurchApp:
    config: Config
    database: Database
    church_repository: ChurchRepository
    member_repository: MemberRepository
    church_service: ChurchService
    member_service: MemberService

    async def initialize(self):
        await self.database.initialize()

    async def close(self):
        await self.database.close()


def create_app(config: Optional[Config] = None) -> ChurchApp:
    if config is None:
        config = Config.from_env()

    # Configure logging
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
    logger = logging.getLogger(__name__)

    database = Database(config.database_path, echo=config.sql_echo)
    church_repository = ChurchRepository(database)
    member_repository = MemberRepository(database)

    logger.info(f"Using database file: {config.database_path}")

    return ChurchApp(
        config=config,
        database=database,
        church_repository=church_repository,
        member_repository=member_repository,
        church_service=ChurchService(church_repository, member_repository),
        member_service=MemberService(member_repository, church_repository),
    )
