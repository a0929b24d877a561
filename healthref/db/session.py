from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from healthref.config import settings

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_pre_ping=True,
    connect_args={"command_timeout": settings.db_command_timeout},
)

async_session = async_sessionmaker(engine, expire_on_commit=False)
