"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from deliverybase.core.config import get_settings
from deliverybase.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DatabaseManager:
    """Database connection and session manager.

    This class manages the async database engine and session factory.
    It provides context managers for database sessions and handles
    connection pooling.
    """

    def __init__(self) -> None:
        """Initialize the database manager."""
        self.settings = get_settings()
        self._engine = None
        self._session_factory = None

    @property
    def engine(self):
        """Get or create the database engine.

        Returns:
            AsyncEngine: SQLAlchemy async engine instance.
        """
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                pool_size=self.settings.db_pool_size,
                max_overflow=self.settings.db_max_overflow,
                pool_timeout=self.settings.db_pool_timeout,
                pool_recycle=self.settings.db_pool_recycle,
                connect_args={"check_same_thread": False}
                if self.settings.database_url.startswith("sqlite")
                else {},
            )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                pool_size=self.settings.db_pool_size,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory.

        Returns:
            async_sessionmaker: SQLAlchemy async session factory.
        """
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables.

        Used in development and by ``init-db``. In production, use migrations.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for database operations.

        Yields:
            AsyncSession: SQLAlchemy async session.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
                users = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get database session.

    Yields:
        AsyncSession: SQLAlchemy async session.
    """
    db = get_db_manager()
    async with db.session() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency for FastAPI to get the session factory.

    Used by operations that open one independent unit of work per item
    instead of sharing the request session.
    """
    return get_db_manager().session_factory


async def seed_catalogue(session: AsyncSession) -> None:
    """Seed the action catalogue and the foundational roles.

    Missing actions and roles are inserted; existing rows are left untouched,
    so grants edited at runtime survive a restart.

    Args:
        session: Session to seed with. The caller commits.
    """
    from deliverybase.domain.entities import DEFAULT_ACTIONS, DEFAULT_ROLE_GRANTS, DEFAULT_ROLES
    from deliverybase.infrastructure.persistence.models import (
        ActionModel,
        RoleActionModel,
        RoleModel,
    )

    result = await session.execute(select(ActionModel))
    actions = {action.name: action for action in result.scalars().all()}
    for definition in DEFAULT_ACTIONS:
        if definition.name not in actions:
            action = ActionModel(
                name=definition.name,
                description=definition.description,
                type=definition.type,
            )
            session.add(action)
            actions[definition.name] = action
            logger.info("Seeded action", action_name=definition.name)
    await session.flush()

    for name, name_descriptive, description in DEFAULT_ROLES:
        result = await session.execute(select(RoleModel).where(RoleModel.name == name))
        if result.scalar_one_or_none() is not None:
            continue

        role = RoleModel(
            name=name,
            name_descriptive=name_descriptive,
            description=description,
            active=True,
        )
        session.add(role)
        await session.flush()
        session.add_all(
            RoleActionModel(role_id=role.id, action_id=actions[action_name].id)
            for action_name in DEFAULT_ROLE_GRANTS[name]
        )
        logger.info("Seeded default role", role_name=name)
    await session.flush()


async def init_database() -> None:
    """Initialize the database.

    Creates tables and seeds the catalogue in development mode. In production,
    migrations should be used instead. Creates the bootstrap administrator when
    configured.
    """
    # Import all models to ensure they are registered with Base.metadata
    from deliverybase.infrastructure.persistence import models  # noqa: F401

    db = get_db_manager()
    settings = get_settings()

    if settings.database_url.startswith("sqlite"):
        db_path = settings.database_url.split(":///")[-1]
        if db_path != ":memory:":
            db_dir = Path(db_path).parent
            db_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Database directory created", path=str(db_dir))

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if settings.is_development:
        logger.info("Development mode: Creating database tables")
        await db.create_tables()
        async with db.session() as session:
            await seed_catalogue(session)
            await session.commit()
    else:
        logger.info("Production mode: Skipping auto-create, use migrations")

    await _create_admin_from_env(db)


async def _create_admin_from_env(db: DatabaseManager) -> None:
    """Create the bootstrap administrator if configured and missing.

    Args:
        db: Database manager instance.
    """
    from deliverybase.core.errors import ConflictError
    from deliverybase.domain.services import AccountService

    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        logger.debug("Admin environment variables not configured, skipping")
        return

    async with db.session() as session:
        service = AccountService(session)
        try:
            user = await service.create_admin(
                email=settings.admin_email,
                password=settings.admin_password,
            )
        except ConflictError as e:
            logger.info(
                "Skipping environment-based admin creation",
                reason=str(e),
                email=settings.admin_email,
            )
            return
        await session.commit()

    logger.info("Admin created from environment variables", user_id=user.id, email=user.email)


async def close_database() -> None:
    """Close the database connection."""
    db = get_db_manager()
    await db.disconnect()
