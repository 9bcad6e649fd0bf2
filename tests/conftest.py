"""Pytest configuration for all tests."""

import os
from typing import AsyncGenerator
from unittest.mock import MagicMock

os.environ.setdefault("DELIVERYBASE_ENVIRONMENT", "testing")
os.environ.setdefault("DELIVERYBASE_GEOCODING_ENABLED", "false")
os.environ.setdefault("DELIVERYBASE_EMAIL_PROVIDER", "console")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from deliverybase.domain.entities import ROLE_ADMIN, ROLE_DELIVERY, ROLE_USER, Coordinates
from deliverybase.infrastructure.auth import hash_password, jwt_service
from deliverybase.infrastructure.persistence import models  # noqa: F401
from deliverybase.infrastructure.persistence.database import (
    Base,
    get_db_session,
    get_session_factory,
    seed_catalogue,
)
from deliverybase.infrastructure.persistence.models import AddressModel, RoleModel, UserModel
from deliverybase.infrastructure.services import Geocoder, NotificationDispatcher, Router

DEFAULT_PASSWORD = "password123"


class StubGeocoder(Geocoder):
    """Geocoder returning a fixed answer and recording its queries."""

    def __init__(self, result: Coordinates | None = Coordinates(-78.4678, -0.1807)) -> None:
        self.result = result
        self.queries: list[str] = []

    async def geocode(self, query: str) -> Coordinates | None:
        self.queries.append(query)
        return self.result


class StubRouter(Router):
    """Router echoing its input and recording every call."""

    def __init__(self) -> None:
        self.calls: list[list[list[float]]] = []

    async def route(self, coordinates: list[list[float]]) -> dict:
        self.calls.append(coordinates)
        return {
            "type": "FeatureCollection",
            "features": [{"geometry": {"type": "LineString", "coordinates": coordinates}}],
        }


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create a seeded file-backed SQLite database.

    A file is used instead of ``:memory:`` so several sessions can work on
    the database at once.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with factory() as session:
        await seed_catalogue(session)
        await session.commit()

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory creating a committed user with the given role."""
    counter = {"n": 0}

    async def factory(
        role_name: str = ROLE_USER,
        email: str | None = None,
        confirmed: bool = True,
        active: bool = True,
        password: str = DEFAULT_PASSWORD,
        name: str = "Test",
    ) -> UserModel:
        counter["n"] += 1
        role = (
            await db_session.execute(select(RoleModel).where(RoleModel.name == role_name))
        ).scalar_one()
        user = UserModel(
            name=name,
            lastname="User",
            email=email or f"user{counter['n']}@example.com",
            password_hash=hash_password(password),
            confirmed=confirmed,
            active=active,
            role=role,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return factory


@pytest.fixture
def make_address(db_session: AsyncSession):
    """Factory creating a committed address."""

    async def factory(
        user: UserModel,
        coordinates: Coordinates | None = None,
        delivery: bool = False,
    ) -> AddressModel:
        address = AddressModel(
            address="Av. Amazonas N34-451",
            city="Quito",
            country="Ecuador",
            delivery=delivery,
            user_id=user.id,
        )
        address.coordinates = coordinates
        db_session.add(address)
        await db_session.commit()
        return address

    return factory


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user."""

    def build(user: UserModel) -> dict[str, str]:
        token = jwt_service.create_access_token(user_id=user.id, confirmed=user.confirmed)
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest_asyncio.fixture
async def admin_user(make_user) -> UserModel:
    return await make_user(ROLE_ADMIN, email="admin@example.com")


@pytest_asyncio.fixture
async def customer(make_user) -> UserModel:
    return await make_user(ROLE_USER, email="customer@example.com", name="Ana")


@pytest_asyncio.fixture
async def courier(make_user) -> UserModel:
    return await make_user(ROLE_DELIVERY, email="courier@example.com", name="Luis")


@pytest.fixture
def notifier() -> MagicMock:
    """Notification dispatcher double that accepts every notification."""
    dispatcher = MagicMock(spec=NotificationDispatcher)
    dispatcher.publish.return_value = True
    return dispatcher


@pytest.fixture
def stub_router() -> StubRouter:
    return StubRouter()


@pytest.fixture
def geocoder_factory() -> type[StubGeocoder]:
    """Build geocoder doubles with a chosen answer."""
    return StubGeocoder


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    session_factory,
    notifier: MagicMock,
    stub_router: StubRouter,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden dependencies."""
    from deliverybase.infrastructure.api.app import app
    from deliverybase.infrastructure.api.dependencies import (
        get_geocoder,
        get_notification_dispatcher,
        get_router,
    )

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_notification_dispatcher] = lambda: notifier
    app.dependency_overrides[get_geocoder] = lambda: None
    app.dependency_overrides[get_router] = lambda: stub_router

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
