"""Shared fixtures for unit tests.

Each test gets its own in-memory SQLite database. API tests drive the real
FastAPI app through ``httpx.ASGITransport`` with the session, token verifier
and object storage dependencies overridden.
"""

from __future__ import annotations

from typing import AsyncGenerator, Callable, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel.ext.asyncio.session import AsyncSession

from lockin.core.database import create_all, create_engine, create_sessionmaker
from lockin.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from lockin.server.auth import Identity, SharedSecretTokenVerifier
from lockin.server.core.config import ObjectStorageConfig
from lockin.server.services.storage import ObjectStorage
from test.settings import test_settings


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with every server table."""
    engine = create_engine(test_settings.database_url)
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return create_sessionmaker(test_engine)


@pytest_asyncio.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


@pytest.fixture(scope="session")
def verifier() -> SharedSecretTokenVerifier:
    return SharedSecretTokenVerifier(test_settings.auth_shared_secret, issuer=test_settings.auth_issuer)


def _identity(subject: str, name: str) -> Identity:
    return Identity(
        issuer=test_settings.auth_issuer,
        subject=subject,
        email=f"{subject}@example.com",
        name=name,
    )


@pytest.fixture
def alice() -> Identity:
    return _identity("alice", "Alice Smith")


@pytest.fixture
def bob() -> Identity:
    return _identity("bob", "Bob Jones")


@pytest.fixture
def carol() -> Identity:
    return _identity("carol", "Carol")


@pytest.fixture
def token_for(verifier: SharedSecretTokenVerifier) -> Callable[[Identity], str]:
    def _issue(identity: Identity) -> str:
        return verifier.issue(identity.subject, email=identity.email, name=identity.name)

    return _issue


@pytest.fixture
def auth_headers(token_for) -> Callable[[Identity], Dict[str, str]]:
    def _headers(identity: Identity) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token_for(identity)}"}

    return _headers


@pytest.fixture
def storage() -> ObjectStorage:
    """Storage signing against a fake R2 endpoint; presigning never touches the network."""
    config = ObjectStorageConfig(
        endpoint=test_settings.r2_endpoint,
        access_key_id="test-access-key",
        secret_access_key="test-secret-key",
        bucket=test_settings.r2_bucket,
        url_expiry_seconds=600,
    )
    return ObjectStorage(config)


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_maker, verifier, storage) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from lockin.core.database.session import get_session
    from lockin.server.auth.deps import get_token_verifier
    from lockin.server.main import app
    from lockin.server.services.storage import get_object_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as request_session:
            yield request_session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_token_verifier] = lambda: verifier
    app.dependency_overrides[get_object_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
