"""Fixtures for server service and API tests."""

from __future__ import annotations

from typing import Awaitable, Callable

import pytest

from lockin.core.database.entities.partners import AccountabilityPartner
from lockin.core.database.repositories import SqlRepoBundle
from lockin.core.models.enums import PartnerStatus
from lockin.server.auth import Identity


@pytest.fixture
def make_partners(repos: SqlRepoBundle) -> Callable[[Identity, Identity], Awaitable[None]]:
    """Write a mirrored pair of active partner records for two identities."""

    async def _make(first: Identity, second: Identity) -> None:
        for owner, other in ((first, second), (second, first)):
            await repos.partners.create(
                AccountabilityPartner(
                    user_id=owner.token_identifier,
                    partner_id=other.token_identifier,
                    partner_email=other.normalized_email or "",
                    partner_name=other.name,
                    status=PartnerStatus.active,
                ),
                commit=False,
            )
        await repos.commit()

    return _make
