"""Tests for partner, invite, shared video and user repositories."""

from __future__ import annotations

from datetime import timedelta

import pytest

from lockin.core.database.entities import AccountabilityPartner, PartnerInvite, SharedVideo, User
from lockin.core.models.enums import InviteStatus, PartnerStatus

ALICE = "lockin-dev|alice"
BOB = "lockin-dev|bob"
CAROL = "lockin-dev|carol"

pytestmark = pytest.mark.asyncio


@pytest.fixture
def make_invite(repos, base_time):
    async def _make(code, *, from_user_id=ALICE, to_email="bob@example.com", status=InviteStatus.pending, age=0):
        invite = PartnerInvite(
            code=code,
            from_user_id=from_user_id,
            from_user_email="alice@example.com",
            to_email=to_email,
            status=status,
            created_at=base_time - timedelta(minutes=age),
            expires_at=base_time + timedelta(days=7),
        )
        return await repos.invites.create(invite)

    return _make


class TestPartnerRepository:
    async def test_pairs_and_status_filter(self, repos):
        active = await repos.partners.create(
            AccountabilityPartner(
                user_id=ALICE, partner_id=BOB, partner_email="bob@example.com", status=PartnerStatus.active
            )
        )
        await repos.partners.create(
            AccountabilityPartner(
                user_id=ALICE, partner_id=CAROL, partner_email="carol@example.com", status=PartnerStatus.pending
            )
        )

        assert len(await repos.partners.list_for_user(ALICE)) == 2
        only_active = await repos.partners.list_for_user(ALICE, status=PartnerStatus.active)
        assert [p.id for p in only_active] == [active.id]

        assert (await repos.partners.get_pair(ALICE, BOB)).id == active.id
        assert await repos.partners.get_pair(BOB, ALICE) is None

        assert await repos.partners.is_active_pair(ALICE, BOB) is True
        assert await repos.partners.is_active_pair(ALICE, CAROL) is False
        assert await repos.partners.is_active_pair(ALICE, "lockin-dev|nobody") is False


class TestPartnerInviteRepository:
    async def test_get_by_code_and_find_pending(self, repos, make_invite):
        invite = await make_invite("ABCD2345")
        await make_invite("DECLINED", status=InviteStatus.declined)

        assert (await repos.invites.get_by_code("ABCD2345")).id == invite.id
        assert await repos.invites.get_by_code("MISSING1") is None
        assert (await repos.invites.find_pending(ALICE, "bob@example.com")).id == invite.id
        assert await repos.invites.find_pending(ALICE, "carol@example.com") is None

    async def test_sent_and_received(self, repos, make_invite):
        newer = await make_invite("NEWER234", age=1)
        older = await make_invite("OLDER234", age=2)
        await make_invite("ACCEPTED", status=InviteStatus.accepted)
        from_bob_to_self = await make_invite("SELF2345", from_user_id=BOB)
        from_carol = await make_invite("CAROL234", from_user_id=CAROL, age=3)

        assert [i.id for i in await repos.invites.list_sent_pending(ALICE)] == [newer.id, older.id]

        received = await repos.invites.list_received_pending("bob@example.com", exclude_user_id=BOB)
        assert [i.id for i in received] == [newer.id, older.id, from_carol.id]
        assert from_bob_to_self.id not in {i.id for i in received}

        assert await repos.invites.count_received_pending("bob@example.com", exclude_user_id=BOB) == 3
        assert await repos.invites.count_received_pending("nobody@example.com", exclude_user_id=BOB) == 0


class TestSharedVideoRepository:
    async def test_list_by_owner_and_shared_with(self, repos, base_time):
        to_bob = await repos.shared_videos.create(
            SharedVideo(
                user_id=ALICE,
                r2_key="videos/a.mp4",
                duration_minutes=30,
                shared_with_partner_ids=[BOB],
                created_at=base_time,
            )
        )
        to_carol = await repos.shared_videos.create(
            SharedVideo(
                user_id=ALICE,
                r2_key="videos/b.mp4",
                duration_minutes=10,
                shared_with_partner_ids=[CAROL],
                created_at=base_time - timedelta(minutes=1),
            )
        )
        carol_to_bob = await repos.shared_videos.create(
            SharedVideo(
                user_id=CAROL,
                r2_key="videos/c.mp4",
                duration_minutes=5,
                shared_with_partner_ids=[BOB, ALICE],
                created_at=base_time - timedelta(minutes=2),
            )
        )

        assert [v.id for v in await repos.shared_videos.list_by_owner(ALICE)] == [to_bob.id, to_carol.id]

        shared = await repos.shared_videos.list_shared_with(BOB, [ALICE, CAROL])
        assert [v.id for v in shared] == [to_bob.id, carol_to_bob.id]

        assert [v.id for v in await repos.shared_videos.list_shared_with(BOB, [CAROL])] == [carol_to_bob.id]
        assert await repos.shared_videos.list_shared_with(BOB, []) == []


class TestUserRepository:
    async def test_lookup_by_token_and_email(self, repos):
        user = await repos.users.create(User(token_identifier=ALICE, email="alice@example.com", name="Alice"))

        assert (await repos.users.get_by_token(ALICE)).id == user.id
        assert await repos.users.get_by_token(BOB) is None
        assert (await repos.users.get_by_email("alice@example.com")).id == user.id
        assert await repos.users.get_by_email("bob@example.com") is None
