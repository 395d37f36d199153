"""API tests for /api/v1/partners."""

import pytest
from httpx import AsyncClient

from lockin.server.auth import Identity, SharedSecretTokenVerifier
from lockin.server.auth.deps import get_token_verifier
from lockin.server.main import app
from test.settings import test_settings

pytestmark = pytest.mark.asyncio

PARTNERS = "/api/v1/partners"
INVITES = f"{PARTNERS}/invites"


class TestPartnerQueries:
    async def test_anonymous_queries(self, client: AsyncClient):
        assert (await client.get(PARTNERS)).json() == []
        assert (await client.get(f"{INVITES}/sent")).json() == []
        assert (await client.get(f"{INVITES}/received")).json() == []
        assert (await client.get(f"{INVITES}/received/count")).json() == {"count": 0}
        assert (await client.get(f"{PARTNERS}/activity", params={"partner_id": "someone"})).json() == []
        assert (await client.get(f"{INVITES}/code/NOPE1234")).json() is None

    async def test_unknown_code(self, client: AsyncClient, alice, auth_headers):
        assert (await client.get(f"{INVITES}/code/NOPE1234", headers=auth_headers(alice))).json() is None


class TestInviteFlow:
    async def test_send_and_accept(self, client: AsyncClient, alice, bob, auth_headers):
        sent = await client.post(INVITES, json={"email": " BOB@Example.com "}, headers=auth_headers(alice))
        assert sent.status_code == 200
        invite = sent.json()
        assert invite["to_email"] == "bob@example.com"
        assert invite["status"] == "pending"
        assert invite["sender_display_name"] == "Alice Smith"
        assert invite["is_expired"] is False
        assert invite["expiry_description"] == "Expires in 6 days"

        assert (await client.get(f"{INVITES}/received/count", headers=auth_headers(bob))).json() == {"count": 1}
        received = (await client.get(f"{INVITES}/received", headers=auth_headers(bob))).json()
        assert [i["id"] for i in received] == [invite["id"]]

        accepted = await client.post(f"{INVITES}/{invite['id']}/accept", headers=auth_headers(bob))
        assert accepted.json() == {"status": "accepted"}
        again = await client.post(f"{INVITES}/{invite['id']}/accept", headers=auth_headers(bob))
        assert again.json() == {"status": "already_accepted"}

        alice_partners = (await client.get(PARTNERS, headers=auth_headers(alice))).json()
        bob_partners = (await client.get(PARTNERS, headers=auth_headers(bob))).json()
        assert [p["partner_id"] for p in alice_partners] == ["lockin-dev|bob"]
        assert [p["partner_id"] for p in bob_partners] == ["lockin-dev|alice"]
        assert alice_partners[0]["display_name"] == "Bob Jones"
        assert alice_partners[0]["initials"] == "BJ"

    async def test_self_invite(self, client: AsyncClient, alice, auth_headers):
        response = await client.post(INVITES, json={"email": "alice@example.com"}, headers=auth_headers(alice))

        assert response.status_code == 400
        assert response.json() == {"detail": "You can't invite yourself"}

    async def test_duplicate_invite(self, client: AsyncClient, alice, auth_headers):
        await client.post(INVITES, json={"email": "dana@example.com"}, headers=auth_headers(alice))

        response = await client.post(INVITES, json={"email": "dana@example.com"}, headers=auth_headers(alice))

        assert response.status_code == 400
        assert response.json() == {"detail": "You already have a pending invite to this email"}

    async def test_wrong_recipient(self, client: AsyncClient, alice, carol, auth_headers):
        invite = (await client.post(INVITES, json={"email": "bob@example.com"}, headers=auth_headers(alice))).json()

        response = await client.post(f"{INVITES}/{invite['id']}/accept", headers=auth_headers(carol))

        assert response.status_code == 403
        assert response.json() == {"detail": "This invite is not for you"}

    async def test_decline_and_cancel(self, client: AsyncClient, alice, bob, auth_headers):
        declined = (await client.post(INVITES, json={"email": "bob@example.com"}, headers=auth_headers(alice))).json()
        response = await client.post(f"{INVITES}/{declined['id']}/decline", headers=auth_headers(bob))
        assert response.json() == {"status": "declined"}

        pending = (await client.post(INVITES, json={"email": "dana@example.com"}, headers=auth_headers(alice))).json()
        forbidden = await client.delete(f"{INVITES}/{pending['id']}", headers=auth_headers(bob))
        assert forbidden.status_code == 403
        cancelled = await client.delete(f"{INVITES}/{pending['id']}", headers=auth_headers(alice))
        assert cancelled.json() == {"status": "cancelled"}
        assert (await client.get(f"{INVITES}/sent", headers=auth_headers(alice))).json() == []

    async def test_missing_invite(self, client: AsyncClient, bob, auth_headers):
        response = await client.post(f"{INVITES}/missing/accept", headers=auth_headers(bob))

        assert response.status_code == 404
        assert response.json() == {"detail": "Invite not found"}


class TestInviteLinks:
    async def test_link_accepted_by_code(self, client: AsyncClient, alice, carol, auth_headers):
        created = await client.post(f"{INVITES}/link", headers=auth_headers(alice))
        assert created.status_code == 200
        invite = created.json()
        assert invite["to_email"] is None
        assert invite["code"] in invite["link"]

        found = (await client.get(f"{INVITES}/code/{invite['code'].lower()}", headers=auth_headers(carol))).json()
        assert found["id"] == invite["id"]
        assert found["from_user_email"] == "alice@example.com"
        assert (await client.get(f"{INVITES}/code/{invite['code']}")).json() is None

        accepted = await client.post(f"{INVITES}/accept", json={"code": invite["code"]}, headers=auth_headers(carol))
        assert accepted.json() == {"status": "accepted"}
        assert [p["partner_id"] for p in (await client.get(PARTNERS, headers=auth_headers(carol))).json()] == [
            "lockin-dev|alice"
        ]

    async def test_own_link(self, client: AsyncClient, alice, auth_headers):
        invite = (await client.post(f"{INVITES}/link", headers=auth_headers(alice))).json()

        response = await client.post(f"{INVITES}/accept", json={"code": invite["code"]}, headers=auth_headers(alice))

        assert response.status_code == 400
        assert response.json() == {"detail": "You can't accept your own invite"}


class TestPartnerships:
    async def test_activity_and_removal(self, client: AsyncClient, alice, bob, carol, auth_headers, make_partners):
        await make_partners(alice, bob)
        shared = await client.post(
            "/api/v1/shared-videos",
            json={"r2_key": "videos/a.mp4", "duration_minutes": 5, "partner_ids": ["lockin-dev|bob"]},
            headers=auth_headers(alice),
        )
        assert shared.status_code == 200

        activity = await client.get(
            f"{PARTNERS}/activity", params={"partner_id": "lockin-dev|alice"}, headers=auth_headers(bob)
        )
        assert [v["id"] for v in activity.json()] == [shared.json()["id"]]

        strangers = await client.get(
            f"{PARTNERS}/activity", params={"partner_id": "lockin-dev|alice"}, headers=auth_headers(carol)
        )
        assert strangers.status_code == 400
        assert strangers.json() == {"detail": "Not partners with this user"}

        record = (await client.get(PARTNERS, headers=auth_headers(bob))).json()[0]
        assert (await client.delete(f"{PARTNERS}/{record['id']}", headers=auth_headers(alice))).status_code == 403
        removed = await client.delete(f"{PARTNERS}/{record['id']}", headers=auth_headers(bob))
        assert removed.json() == {"status": "removed"}
        assert (await client.get(PARTNERS, headers=auth_headers(alice))).json() == []

    async def test_activity_with_url_issuer(self, client: AsyncClient):
        issuer = "https://securetoken.google.com/lockin-proj"
        firebase = SharedSecretTokenVerifier(test_settings.auth_shared_secret, issuer=issuer)
        app.dependency_overrides[get_token_verifier] = lambda: firebase

        def headers(subject: str) -> dict:
            return {"Authorization": f"Bearer {firebase.issue(subject, email=f'{subject}@example.com')}"}

        invite = (await client.post(INVITES, json={"email": "bob@example.com"}, headers=headers("alice"))).json()
        accepted = await client.post(f"{INVITES}/{invite['id']}/accept", headers=headers("bob"))
        assert accepted.json() == {"status": "accepted"}

        alice_id = Identity(issuer=issuer, subject="alice").token_identifier
        assert "/" in alice_id
        shared = await client.post(
            "/api/v1/shared-videos",
            json={"r2_key": "videos/a.mp4", "duration_minutes": 5, "partner_ids": [f"{issuer}|bob"]},
            headers=headers("alice"),
        )
        assert shared.status_code == 200

        activity = await client.get(f"{PARTNERS}/activity", params={"partner_id": alice_id}, headers=headers("bob"))
        assert activity.status_code == 200
        assert [v["id"] for v in activity.json()] == [shared.json()["id"]]
