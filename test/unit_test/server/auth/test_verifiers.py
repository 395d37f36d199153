"""Unit tests for identity token verifiers."""

from datetime import timedelta

import jwt
import pytest

from lockin.core.errors import NotAuthenticatedError
from lockin.server.auth import (
    FirebaseTokenVerifier,
    Identity,
    SharedSecretTokenVerifier,
    build_token_verifier,
    require_identity,
)
from lockin.server.core.config import AuthConfig

SECRET = "unit-test-shared-secret-0123456789abcdef"


class TestSharedSecretTokenVerifier:
    async def test_issue_and_verify(self):
        verifier = SharedSecretTokenVerifier(SECRET)
        token = verifier.issue("alice", email="Alice@Example.com", name="Alice Smith", picture_url="https://img/a.png")

        identity = await verifier.verify(token)

        assert identity.token_identifier == "lockin-dev|alice"
        assert identity.email == "Alice@Example.com"
        assert identity.normalized_email == "alice@example.com"
        assert identity.name == "Alice Smith"
        assert identity.picture_url == "https://img/a.png"

    async def test_optional_claims_are_omitted(self):
        verifier = SharedSecretTokenVerifier(SECRET)
        claims = jwt.decode(verifier.issue("alice"), SECRET, algorithms=["HS256"], options={"verify_aud": False})

        assert set(claims) == {"iss", "sub", "iat", "exp"}

    async def test_wrong_secret(self):
        token = SharedSecretTokenVerifier("another-unit-test-secret-0123456789ab").issue("alice")

        with pytest.raises(NotAuthenticatedError, match="Invalid identity token"):
            await SharedSecretTokenVerifier(SECRET).verify(token)

    async def test_wrong_issuer(self):
        token = SharedSecretTokenVerifier(SECRET, issuer="elsewhere").issue("alice")

        with pytest.raises(NotAuthenticatedError):
            await SharedSecretTokenVerifier(SECRET).verify(token)

    async def test_expired(self):
        verifier = SharedSecretTokenVerifier(SECRET)
        token = verifier.issue("alice", expires_in=timedelta(minutes=-5))

        with pytest.raises(NotAuthenticatedError):
            await verifier.verify(token)

    async def test_missing_subject(self):
        token = jwt.encode({"iss": "lockin-dev"}, SECRET, algorithm="HS256")

        with pytest.raises(NotAuthenticatedError):
            await SharedSecretTokenVerifier(SECRET).verify(token)

    def test_empty_secret(self):
        with pytest.raises(ValueError):
            SharedSecretTokenVerifier("")


class TestFirebaseTokenVerifier:
    def test_issuer_from_project(self):
        verifier = FirebaseTokenVerifier("lockin-app")

        assert verifier.issuer == "https://securetoken.google.com/lockin-app"
        assert verifier.project_id == "lockin-app"

    async def test_malformed_token(self):
        with pytest.raises(NotAuthenticatedError, match="Invalid identity token"):
            await FirebaseTokenVerifier("lockin-app").verify("not-a-jwt")


class TestBuildTokenVerifier:
    def test_shared_secret_mode(self):
        verifier = build_token_verifier(
            AuthConfig(mode="shared_secret", shared_secret=SECRET, shared_secret_issuer="local")
        )

        assert isinstance(verifier, SharedSecretTokenVerifier)
        assert verifier.issuer == "local"

    def test_firebase_mode(self):
        verifier = build_token_verifier(AuthConfig(mode="firebase", firebase_project_id="lockin-app"))

        assert isinstance(verifier, FirebaseTokenVerifier)

    @pytest.mark.parametrize(
        "config, message",
        [
            (AuthConfig(mode="firebase"), "FIREBASE_PROJECT_ID"),
            (AuthConfig(mode="shared_secret"), "LOCKIN_AUTH_SHARED_SECRET"),
            (AuthConfig(mode="magic"), "Unknown auth mode"),
        ],
    )
    def test_misconfiguration(self, config, message):
        with pytest.raises(ValueError, match=message):
            build_token_verifier(config)


class TestIdentity:
    def test_from_claims(self):
        identity = Identity.from_claims(
            {"iss": "https://securetoken.google.com/p", "sub": "uid1", "email": "u@example.com", "picture": "p.png"}
        )

        assert identity.token_identifier == "https://securetoken.google.com/p|uid1"
        assert identity.picture_url == "p.png"
        assert identity.name is None

    def test_normalized_email_without_email(self):
        assert Identity(issuer="i", subject="s").normalized_email is None

    async def test_require_identity(self, alice):
        assert await require_identity(alice) is alice

        with pytest.raises(NotAuthenticatedError, match="Unauthenticated call"):
            await require_identity(None)
