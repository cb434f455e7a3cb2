"""Identity-provider (Google sign-in via Firebase) token verification."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import firebase_admin
from firebase_admin import auth, credentials

from subsentinel.core.exceptions import UnauthorizedError, UpstreamError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "subsentinel"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(frozen=True)
class IdentityClaims:
    """The subset of a verified ID token the service persists."""

    uid: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None


class IdentityVerifier(Protocol):
    async def verify(self, id_token: str) -> IdentityClaims:
        """Verify an ID token. Raises UnauthorizedError when it is not valid."""
        ...

    async def delete_account(self, uid: str) -> None:
        """Delete the provider-side account. Missing accounts are not an error."""
        ...


class MockIdentityVerifier:
    """Development verifier: accepts tokens of the form ``mock-<uid>``."""

    PREFIX = "mock-"

    def __init__(self) -> None:
        self.deleted: list[str] = []

    async def verify(self, id_token: str) -> IdentityClaims:
        if not id_token.startswith(self.PREFIX) or len(id_token) == len(self.PREFIX):
            raise UnauthorizedError("IDP_001")
        uid = id_token[len(self.PREFIX):]
        return IdentityClaims(uid=uid, email=f"{uid}@example.com", name=uid)

    async def delete_account(self, uid: str) -> None:
        self.deleted.append(uid)


class FirebaseIdentityVerifier:
    """Verifies Firebase ID tokens with firebase-admin.

    The SDK app is initialised on first use: from explicit service-account
    fields when all three are configured, otherwise from application default
    credentials.
    """

    def __init__(self, project_id: str = "", client_email: str = "", private_key: str = ""):
        self.project_id = project_id
        self.client_email = client_email
        self.private_key = private_key
        self._app: firebase_admin.App | None = None

    def _get_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app
        try:
            self._app = firebase_admin.get_app(FIREBASE_APP_NAME)
            return self._app
        except ValueError:
            pass

        if self.project_id and self.client_email and self.private_key:
            credential = credentials.Certificate(
                {
                    "type": "service_account",
                    "project_id": self.project_id,
                    "client_email": self.client_email,
                    "private_key": self.private_key.replace("\\n", "\n"),
                    "token_uri": GOOGLE_TOKEN_URI,
                }
            )
            logger.info("Firebase initialized from service account settings")
        else:
            credential = credentials.ApplicationDefault()
            logger.warning("Firebase initialized with application default credentials")

        options = {"projectId": self.project_id} if self.project_id else None
        self._app = firebase_admin.initialize_app(credential, options, name=FIREBASE_APP_NAME)
        return self._app

    async def verify(self, id_token: str) -> IdentityClaims:
        try:
            decoded = await asyncio.to_thread(auth.verify_id_token, id_token, app=self._get_app())
        except (auth.InvalidIdTokenError, ValueError) as exc:
            logger.warning("Firebase token rejected", extra={"error_type": type(exc).__name__})
            raise UnauthorizedError("IDP_001") from exc
        except auth.CertificateFetchError as exc:
            raise UpstreamError("UPS_005") from exc

        return IdentityClaims(
            uid=decoded["uid"],
            email=decoded.get("email"),
            name=decoded.get("name"),
            picture=decoded.get("picture"),
        )

    async def delete_account(self, uid: str) -> None:
        try:
            await asyncio.to_thread(auth.delete_user, uid, app=self._get_app())
        except auth.UserNotFoundError:
            logger.info("Firebase account already absent", extra={"uid": uid})
