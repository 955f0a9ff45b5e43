"""OAuth client utilities for gdrivecli."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from gdrivecli.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthStatus:
    """Snapshot of a profile's stored token."""

    profile: str
    token_file: str
    exists: bool
    valid: bool = False
    expired: bool = False
    has_refresh_token: bool = False
    expiry: Optional[datetime] = None
    scopes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile,
            "tokenFile": self.token_file,
            "authenticated": self.exists and (self.valid or self.has_refresh_token),
            "valid": self.valid,
            "expired": self.expired,
            "expiry": self.expiry.isoformat() if self.expiry else None,
            "scopes": list(self.scopes),
        }


class OAuthClient:
    """Create and manage OAuth credentials and Drive API service objects."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "oauth":
            raise InvalidArgumentError("OAuthClient requires AuthInfo(kind='oauth')")
        self._auth_info = auth_info

    def load_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return stored OAuth credentials without user interaction.

        Args:
            scopes: OAuth scopes.
            ensure_valid: If True, refresh expired credentials when possible.

        Returns:
            google.oauth2.credentials.Credentials

        Raises:
            AuthError: if no token is stored, or it cannot be loaded/refreshed.
            InvalidArgumentError: if scopes is invalid.
        """
        _check_scopes(scopes)

        token_file = self._auth_info.token_file
        if not os.path.exists(token_file):
            raise AuthError(
                f"Not authenticated for profile '{self._auth_info.profile}'. "
                "Run 'gdrive auth login' first.",
                details={"token_file": token_file},
            )

        try:
            creds = Credentials.from_authorized_user_file(token_file, scopes=list(scopes))
        except (OSError, ValueError) as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

        if not ensure_valid:
            return creds

        if not creds.valid and creds.refresh_token:
            logger.debug("refreshing OAuth token for profile %s", self._auth_info.profile)
            try:
                creds.refresh(Request())
            except GoogleAuthError as exc:
                raise AuthError(
                    "Failed to refresh OAuth credentials; run 'gdrive auth login' again",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc
            self._save_credentials(creds)

        if not creds.valid:
            raise AuthError(
                "Stored OAuth token is invalid or expired; run 'gdrive auth login' again",
                details={"token_file": token_file},
            )
        return creds

    def login(self, scopes: Sequence[str]):
        """
        Run the installed-app OAuth flow and store the resulting token.

        Raises:
            AuthError: if the client secrets are unusable or the flow fails.
        """
        _check_scopes(scopes)

        client_secrets = self._auth_info.client_secrets_file
        if not os.path.exists(client_secrets):
            raise AuthError(
                f"OAuth client secrets file not found: {client_secrets}",
                details={"client_secrets_file": client_secrets},
            )

        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                client_secrets,
                scopes=list(scopes),
            )
            creds = flow.run_local_server(port=0)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={
                    "client_secrets_file": client_secrets,
                    "token_file": self._auth_info.token_file,
                },
                cause=exc,
            ) from exc

        self._save_credentials(creds)
        logger.info("stored OAuth token for profile %s", self._auth_info.profile)
        return creds

    def logout(self) -> bool:
        """Delete the stored token. Returns False if there was none."""
        token_file = self._auth_info.token_file
        if not os.path.exists(token_file):
            return False
        try:
            os.remove(token_file)
        except OSError as exc:
            raise AuthError(
                "Failed to remove OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
        return True

    def status(self, scopes: Sequence[str]) -> AuthStatus:
        """Inspect the stored token without refreshing it."""
        token_file = self._auth_info.token_file
        result = AuthStatus(
            profile=self._auth_info.profile,
            token_file=token_file,
            exists=os.path.exists(token_file),
        )
        if not result.exists:
            return result

        creds = self.load_credentials(scopes, ensure_valid=False)
        result.valid = bool(creds.valid)
        result.expired = bool(creds.expired)
        result.has_refresh_token = bool(creds.refresh_token)
        result.expiry = creds.expiry
        result.scopes = list(creds.scopes or [])
        return result

    def build_drive_service(self, scopes: Sequence[str]):
        """
        Build a Drive API service resource from stored credentials.

        Returns:
            googleapiclient.discovery.Resource
        """
        creds = self.load_credentials(scopes=scopes, ensure_valid=True)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    def _save_credentials(self, creds) -> None:
        token_file = self._auth_info.token_file
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc


def _check_scopes(scopes: Sequence[str]) -> None:
    if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
        raise InvalidArgumentError("scopes must be a non-empty sequence of strings")
