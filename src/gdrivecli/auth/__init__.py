"""Public auth exports for gdrivecli."""

from __future__ import annotations

from .auth_info import AuthInfo
from .oauth_client import AuthStatus, OAuthClient

__all__ = ["AuthInfo", "AuthStatus", "OAuthClient"]
