"""Profile-scoped construction of an authorized Drive client."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from gdrivecli.config import ProfileRegistry, Settings, validate_profile_name
from gdrivecli.controller import GoogleDriveController

logger = logging.getLogger(__name__)


def get_authorized_client(
    profile: str,
    settings: Settings,
    *,
    scopes: Optional[Sequence[str]] = None,
) -> GoogleDriveController:
    """
    Return a Drive client authorized with the stored token of `profile`.

    Raises:
        ConfigError: if the profile has no client credentials configured.
        AuthError: if no valid token exists and it cannot be refreshed silently.
    """
    validate_profile_name(profile)
    auth_info = ProfileRegistry(settings).auth_info(profile)
    logger.debug("building Drive client for profile %s", profile)
    return GoogleDriveController(auth_info, scopes=scopes)
