"""On-disk configuration: profile registry and per-profile token paths.

Layout under the config directory (default ``~/.config/gdrivecli``)::

    config.json            {"profiles": {"<name>": {"client_secrets_file": "..."}}}
    tokens/<name>.json     OAuth token of the profile (written by `auth login`)
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Optional

from gdrivecli.auth import AuthInfo
from gdrivecli.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV: str = "GDRIVECLI_CONFIG_DIR"
DEFAULT_PROFILE: str = "default"

_PROFILE_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")


@dataclass(frozen=True)
class Settings:
    """Filesystem locations used by the CLI."""

    config_dir: str

    @property
    def config_file(self) -> str:
        return os.path.join(self.config_dir, "config.json")

    @property
    def tokens_dir(self) -> str:
        return os.path.join(self.config_dir, "tokens")

    def token_file(self, profile: str) -> str:
        validate_profile_name(profile)
        return os.path.join(self.tokens_dir, f"{profile}.json")


def load_settings(config_dir: Optional[str] = None) -> Settings:
    """Resolve the config directory: explicit value, then env var, then ~/.config."""
    if not config_dir:
        config_dir = os.environ.get(CONFIG_DIR_ENV, "").strip() or os.path.join(
            os.path.expanduser("~"), ".config", "gdrivecli"
        )
    return Settings(config_dir=os.path.abspath(os.path.expanduser(config_dir)))


def validate_profile_name(profile: str) -> None:
    if not isinstance(profile, str) or not _PROFILE_NAME_RE.match(profile):
        raise ConfigError(
            f"Invalid profile name: {profile!r} (letters, digits, '.', '-', '_')",
            details={"profile": profile},
        )


class ProfileRegistry:
    """Read/write the profile -> client secrets mapping in config.json."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def list_profiles(self) -> list[str]:
        return sorted(self._load()["profiles"])

    def get_client_secrets_file(self, profile: str) -> str:
        validate_profile_name(profile)
        entry = self._load()["profiles"].get(profile)
        path = entry.get("client_secrets_file") if isinstance(entry, dict) else None
        if not isinstance(path, str) or not path:
            raise ConfigError(
                f"No OAuth client credentials configured for profile '{profile}'. "
                "Run 'gdrive auth login --credentials <client_secret.json>'.",
                details={"profile": profile, "config_file": self._settings.config_file},
            )
        return path

    def set_client_secrets_file(self, profile: str, path: str) -> None:
        validate_profile_name(profile)
        data = self._load()
        data["profiles"][profile] = {"client_secrets_file": os.path.abspath(path)}
        self._save(data)
        logger.info("profile %s now uses client secrets %s", profile, path)

    def remove_profile(self, profile: str) -> bool:
        validate_profile_name(profile)
        data = self._load()
        if profile not in data["profiles"]:
            return False
        del data["profiles"][profile]
        self._save(data)
        return True

    def auth_info(self, profile: str) -> AuthInfo:
        """Build the AuthInfo for `profile`. Raises ConfigError if it is not configured."""
        return AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": self.get_client_secrets_file(profile),
                "token_file": self._settings.token_file(profile),
                "profile": profile,
            },
        )

    def _load(self) -> dict[str, Any]:
        path = self._settings.config_file
        if not os.path.exists(path):
            return {"profiles": {}}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise ConfigError(
                f"Failed to read config file: {path}",
                details={"config_file": path},
                cause=exc,
            ) from exc

        if not isinstance(data, dict) or not isinstance(data.get("profiles", {}), dict):
            raise ConfigError(
                f"Malformed config file: {path}",
                details={"config_file": path},
            )
        data.setdefault("profiles", {})
        return data

    def _save(self, data: dict[str, Any]) -> None:
        path = self._settings.config_file
        os.makedirs(os.path.dirname(path), exist_ok=True)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.write("\n")
        except OSError as exc:
            raise ConfigError(
                f"Failed to write config file: {path}",
                details={"config_file": path},
                cause=exc,
            ) from exc
