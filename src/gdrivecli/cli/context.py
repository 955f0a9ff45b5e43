"""Per-invocation CLI state."""

from __future__ import annotations

from dataclasses import dataclass

from gdrivecli.config import ProfileRegistry, Settings
from gdrivecli.manager import GoogleDriveManager
from gdrivecli.session import get_authorized_client


@dataclass(frozen=True)
class CliContext:
    """Resolved once in the `gdrive` group and passed to every command."""

    profile: str
    settings: Settings
    verbose: bool = False

    @property
    def registry(self) -> ProfileRegistry:
        return ProfileRegistry(self.settings)

    def manager(self) -> GoogleDriveManager:
        client = get_authorized_client(self.profile, self.settings)
        return GoogleDriveManager.from_controller(client)
