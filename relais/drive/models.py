"""Data models for Drive folders."""

from dataclasses import dataclass

from .links import folder_link


@dataclass(frozen=True)
class ResolvedFolder:
    """A folder path resolved to its Drive ID. Never persisted."""

    id: str
    path: str  # Normalised, e.g. "/" or "/Invoices/2024"

    @property
    def link(self) -> str:
        return folder_link(self.id)


@dataclass(frozen=True)
class DriveFolder:
    """A folder found while listing My Drive."""

    id: str
    name: str
    path: str

    @property
    def link(self) -> str:
        return folder_link(self.id)
