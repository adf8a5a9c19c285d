"""
File-system backed store for lease artifacts.

Layout under the injected base directory::

    Leases/
      Templates/            seeded masters, read-only in practice
      WorkingCopies/        transient per-agreement copies
      CompletedAgreements/  immutable composed documents

Artifacts are ``.md`` files addressed by their base name.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from django.conf import settings

from leases.exceptions import (
    AgreementExists,
    AgreementNotFound,
    ArtifactExists,
    FileCreationFailed,
    InvalidArtifactName,
    TemplateNotFound,
    WorkingCopyExists,
    WorkingTemplateNotFound,
)

logger = logging.getLogger(__name__)

ROOT_DIRECTORY = "Leases"
ARTIFACT_SUFFIX = ".md"


class Tier(str, Enum):
    TEMPLATES = "Templates"
    WORKING = "WorkingCopies"
    COMPLETED = "CompletedAgreements"

    @property
    def label(self) -> str:
        return {
            Tier.TEMPLATES: "Lease Template Masters",
            Tier.WORKING: "Working Lease Templates",
            Tier.COMPLETED: "Completed Lease Agreements",
        }[self]


_NOT_FOUND = {
    Tier.TEMPLATES: TemplateNotFound,
    Tier.WORKING: WorkingTemplateNotFound,
    Tier.COMPLETED: AgreementNotFound,
}

_EXISTS = {
    Tier.TEMPLATES: ArtifactExists,
    Tier.WORKING: WorkingCopyExists,
    Tier.COMPLETED: AgreementExists,
}


class TemplateRepository:
    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)
        self.root = self.base_dir / ROOT_DIRECTORY

    @classmethod
    def from_settings(cls) -> "TemplateRepository":
        return cls(settings.LEASE_STORAGE_ROOT)

    def ensure_tiers(self) -> None:
        for tier in Tier:
            self.tier_path(tier)

    def tier_path(self, tier: Tier) -> Path:
        """The tier directory, created if it is missing."""
        tier = Tier(tier)
        directory = self.root / tier.value
        if not directory.is_dir():
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FileCreationFailed(f"{directory}: {exc.strerror or exc}") from exc
            logger.info("Created %s directory: %s", tier.label, directory)
        return directory

    def path(self, name: str, tier: Tier) -> Path:
        _validate_name(name)
        return self.tier_path(tier) / f"{name}{ARTIFACT_SUFFIX}"

    def exists(self, name: str, tier: Tier) -> bool:
        return self.path(name, tier).is_file()

    def list_names(self, tier: Tier) -> list[str]:
        directory = self.tier_path(tier)
        return sorted(p.stem for p in directory.iterdir() if p.is_file() and p.suffix == ARTIFACT_SUFFIX)

    def copy(
        self,
        name: str,
        *,
        from_tier: Tier = Tier.TEMPLATES,
        to_tier: Tier = Tier.WORKING,
        as_name: str | None = None,
    ) -> Path:
        """
        Copy an artifact between tiers. The destination must not exist; an
        existing file is never overwritten.
        """
        target_name = as_name or name
        source = self.path(name, from_tier)
        if not source.is_file():
            raise _NOT_FOUND[Tier(from_tier)](name)
        destination = self.path(target_name, to_tier)
        self._write_bytes(destination, source.read_bytes(), exclusive=True, name=target_name, tier=to_tier)
        logger.info("Copied '%s' from %s to %s as '%s'", name, from_tier.value, to_tier.value, target_name)
        return destination

    def read(self, name: str, tier: Tier) -> str:
        return self.read_bytes(name, tier).decode("utf-8")

    def read_bytes(self, name: str, tier: Tier) -> bytes:
        path = self.path(name, tier)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise _NOT_FOUND[Tier(tier)](name) from None

    def write(self, name: str, tier: Tier, content: str, *, exclusive: bool = False) -> Path:
        path = self.path(name, tier)
        self._write_bytes(path, content.encode("utf-8"), exclusive=exclusive, name=name, tier=tier)
        return path

    def delete(self, name: str, tier: Tier, *, missing_ok: bool = True) -> bool:
        path = self.path(name, tier)
        try:
            path.unlink()
        except FileNotFoundError:
            if not missing_ok:
                raise _NOT_FOUND[Tier(tier)](name) from None
            return False
        return True

    def _write_bytes(self, path: Path, payload: bytes, *, exclusive: bool, name: str, tier: Tier) -> None:
        mode = "xb" if exclusive else "wb"
        try:
            with open(path, mode) as fh:
                fh.write(payload)
        except FileExistsError:
            raise _EXISTS[Tier(tier)](name) from None
        except OSError as exc:
            raise FileCreationFailed(f"{path.name}: {exc.strerror or exc}") from exc


def _validate_name(name: str) -> None:
    if not name or name in {".", ".."} or "/" in name or "\\" in name:
        raise InvalidArtifactName(name)


def name_from_file_name(file_name: str) -> str:
    return file_name[: -len(ARTIFACT_SUFFIX)] if file_name.endswith(ARTIFACT_SUFFIX) else file_name
