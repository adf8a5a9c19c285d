"""
Agreement factory: turns a working copy into a named, hashed, immutable
completed agreement.

One in-flight creation per working-copy name is assumed; callers must not run
two creations against the same name concurrently.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator

from django.utils import timezone

from leases.exceptions import AgreementIntegrityError, AgreementNotFound, WorkingTemplateNotFound
from leases.services import composer
from leases.services.hashing import file_hash, short_hash
from leases.services.repository import TemplateRepository, Tier, name_from_file_name

logger = logging.getLogger(__name__)

DISCRIMINATOR_LENGTH = 8


@dataclass(frozen=True)
class CompletedAgreementInfo:
    file_name: str
    file_path: str
    file_hash: str
    short_hash: str
    long_hash: str
    lease_data: composer.LeaseCreationData
    created_at: datetime


def _discriminator() -> str:
    return uuid.uuid4().hex[:DISCRIMINATOR_LENGTH]


def working_name_for(template_name: str) -> str:
    return f"Working_{template_name}_{_discriminator()}"


def completed_file_name(working_name: str, created_on) -> str:
    return f"{created_on:%Y-%m-%d}_{working_name}_{_discriminator()}.md"


class AgreementFactory:
    def __init__(
        self,
        repository: TemplateRepository,
        *,
        compose: Callable[..., str] = composer.compose,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.repository = repository
        self.compose = compose
        self.clock = clock

    def create_completed_agreement(
        self,
        working_name: str,
        lease_data: composer.LeaseCreationData,
    ) -> CompletedAgreementInfo:
        """
        Compose the named working copy and persist it to the completed tier.

        The returned hash is computed over the bytes read back from disk, so a
        later re-hash of the same file must match. The working copy is left in
        place; use ``working_copy`` (or ``create_from_template``) for cleanup.
        """
        if not self.repository.exists(working_name, Tier.WORKING):
            raise WorkingTemplateNotFound(working_name)

        created_at = self.clock()
        template_text = self.repository.read(working_name, Tier.WORKING)
        document = self.compose(template_text, lease_data, created_at=created_at)

        created_on = timezone.localdate(created_at) if timezone.is_aware(created_at) else created_at.date()
        file_name = completed_file_name(working_name, created_on)
        path = self.repository.write(
            name_from_file_name(file_name), Tier.COMPLETED, document, exclusive=True
        )
        full_hash = file_hash(path)

        logger.info("Created lease agreement %s (%s)", file_name, short_hash(full_hash))
        return CompletedAgreementInfo(
            file_name=file_name,
            file_path=str(path.resolve()),
            file_hash=full_hash,
            short_hash=short_hash(full_hash),
            long_hash=full_hash,
            lease_data=lease_data,
            created_at=created_at,
        )

    @contextmanager
    def working_copy(self, template_name: str, working_name: str | None = None) -> Iterator[str]:
        """
        Copy a template into the working tier for the duration of the block.
        The copy is removed on every exit path; a failed removal is logged and
        never masks the block's own outcome.
        """
        working_name = working_name or working_name_for(template_name)
        self.repository.copy(template_name, from_tier=Tier.TEMPLATES, to_tier=Tier.WORKING, as_name=working_name)
        try:
            yield working_name
        finally:
            try:
                self.repository.delete(working_name, Tier.WORKING)
                logger.debug("Cleaned up working template %s", working_name)
            except OSError as exc:
                logger.warning("Failed to clean up working template %s: %s", working_name, exc)

    def create_from_template(
        self,
        template_name: str,
        lease_data: composer.LeaseCreationData,
        *,
        working_name: str | None = None,
    ) -> CompletedAgreementInfo:
        with self.working_copy(template_name, working_name) as name:
            return self.create_completed_agreement(name, lease_data)

    def discard(self, info: CompletedAgreementInfo) -> None:
        """Remove a completed agreement that was never attached to a committed lease."""
        try:
            self.repository.delete(name_from_file_name(info.file_name), Tier.COMPLETED)
            logger.info("Discarded orphaned agreement %s", info.file_name)
        except OSError as exc:
            logger.warning("Failed to discard orphaned agreement %s: %s", info.file_name, exc)


def verify_agreement(repository: TemplateRepository, file_name: str, expected_hash: str) -> str:
    """Re-hash a stored agreement; raise AgreementIntegrityError on any mismatch."""
    name = name_from_file_name(file_name)
    try:
        actual = file_hash(repository.path(name, Tier.COMPLETED))
    except FileNotFoundError:
        raise AgreementNotFound(name) from None
    if actual != expected_hash.lower():
        logger.error("Agreement %s failed integrity check", file_name)
        raise AgreementIntegrityError(file_name, expected_hash, actual)
    return actual
