from __future__ import annotations

import logging

from leases.services.repository import TemplateRepository, Tier
from leases.template_catalog import STOCK_TEMPLATES

logger = logging.getLogger(__name__)


def seed_templates_if_needed(repository: TemplateRepository, force: bool = False) -> list[str]:
    """
    Write the stock templates into an empty Templates tier.

    With ``force`` the catalog is rewritten even if templates already exist,
    replacing stock templates of the same name. Returns the names written.
    """
    existing = repository.list_names(Tier.TEMPLATES)
    if existing and not force:
        logger.debug("Templates tier already holds %s template(s); skipping seed", len(existing))
        return []

    written = []
    for name, content in STOCK_TEMPLATES.items():
        repository.write(name, Tier.TEMPLATES, content)
        written.append(name)
    logger.info("Seeded %s lease template(s) into %s", len(written), repository.tier_path(Tier.TEMPLATES))
    return written
