import shutil

from django.test import SimpleTestCase

from leases.exceptions import (
    AgreementExists,
    AgreementNotFound,
    FileCreationFailed,
    InvalidArtifactName,
    TemplateNotFound,
    WorkingCopyExists,
)
from leases.services.repository import Tier
from leases.tests.helpers import LeaseStorageMixin


class TemplateRepositoryTests(LeaseStorageMixin, SimpleTestCase):
    def test_first_use_creates_all_tiers(self):
        self.assertEqual(self.repository.list_names(Tier.TEMPLATES), [])
        for tier in Tier:
            self.assertTrue((self.storage_root / "Leases" / tier.value).is_dir())

    def test_ensure_tiers_is_idempotent(self):
        self.repository.ensure_tiers()
        self.repository.write("Keep", Tier.TEMPLATES, "# Keep\n")
        self.repository.ensure_tiers()
        self.assertEqual(self.repository.list_names(Tier.TEMPLATES), ["Keep"])

    def test_list_names_strips_extension_and_ignores_other_files(self):
        self.repository.write("Pasture", Tier.TEMPLATES, "# Pasture\n")
        self.repository.write("Cash_Rent", Tier.TEMPLATES, "# Cash\n")
        (self.repository.tier_path(Tier.TEMPLATES) / "notes.txt").write_text("ignore me")
        self.assertEqual(self.repository.list_names(Tier.TEMPLATES), ["Cash_Rent", "Pasture"])

    def test_copy_missing_template_raises_and_creates_nothing(self):
        with self.assertRaises(TemplateNotFound) as ctx:
            self.repository.copy("Cash_Rent", from_tier=Tier.TEMPLATES, to_tier=Tier.WORKING, as_name="Working_1")
        self.assertEqual(ctx.exception.name, "Cash_Rent")
        self.assertEqual(str(ctx.exception), "Template 'Cash_Rent' not found")
        self.assertEqual(list(self.repository.tier_path(Tier.WORKING).iterdir()), [])

    def test_copy_duplicates_bytes_into_working_tier(self):
        self.repository.write("Cash_Rent", Tier.TEMPLATES, "# Cash Rent\nRent: {{rent_amount}}\n")
        path = self.repository.copy("Cash_Rent", as_name="Working_Cash_Rent_1")
        self.assertEqual(path.parent, self.repository.tier_path(Tier.WORKING))
        self.assertEqual(
            self.repository.read("Working_Cash_Rent_1", Tier.WORKING),
            "# Cash Rent\nRent: {{rent_amount}}\n",
        )
        self.assertTrue(self.repository.exists("Cash_Rent", Tier.TEMPLATES))

    def test_copy_refuses_to_overwrite_existing_working_copy(self):
        self.repository.write("Cash_Rent", Tier.TEMPLATES, "# New\n")
        self.repository.write("Working_1", Tier.WORKING, "# In flight\n")
        with self.assertRaises(WorkingCopyExists):
            self.repository.copy("Cash_Rent", as_name="Working_1")
        self.assertEqual(self.repository.read("Working_1", Tier.WORKING), "# In flight\n")

    def test_read_missing_completed_agreement(self):
        with self.assertRaises(AgreementNotFound):
            self.repository.read("2024-01-01_missing", Tier.COMPLETED)

    def test_write_reports_io_failure(self):
        blocker = self.repository.tier_path(Tier.COMPLETED) / "Agreement.md"
        blocker.mkdir()
        with self.assertRaises(FileCreationFailed) as ctx:
            self.repository.write("Agreement", Tier.COMPLETED, "# Agreement\n")
        self.assertTrue(str(ctx.exception).startswith("Failed to create file:"))

    def test_completed_collision_is_reported_as_existing_agreement(self):
        self.repository.write("2024-01-01_Agreement", Tier.COMPLETED, "# First\n", exclusive=True)
        with self.assertRaises(AgreementExists) as ctx:
            self.repository.write("2024-01-01_Agreement", Tier.COMPLETED, "# Second\n", exclusive=True)
        self.assertNotIsInstance(ctx.exception, WorkingCopyExists)
        self.assertIn("Completed Lease Agreements", str(ctx.exception))
        self.assertEqual(self.repository.read("2024-01-01_Agreement", Tier.COMPLETED), "# First\n")

    def test_removed_tier_is_recreated_on_next_use(self):
        self.repository.write("Working_1", Tier.WORKING, "# In flight\n")
        shutil.rmtree(self.repository.root / Tier.WORKING.value)
        self.assertEqual(self.repository.list_names(Tier.WORKING), [])
        self.assertTrue((self.repository.root / Tier.WORKING.value).is_dir())

    def test_delete_is_quiet_for_missing_files(self):
        self.assertFalse(self.repository.delete("Nope", Tier.WORKING))
        self.repository.write("Temp", Tier.WORKING, "# Temp\n")
        self.assertTrue(self.repository.delete("Temp", Tier.WORKING))
        self.assertFalse(self.repository.exists("Temp", Tier.WORKING))

    def test_rejects_path_like_names(self):
        for bad in ("", "..", "../escape", "a/b"):
            with self.assertRaises(InvalidArtifactName):
                self.repository.path(bad, Tier.TEMPLATES)
