import tempfile
from pathlib import Path

from django.test import SimpleTestCase

from leases.services.hashing import content_hash, file_hash, short_hash

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class AuditHashTests(SimpleTestCase):
    def test_known_digests(self):
        self.assertEqual(content_hash(b""), EMPTY_SHA256)
        self.assertEqual(content_hash(b"abc"), ABC_SHA256)
        self.assertEqual(content_hash("abc"), ABC_SHA256)

    def test_digest_is_stable_lowercase_hex(self):
        digest = content_hash("# Lease\nRent: 2500.50\n")
        self.assertEqual(digest, content_hash("# Lease\nRent: 2500.50\n"))
        self.assertEqual(len(digest), 64)
        self.assertRegex(digest, r"^[0-9a-f]{64}$")

    def test_single_character_change_alters_digest(self):
        self.assertNotEqual(content_hash("Rent: 2500.50"), content_hash("Rent: 2500.51"))

    def test_short_hash_is_prefix(self):
        self.assertEqual(short_hash(ABC_SHA256), "ba7816bf")

    def test_file_hash_matches_content_hash(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "agreement.md"
            path.write_bytes("# Lease – café\n".encode("utf-8"))
            self.assertEqual(file_hash(path), content_hash("# Lease – café\n"))
