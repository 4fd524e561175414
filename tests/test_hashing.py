"""Unit tests for hashing utilities."""

import hashlib

from jobdigest.utils.hashing import compute_job_id, hash_string


class TestComputeJobId:
    """Tests for compute_job_id function."""

    def test_compute_job_id_basic(self):
        job_id = compute_job_id("Rust Engineer", "Acme")

        # Should return a 64-character hex string (SHA256)
        assert len(job_id) == 64
        assert all(c in "0123456789abcdef" for c in job_id)

    def test_compute_job_id_matches_concatenation(self):
        """No separator is inserted between title and company."""
        expected = hashlib.sha256("rust engineeracme".encode("utf-8")).hexdigest()

        assert compute_job_id("Rust Engineer", "Acme") == expected

    def test_compute_job_id_case_insensitive(self):
        assert compute_job_id("Rust Engineer", "Acme") == compute_job_id("RUST ENGINEER", "acme")

    def test_compute_job_id_different_for_different_inputs(self):
        assert compute_job_id("Rust Engineer", "Acme") != compute_job_id("Go Engineer", "Acme")
        assert compute_job_id("Rust Engineer", "Acme") != compute_job_id("Rust Engineer", "Initech")

    def test_boundary_collision(self):
        """Title and company are concatenated, so shifting the boundary collides."""
        assert compute_job_id("ab", "c") == compute_job_id("a", "bc")


class TestHashString:
    """Tests for hash_string function."""

    def test_hash_string_deterministic(self):
        assert hash_string("test value") == hash_string("test value")

    def test_hash_string_unicode(self):
        result = hash_string("Ingénieur Rust 日本")

        assert len(result) == 64

    def test_hash_string_known_value(self):
        assert hash_string("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
