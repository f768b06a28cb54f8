"""Tests for stable string hashing."""

from hexterrain.hashing import salted_seed, sdbm_lower


class TestSdbmLower:
    """Tests for the SDBM hash."""

    def test_empty_string(self) -> None:
        """Empty string hashes to zero."""
        assert sdbm_lower("") == 0

    def test_single_character(self) -> None:
        """Single character hashes to its code point."""
        assert sdbm_lower("a") == 97

    def test_known_value(self) -> None:
        """Two characters follow the SDBM recurrence."""
        assert sdbm_lower("ab") == 98 + (97 << 6) + (97 << 16) - 97

    def test_case_insensitive(self) -> None:
        """Case does not change the hash."""
        assert sdbm_lower("Grassland") == sdbm_lower("GRASSLAND") == sdbm_lower("grassland")

    def test_signed_32_bit(self) -> None:
        """Long strings wrap into the signed 32-bit range."""
        for text in ("temperature", "moisture", "a much longer biome name than usual"):
            value = sdbm_lower(text)
            assert -(1 << 31) <= value < (1 << 31)

    def test_distinct_names(self) -> None:
        """Different field names hash differently."""
        names = ["terrain", "elevation", "moisture", "temperature"]
        assert len({sdbm_lower(n) for n in names}) == len(names)


class TestSaltedSeed:
    """Tests for seed salting."""

    def test_unsigned_range(self) -> None:
        """Salted seeds are valid numpy seeds."""
        for seed in (-5, 0, 12345, 2**40):
            value = salted_seed(seed, "moisture")
            assert 0 <= value < 2**32

    def test_deterministic(self) -> None:
        """Same seed and salt give the same value."""
        assert salted_seed(7, "terrain") == salted_seed(7, "terrain")

    def test_salt_changes_seed(self) -> None:
        """Different salts give independent streams."""
        assert salted_seed(7, "moisture") != salted_seed(7, "temperature")

    def test_matches_hash(self) -> None:
        """Seed zero yields the unsigned salt hash."""
        assert salted_seed(0, "elevation") == sdbm_lower("elevation") & 0xFFFFFFFF
