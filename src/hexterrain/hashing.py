"""Stable string hashing for seed salting and biome ids."""

_UINT32_MASK = 0xFFFFFFFF


def sdbm_lower(text: str) -> int:
    """SDBM hash of the lowercased text as a signed 32-bit integer.

    Python's built-in hash() is randomized per process, so anything that
    must survive between runs (seeds, biome ids) goes through this instead.
    """
    value = 0
    for ch in text.lower():
        value = (ord(ch) + (value << 6) + (value << 16) - value) & _UINT32_MASK
    if value >= 1 << 31:
        value -= 1 << 32
    return value


def salted_seed(seed: int, salt: str) -> int:
    """Derive an independent seed for a named field.

    Returns a value in [0, 2**32) so it can be fed to numpy generators.
    """
    return (seed + sdbm_lower(salt)) & _UINT32_MASK
