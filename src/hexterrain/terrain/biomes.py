"""Biome classifier table keyed by discretized moisture and temperature."""

from typing import Iterable, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel

from ..exceptions import ConfigurationError
from ..hashing import sdbm_lower
from .config import BiomeConfig, BiomeTableConfig, SubBiomeConfig

MOISTURE_LEVELS = 10
TEMPERATURE_LEVELS = 10


class Biome(BaseModel, frozen=True):
    """Immutable biome identity and display data."""

    id: int
    name: str
    color: tuple[int, int, int]
    tags: frozenset[str] = frozenset()

    @classmethod
    def from_config(cls, config: BiomeConfig) -> "Biome":
        return cls(
            id=sdbm_lower(config.name),
            name=config.name,
            color=config.color,
            tags=frozenset(config.tags),
        )


class BiomeTable:
    """Fixed lookup grid of biomes indexed by (moisture, temperature) bucket.

    The main biome fills the whole grid, then each sub-biome overwrites its
    rectangle in declaration order, so later entries win where they overlap.
    """

    def __init__(
        self,
        main_biome: BiomeConfig,
        sub_biomes: Iterable[SubBiomeConfig] = (),
        moisture_levels: int = MOISTURE_LEVELS,
        temperature_levels: int = TEMPERATURE_LEVELS,
    ) -> None:
        if moisture_levels < 1 or temperature_levels < 1:
            raise ConfigurationError(
                f"Biome table needs at least one bucket per axis, "
                f"got {moisture_levels}x{temperature_levels}"
            )

        self.moisture_levels = moisture_levels
        self.temperature_levels = temperature_levels

        biomes: dict[int, Biome] = {}
        main = self._register(biomes, main_biome)
        grid = np.full((moisture_levels, temperature_levels), main.id, dtype=np.int64)

        for sub_config in sub_biomes:
            self._check_range(sub_config.name, "moisture", sub_config.moisture_range, moisture_levels)
            self._check_range(
                sub_config.name, "temperature", sub_config.temperature_range, temperature_levels
            )
            sub = self._register(biomes, sub_config)
            m_lo, m_hi = sub_config.moisture_range
            t_lo, t_hi = sub_config.temperature_range
            grid[m_lo:m_hi, t_lo:t_hi] = sub.id

        grid.flags.writeable = False
        self._grid = grid
        self._biomes = biomes
        self.main_biome = main

    @classmethod
    def from_config(
        cls,
        config: BiomeTableConfig,
        moisture_levels: int = MOISTURE_LEVELS,
        temperature_levels: int = TEMPERATURE_LEVELS,
    ) -> "BiomeTable":
        return cls(config.main_biome, config.sub_biomes, moisture_levels, temperature_levels)

    @property
    def biomes(self) -> Mapping[int, Biome]:
        """All biomes in the table keyed by id, in declaration order."""
        return dict(self._biomes)

    @property
    def grid(self) -> NDArray[np.int64]:
        """Read-only (moisture_levels, temperature_levels) array of biome ids."""
        return self._grid

    def get(self, biome_id: int) -> Biome:
        """Look up a biome by id.

        Raises:
            KeyError: If no biome in the table has that id.
        """
        return self._biomes[biome_id]

    def evaluate_biome(self, moisture: float, temperature: float) -> Biome:
        """Return the biome for a moisture/temperature pair.

        Inputs outside [0, 1] are clamped, never rejected.
        """
        m, t = self._bucket(np.asarray([moisture]), np.asarray([temperature]))
        return self._biomes[int(self._grid[m[0], t[0]])]

    def evaluate_biome_ids(
        self,
        moisture: ArrayLike,
        temperature: ArrayLike,
    ) -> NDArray[np.int64]:
        """Vectorized lookup of biome ids for matching moisture/temperature arrays."""
        m, t = self._bucket(np.asarray(moisture), np.asarray(temperature))
        return self._grid[m, t]

    def _bucket(
        self,
        moisture: NDArray,
        temperature: NDArray,
    ) -> tuple[NDArray[np.int64], NDArray[np.int64]]:
        m = np.clip(np.nan_to_num(moisture.astype(np.float64), nan=0.0), 0.0, 1.0)
        t = np.clip(np.nan_to_num(temperature.astype(np.float64), nan=0.0), 0.0, 1.0)
        m_index = np.clip(np.floor(m * self.moisture_levels).astype(np.int64), 0, self.moisture_levels - 1)
        t_index = np.clip(
            np.floor(t * self.temperature_levels).astype(np.int64), 0, self.temperature_levels - 1
        )
        return m_index, t_index

    @staticmethod
    def _register(biomes: dict[int, Biome], config: BiomeConfig) -> Biome:
        biome = Biome.from_config(config)
        existing = biomes.get(biome.id)
        if existing is not None:
            raise ConfigurationError(
                f"Biome '{config.name}' collides with '{existing.name}' (id {biome.id})"
            )
        biomes[biome.id] = biome
        return biome

    @staticmethod
    def _check_range(name: str, axis: str, bucket_range: tuple[int, int], levels: int) -> None:
        lo, hi = bucket_range
        if not 0 <= lo <= hi <= levels:
            raise ConfigurationError(
                f"Biome '{name}' {axis} range ({lo}, {hi}) is outside [0, {levels}]"
            )
