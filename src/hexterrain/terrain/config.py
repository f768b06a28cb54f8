"""Terrain generation configuration models."""

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..exceptions import ConfigurationError


class SettingsModel(BaseModel):
    """Base for settings models; invalid values raise ConfigurationError."""

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid {type(self).__name__}:\n{exc}") from exc


class NoiseConfig(SettingsModel):
    """Noise sampling parameters for a single field."""

    scale: float = Field(default=10.0, gt=0, description="World units per base feature")
    octaves: int = Field(default=4, ge=1, description="Number of octaves for fBm")
    persistence: float = Field(
        default=0.5, ge=0, description="Amplitude multiplier per octave"
    )
    lacunarity: float = Field(default=2.0, gt=0, description="Frequency multiplier per octave")
    offset: tuple[float, float] = Field(
        default=(0.0, 0.0), description="Sample offset in noise space"
    )
    amplitude: float = Field(default=1.0, ge=0, description="Output multiplier")
    warp_strength: float = Field(
        default=0.0, ge=0, description="Domain warp displacement in world units (0 = off)"
    )
    warp_scale: float = Field(default=20.0, gt=0, description="Domain warp noise scale")


class FalloffConfig(SettingsModel):
    """Edge falloff that pulls the map border toward water."""

    shape: Literal["square", "radial"] = Field(
        default="square", description="Distance metric from the map center"
    )
    falloff_start: float = Field(
        default=0.55, ge=0, description="Normalized distance where falloff begins"
    )
    falloff_end: float = Field(
        default=1.0, gt=0, description="Normalized distance where falloff reaches zero"
    )

    @model_validator(mode="after")
    def _check_range(self) -> "FalloffConfig":
        if self.falloff_start >= self.falloff_end:
            raise ValueError("falloff_start must be below falloff_end")
        return self


class BiomeConfig(SettingsModel):
    """Display data for one biome."""

    name: str = Field(min_length=1)
    color: tuple[int, int, int] = Field(default=(255, 255, 255), description="RGB color")
    tags: list[str] = Field(default_factory=list)


class SubBiomeConfig(BiomeConfig):
    """Biome that overrides a rectangle of the classifier table.

    Ranges are half-open bucket index pairs [lo, hi).
    """

    moisture_range: tuple[int, int]
    temperature_range: tuple[int, int]

    @model_validator(mode="after")
    def _check_ranges(self) -> "SubBiomeConfig":
        for label, (lo, hi) in (
            ("moisture_range", self.moisture_range),
            ("temperature_range", self.temperature_range),
        ):
            if lo < 0 or hi < lo:
                raise ValueError(f"{label} must satisfy 0 <= lo <= hi, got ({lo}, {hi})")
        return self


def _default_sub_biomes() -> list[SubBiomeConfig]:
    return [
        SubBiomeConfig(
            name="Desert",
            color=(232, 208, 146),
            tags=["dry"],
            moisture_range=(0, 3),
            temperature_range=(5, 10),
        ),
        SubBiomeConfig(
            name="Forest",
            color=(52, 120, 58),
            tags=["wood"],
            moisture_range=(5, 9),
            temperature_range=(3, 8),
        ),
        SubBiomeConfig(
            name="Swamp",
            color=(88, 110, 72),
            tags=["wet"],
            moisture_range=(9, 10),
            temperature_range=(4, 10),
        ),
        SubBiomeConfig(
            name="Tundra",
            color=(206, 214, 220),
            tags=["cold"],
            moisture_range=(0, 10),
            temperature_range=(0, 2),
        ),
    ]


class BiomeTableConfig(SettingsModel):
    """Classifier table: a main biome plus rectangular overrides."""

    main_biome: BiomeConfig = Field(
        default_factory=lambda: BiomeConfig(name="Grassland", color=(126, 178, 84))
    )
    sub_biomes: list[SubBiomeConfig] = Field(default_factory=_default_sub_biomes)


class TerrainSettings(SettingsModel):
    """Complete terrain generation configuration."""

    width: int = Field(default=20, ge=1, description="Map width in cells")
    height: int = Field(default=20, ge=1, description="Map height in cells")

    # Island shape
    land_ratio: float = Field(default=0.6, ge=0, le=1, description="Target land fraction")
    lake_threshold: float = Field(
        default=0.3, ge=0, le=1, description="Water corner fraction that makes a lake"
    )
    peak_multiplier: float = Field(
        default=1.1, gt=0, description="Elevation redistribution scale"
    )
    shape_noise: NoiseConfig = Field(default_factory=NoiseConfig)
    shape_falloff: FalloffConfig = Field(default_factory=FalloffConfig)

    # Rivers
    river_seed: int = Field(default=0, description="Offset added to the terrain seed")
    river_spawn_range: tuple[float, float] = Field(
        default=(0.3, 0.9), description="Elevation range where rivers may start"
    )
    river_spawn_multiplier: float = Field(
        default=1.0, ge=0, description="Spawn attempts per average map side"
    )

    # Biomes
    river_moisture_factor: float = Field(
        default=0.2, ge=0, le=1, description="Moisture per unit of river flow"
    )
    sea_provides_moisture: bool = Field(
        default=False, description="Treat sea and coast corners as fully wet"
    )
    biome_noise: NoiseConfig = Field(
        default_factory=lambda: NoiseConfig(scale=6.0, octaves=3, amplitude=0.2)
    )
    biome_table: BiomeTableConfig = Field(default_factory=BiomeTableConfig)

    @model_validator(mode="after")
    def _check_spawn_range(self) -> "TerrainSettings":
        lo, hi = self.river_spawn_range
        if not 0.0 <= lo <= hi <= 1.0:
            raise ValueError(
                f"river_spawn_range must satisfy 0 <= lo <= hi <= 1, got ({lo}, {hi})"
            )
        return self
