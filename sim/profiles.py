# sim/profiles.py
"""
Plant profiles
--------------
Static per-species moisture constants: the optimal moisture band, the
percentage lost per tick under a neutral environment, and the percentage
gained per watering event.

Profiles are built from the `species` section of the config. Construction is
a trusted boundary: values are not validated here, and the engine clamps its
outputs regardless of what a profile contains.
"""

from dataclasses import dataclass
from typing import Dict


class UnknownSpeciesError(KeyError):
    """Raised when a plant references a species with no configured profile."""


@dataclass(frozen=True)
class PlantProfile:
    optimal_min: float
    optimal_max: float
    decay_rate: float
    water_absorption: float

    @classmethod
    def from_dict(cls, cfg):
        return cls(
            optimal_min=float(cfg['optimal_min']),
            optimal_max=float(cfg['optimal_max']),
            decay_rate=float(cfg['decay_rate']),
            water_absorption=float(cfg['water_absorption']),
        )


def load_profiles(cfg) -> Dict[str, PlantProfile]:
    """Build the species -> PlantProfile table from a config dict."""
    table = (cfg or {}).get('species', {})
    return {name: PlantProfile.from_dict(values) for name, values in table.items()}


def get_profile(profiles: Dict[str, PlantProfile], species: str) -> PlantProfile:
    try:
        return profiles[species]
    except KeyError:
        raise UnknownSpeciesError(f"No plant profile configured for species {species!r}") from None
