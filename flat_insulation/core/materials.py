"""
Flat Insulation Calculator - Materials Database
===============================================
Temperature-dependent thermal conductivity tables for sheet insulation, and
the registry the calculation core reads them from.

The registry is copy-on-write: every mutation builds a new immutable mapping
and swaps it in under a lock, so a calculation holding a snapshot never
observes a partially updated table.

Author: Flat Insulation Calculator
Version: 1.0.0
License: MIT
"""

import json
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .exceptions import InvalidInputError
from ..utils.logger import get_logger, log_function


# =============================================================================
# MATERIAL PROFILE
# =============================================================================

@dataclass(frozen=True)
class MaterialThermalProfile:
    """λ(T) table for one insulation material.

    `anchors` holds (temperature °C, λ W/(m·K)) pairs. They are sorted
    ascending on construction; duplicates and non-positive λ are rejected.
    """
    material_id: str
    anchors: Tuple[Tuple[float, float], ...]
    name: str = ""

    def __post_init__(self):
        pairs = tuple(sorted((float(t), float(lam)) for t, lam in self.anchors))
        if not pairs:
            raise InvalidInputError(
                f"Material '{self.material_id}' has no conductivity anchors",
                context={'material_id': self.material_id},
            )
        temps = [t for t, _ in pairs]
        if len(set(temps)) != len(temps):
            raise InvalidInputError(
                f"Material '{self.material_id}' has duplicate temperature anchors",
                context={'material_id': self.material_id, 'temperatures': temps},
            )
        for t, lam in pairs:
            if not lam > 0:
                raise InvalidInputError(
                    f"Material '{self.material_id}': lambda at {t}°C must be positive, got {lam}",
                    context={'material_id': self.material_id, 'temperature': t, 'lambda': lam},
                )
        object.__setattr__(self, 'anchors', pairs)
        if not self.name:
            object.__setattr__(self, 'name', self.material_id)

    @property
    def temperatures(self) -> Tuple[float, ...]:
        return tuple(t for t, _ in self.anchors)

    @property
    def conductivities(self) -> Tuple[float, ...]:
        return tuple(lam for _, lam in self.anchors)

    def lambda_at_anchor(self, temperature: float) -> Optional[float]:
        """Stored λ if temperature is exactly an anchor, else None."""
        for t, lam in self.anchors:
            if t == temperature:
                return lam
        return None

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            'material_id': self.material_id,
            'name': self.name,
            'lambda': {str(t): lam for t, lam in self.anchors},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'MaterialThermalProfile':
        """Deserialize from dictionary.

        Accepts the `{"lambda": {"<temp>": <λ>, ...}}` table used by material
        data files, or an `anchors` list of pairs.
        """
        if 'lambda' in data:
            anchors = tuple((float(t), float(lam)) for t, lam in data['lambda'].items())
        else:
            anchors = tuple((float(t), float(lam)) for t, lam in data.get('anchors', []))
        return cls(
            material_id=data['material_id'],
            anchors=anchors,
            name=data.get('name', ''),
        )


# =============================================================================
# MATERIALS DATABASE
# =============================================================================

def _profile(material_id: str, name: str, table: Dict[float, float]) -> MaterialThermalProfile:
    return MaterialThermalProfile(material_id, tuple(table.items()), name)


DEFAULT_MATERIAL_ID = 'ELASTOMERIC_ST'


class MaterialsDatabase:
    """Registry of material thermal profiles keyed by identifier."""

    # Built-in sheet materials, λ in W/(m·K) per temperature in °C
    BUILTIN_PROFILES = {
        'ELASTOMERIC_ST': _profile('ELASTOMERIC_ST', 'Elastomeric Foam (Standard)', {
            -20: 0.033, 0: 0.035, 20: 0.036, 40: 0.038, 70: 0.041, 105: 0.045,
        }),
        'ELASTOMERIC_ECO': _profile('ELASTOMERIC_ECO', 'Elastomeric Foam (Halogen-Free)', {
            -20: 0.035, 0: 0.036, 20: 0.038, 40: 0.040, 70: 0.043, 85: 0.045,
        }),
        'ELASTOMERIC_HT': _profile('ELASTOMERIC_HT', 'EPDM Foam (High Temperature)', {
            -20: 0.036, 0: 0.038, 40: 0.041, 70: 0.044, 100: 0.047, 150: 0.052,
        }),
        'PE_FOAM': _profile('PE_FOAM', 'Polyethylene Foam', {
            0: 0.036, 10: 0.037, 20: 0.038, 40: 0.040, 70: 0.044,
        }),
        'MINERAL_WOOL_SLAB': _profile('MINERAL_WOOL_SLAB', 'Mineral Wool Slab', {
            10: 0.035, 50: 0.040, 100: 0.046, 200: 0.061, 300: 0.080,
        }),
    }

    def __init__(self, profiles: Optional[Iterable[MaterialThermalProfile]] = None):
        if profiles is None:
            table = dict(self.BUILTIN_PROFILES)
        else:
            table = {p.material_id: p for p in profiles}
        self._profiles: Mapping[str, MaterialThermalProfile] = MappingProxyType(table)
        self._lock = threading.Lock()
        self.logger = get_logger()

    def get(self, material_id: str) -> Optional[MaterialThermalProfile]:
        """Profile for material_id, or None if it is not registered."""
        return self._profiles.get(material_id)

    def snapshot(self) -> Mapping[str, MaterialThermalProfile]:
        """Current immutable table."""
        return self._profiles

    def material_ids(self) -> List[str]:
        return sorted(self._profiles)

    def __contains__(self, material_id: str) -> bool:
        return material_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def register(self, *profiles: MaterialThermalProfile):
        """Add or replace profiles in one atomic swap."""
        with self._lock:
            table = dict(self._profiles)
            for profile in profiles:
                table[profile.material_id] = profile
            self._profiles = MappingProxyType(table)
        self.logger.debug(f"Registered materials: {[p.material_id for p in profiles]}")

    def unregister(self, material_id: str) -> bool:
        """Remove a profile. Returns False if it was not registered."""
        with self._lock:
            if material_id not in self._profiles:
                return False
            table = dict(self._profiles)
            del table[material_id]
            self._profiles = MappingProxyType(table)
        self.logger.debug(f"Unregistered material: {material_id}")
        return True

    @log_function()
    def load_json(self, path: str, replace: bool = False) -> int:
        """Load profiles from a JSON file.

        The file holds either a list of profile dicts or a mapping of
        material id to `{"name": ..., "lambda": {...}}`. Every entry is
        validated before the table is swapped, so a bad file leaves the
        registry untouched. Returns the number of profiles loaded.
        """
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = json.load(f)

        if isinstance(data, dict):
            entries = [dict(v, material_id=k) for k, v in data.items()]
        else:
            entries = list(data)
        profiles = [MaterialThermalProfile.from_dict(e) for e in entries]

        with self._lock:
            table = {} if replace else dict(self._profiles)
            for profile in profiles:
                table[profile.material_id] = profile
            self._profiles = MappingProxyType(table)

        self.logger.info(f"Loaded {len(profiles)} material profiles from {path}")
        return len(profiles)

    @log_function()
    def save_json(self, path: str):
        """Write the current table to a JSON file."""
        data = [p.to_dict() for p in self._profiles.values()]
        with open(Path(path), 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)


# Global registry instance
_database: Optional[MaterialsDatabase] = None
_database_lock = threading.Lock()


def get_materials_database() -> MaterialsDatabase:
    """Get the global materials registry."""
    global _database
    with _database_lock:
        if _database is None:
            _database = MaterialsDatabase()
        return _database


__all__ = [
    'MaterialThermalProfile',
    'MaterialsDatabase',
    'DEFAULT_MATERIAL_ID',
    'get_materials_database',
]
