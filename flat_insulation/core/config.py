"""
Flat Insulation Calculator - Configuration Management
=====================================================
Calculation inputs, project-wide settings and JSON serialization.

Author: Flat Insulation Calculator
Version: 1.0.0
"""

import json
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import CalibrationConstants
from .materials import DEFAULT_MATERIAL_ID
from ..utils.logger import get_logger


@dataclass
class CalculationInputs:
    """One flat-surface insulation case.

    Optional fields left as None take the project setting.
    """
    ambient_temp_c: float = 25.0
    medium_temp_c: float = 55.0
    thickness_mm: float = 10.0
    area_m2: float = 1.0
    material_id: str = DEFAULT_MATERIAL_ID
    h_w_m2k: float = CalibrationConstants.DEFAULT_SURFACE_COEFFICIENT
    cost_per_kwh: float = CalibrationConstants.DEFAULT_ENERGY_COST_PER_KWH
    dew_point_c: Optional[float] = None
    safety_margin_c: Optional[float] = None
    target_flux_w_m2: Optional[float] = None
    label: str = ""

    @property
    def delta_t(self) -> float:
        return abs(self.medium_temp_c - self.ambient_temp_c)


@dataclass
class CalculationSettings:
    """Project defaults for the calculation core."""
    default_material_id: str = DEFAULT_MATERIAL_ID
    default_h_w_m2k: float = CalibrationConstants.DEFAULT_SURFACE_COEFFICIENT
    default_cost_per_kwh: float = CalibrationConstants.DEFAULT_ENERGY_COST_PER_KWH
    target_flux_w_m2: float = CalibrationConstants.DEFAULT_TARGET_FLUX_W_M2
    safety_margin_c: float = CalibrationConstants.DEFAULT_SAFETY_MARGIN_C
    extrapolation_policy: str = "lowest_anchor"  # lowest_anchor, clamp_highest
    materials_file: str = ""  # optional JSON file merged into the registry

    def new_case(self, ambient_temp_c: float, medium_temp_c: float, thickness_mm: float,
                 area_m2: float, **kwargs) -> CalculationInputs:
        """Build a case with material, h and tariff taken from these settings."""
        kwargs.setdefault('material_id', self.default_material_id)
        kwargs.setdefault('h_w_m2k', self.default_h_w_m2k)
        kwargs.setdefault('cost_per_kwh', self.default_cost_per_kwh)
        return CalculationInputs(
            ambient_temp_c=ambient_temp_c,
            medium_temp_c=medium_temp_c,
            thickness_mm=thickness_mm,
            area_m2=area_m2,
            **kwargs,
        )

    def resolve_target_flux(self, inputs: CalculationInputs) -> float:
        if inputs.target_flux_w_m2 is not None:
            return inputs.target_flux_w_m2
        return self.target_flux_w_m2

    def resolve_safety_margin(self, inputs: CalculationInputs) -> float:
        if inputs.safety_margin_c is not None:
            return inputs.safety_margin_c
        return self.safety_margin_c


@dataclass
class InsulationProjectConfig:
    """Settings plus the list of cases of one project file."""
    version: str = "1.0.0"
    created: str = ""
    modified: str = ""

    settings: CalculationSettings = field(default_factory=CalculationSettings)
    cases: List[CalculationInputs] = field(default_factory=list)

    def __post_init__(self):
        if not self.created:
            self.created = datetime.now().isoformat()
        self.modified = datetime.now().isoformat()

    def get_case(self, label: str) -> Optional[CalculationInputs]:
        for case in self.cases:
            if case.label == label:
                return case
        return None

    def add_case(self, case: CalculationInputs):
        """Add a case, replacing any case with the same non-empty label."""
        if case.label:
            self.cases = [c for c in self.cases if c.label != case.label]
        self.cases.append(case)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        self.modified = datetime.now().isoformat()
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InsulationProjectConfig':
        """Create from dictionary, ignoring unknown keys.

        Raises:
            ValueError: the document, its settings or a case is not an object
        """
        if not isinstance(data, dict):
            raise ValueError(f"project document must be an object, got {type(data).__name__}")
        config = cls()

        def _filter_kwargs(dc_type, d: Any) -> Dict[str, Any]:
            """Filter dict keys to those accepted by the dataclass constructor."""
            if d is None:
                return {}
            if not isinstance(d, dict):
                raise ValueError(f"{dc_type.__name__} entry must be an object, got {type(d).__name__}")
            allowed = getattr(dc_type, '__dataclass_fields__', {}).keys()
            return {k: v for k, v in d.items() if k in allowed}

        if 'version' in data:
            config.version = data['version']
        if 'created' in data:
            config.created = data['created']

        if 'settings' in data:
            config.settings = CalculationSettings(**_filter_kwargs(CalculationSettings, data['settings']))

        if 'cases' in data:
            config.cases = [CalculationInputs(**_filter_kwargs(CalculationInputs, c)) for c in data['cases']]

        return config


class ConfigManager:
    """Loads and saves project configuration files."""

    def __init__(self, config_path: str = ""):
        self._config_path: Optional[Path] = Path(config_path) if config_path else None
        self.config: Optional[InsulationProjectConfig] = None
        self.logger = get_logger()

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def get_config(self) -> InsulationProjectConfig:
        """Get configuration, loading from file if it exists.

        An unreadable file is logged and replaced by defaults.
        """
        if self.config:
            return self.config

        if self._config_path and self._config_path.exists():
            try:
                with open(self._config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self.config = InsulationProjectConfig.from_dict(data)
            except (OSError, ValueError, TypeError) as e:
                self.logger.warning(f"Failed to load config {self._config_path}: {e}")
                self.config = InsulationProjectConfig()
        else:
            self.config = InsulationProjectConfig()

        return self.config

    def save(self) -> bool:
        """Save configuration to its file."""
        if not self.config or not self._config_path:
            return False
        return self.export(str(self._config_path))

    def export(self, path: str) -> bool:
        """Export configuration to the given path."""
        if not self.config:
            return False

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.config.to_dict(), f, indent=2)
            return True
        except OSError as e:
            self.logger.error(f"Failed to save config to {path}: {e}")
            return False

    def import_config(self, path: str) -> bool:
        """Replace the current configuration with the one in path."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            self.config = InsulationProjectConfig.from_dict(data)
            return True
        except (OSError, ValueError, TypeError) as e:
            self.logger.warning(f"Failed to import config {path}: {e}")
            return False


__all__ = [
    'CalculationInputs',
    'CalculationSettings',
    'InsulationProjectConfig',
    'ConfigManager',
]
