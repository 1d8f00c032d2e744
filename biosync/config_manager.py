from typing import Dict, Any, Optional, Union
import copy
import json
import logging
from pathlib import Path
import yaml

logger = logging.getLogger(__name__)

class ConfigManager:
    """Manages configuration settings for the biomass advisory components."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path or 'config.json')
        self.config: Dict[str, Any] = self._load_default_config()

    def _load_default_config(self) -> Dict[str, Any]:
        """Load default configuration settings."""
        return {
            'roi': {
                'processing_cost': 100,  # per ton, conventional processing
                'alt_processing_cost': 60,  # per ton, BioSync processing
                'biofuel_price': 800,  # per ton
                'volume_per_mm': 20,  # tons of volume proxy per mm of particle size
                'carbon_per_ton': 2.5,  # tons CO2 avoided per ton processed
                'high_conversion_rate': 0.6,
                'low_conversion_rate': 0.4,
                'moisture_threshold': 30,
                'reduced_quality_multiplier': 0.8
            },
            'custom_roi': {
                'biomass_volume': 1000,  # tons per month
                'current_processing_cost': 100,
                'alt_processing_cost': 60,
                'biofuel_price': 800,
                'conversion_rate': 0.6,
                'carbon_per_ton': 2.5
            },
            'recommendation': {
                'moisture_limit': 30,
                'size_limit': 50,
                'energy_floor': 1000,
                'combustion_moisture_limit': 25,
                'high_efficiency_moisture': 30
            },
            'validation': {
                'strict_ranges': False,
                'ranges': {
                    'moisture': [0, 100],
                    'size': [10, 100],
                    'energy': [800, 2000]
                }
            },
            'monitoring': {
                'window': 30,
                'refresh_seconds': 1.0,
                'temperature_base': 45.0,
                'temperature_spread': 5.0,
                'pressure_base': 1.2,
                'pressure_spread': 0.2,
                'system_parameters': {
                    'Temperature': '45.2°C',
                    'Pressure': '1.2 bar',
                    'Flow Rate': '2.5 m³/h'
                },
                'uptime': '24h 30m'
            },
            'app': {
                'analysis_delay_seconds': 2.0,
                'currency_symbol': '₹',
                'log_level': 'INFO',
                'default_descriptor': {
                    'moisture': 25,
                    'size': 40,
                    'quality': 'Good',
                    'energy': 1400
                }
            }
        }

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file if exists, otherwise return default.

        Sections found in the file are merged over the defaults, so a file
        only needs to list the values it changes.
        """
        if self.config_path.exists():
            suffix = self.config_path.suffix.lower()
            with open(self.config_path, 'r', encoding='utf-8') as f:
                if suffix == '.json':
                    file_config = json.load(f)
                elif suffix in ['.yaml', '.yml']:
                    file_config = yaml.safe_load(f)
                else:
                    raise ValueError(f"Unsupported config format: {suffix}")

            if file_config is None:
                file_config = {}
            if not isinstance(file_config, dict):
                raise ValueError(f"Config file must contain a mapping: {self.config_path}")

            for section, parameters in file_config.items():
                self.update_config(section, parameters)
            logger.info("Loaded configuration from %s", self.config_path)
        else:
            logger.debug("No config file at %s, using defaults", self.config_path)
        return self.config

    def save_config(self) -> None:
        """Save current configuration to file."""
        suffix = self.config_path.suffix.lower()
        with open(self.config_path, 'w', encoding='utf-8') as f:
            if suffix in ['.yaml', '.yml']:
                yaml.safe_dump(self.config, f, sort_keys=False, allow_unicode=True)
            else:
                json.dump(self.config, f, indent=4, ensure_ascii=False)

    def get_roi_config(self) -> Dict[str, Any]:
        """Get ROI estimator configuration."""
        return copy.deepcopy(self.config.get('roi', {}))

    def get_custom_roi_config(self) -> Dict[str, Any]:
        """Get defaults for the custom ROI calculator."""
        return copy.deepcopy(self.config.get('custom_roi', {}))

    def get_recommendation_config(self) -> Dict[str, Any]:
        """Get recommendation engine thresholds."""
        return copy.deepcopy(self.config.get('recommendation', {}))

    def get_validation_config(self) -> Dict[str, Any]:
        """Get descriptor validation settings."""
        return copy.deepcopy(self.config.get('validation', {}))

    def get_monitoring_config(self) -> Dict[str, Any]:
        """Get monitoring feed configuration."""
        return copy.deepcopy(self.config.get('monitoring', {}))

    def get_app_config(self) -> Dict[str, Any]:
        """Get dashboard configuration."""
        return copy.deepcopy(self.config.get('app', {}))

    def update_config(self, section: str, parameters: Dict[str, Any]) -> None:
        """Update configuration parameters for a specific section.

        Nested mappings are merged key by key, so overriding one value of a
        nested mapping such as validation.ranges keeps its other entries.

        Args:
            section: Configuration section to update
            parameters: New parameters to set
        """
        if not isinstance(parameters, dict):
            raise ValueError(f"Parameters for section '{section}' must be a mapping")

        self.config[section] = _merge(self.config.get(section, {}), parameters)


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
