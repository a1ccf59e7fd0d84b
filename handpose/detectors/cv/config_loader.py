"""
Configuration loading for the CV pipeline
"""
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path

import cv2
import numpy as np

from ...core.config import (
    SKIN_LOWER, SKIN_UPPER, KERNEL_SHAPE, KERNEL_SIZE,
    MIN_CONTOUR_AREA, DEFECT_DEPTH_THRESHOLD,
    FIST_MAX_DEFECTS, OPEN_HAND_DEFECTS, CONFIG_FILE
)
from ...core.errors import ConfigError

logger = logging.getLogger(__name__)

KERNEL_SHAPES = {
    'ellipse': cv2.MORPH_ELLIPSE,
    'rect': cv2.MORPH_RECT,
    'cross': cv2.MORPH_CROSS,
}


def _is_int(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_number(value):
    return _is_int(value) or isinstance(value, (float, np.floating))


@dataclass(frozen=True)
class PipelineConfig:
    """Tunables of the per-frame pipeline"""
    skin_lower: tuple = SKIN_LOWER
    skin_upper: tuple = SKIN_UPPER
    kernel_shape: str = KERNEL_SHAPE
    kernel_size: int = KERNEL_SIZE
    min_contour_area: float = MIN_CONTOUR_AREA
    defect_depth_threshold: float = DEFECT_DEPTH_THRESHOLD
    fist_max_defects: int = FIST_MAX_DEFECTS
    open_hand_defects: int = OPEN_HAND_DEFECTS

    @classmethod
    def from_dict(cls, config):
        """Create config from a dict, missing keys fall back to defaults"""
        unknown = set(config) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

        values = dict(config)
        for key in ('skin_lower', 'skin_upper'):
            if key in values:
                try:
                    values[key] = tuple(values[key])
                except TypeError as e:
                    raise ConfigError(f"{key} must be a list of 3 values, got {values[key]!r}") from e
        return cls(**values).validate()

    def to_dict(self):
        data = asdict(self)
        data['skin_lower'] = list(self.skin_lower)
        data['skin_upper'] = list(self.skin_upper)
        return data

    def validate(self):
        """
        Check ranges of every tunable

        Returns:
            self, so calls can be chained

        Raises:
            ConfigError: if any value has the wrong type or is out of range
        """
        for name in ('skin_lower', 'skin_upper'):
            bounds = getattr(self, name)
            if not isinstance(bounds, (tuple, list)) or len(bounds) != 3:
                raise ConfigError(f"{name} needs 3 channel bounds, got {bounds!r}")
            if not all(_is_int(v) and 0 <= v <= 255 for v in bounds):
                raise ConfigError(f"{name} values must be integers within 0-255: {bounds}")
        if any(lo > hi for lo, hi in zip(self.skin_lower, self.skin_upper)):
            raise ConfigError(f"skin_lower {self.skin_lower} exceeds skin_upper {self.skin_upper}")

        for name in ('kernel_size', 'fist_max_defects', 'open_hand_defects'):
            if not _is_int(getattr(self, name)):
                raise ConfigError(f"{name} must be an integer, got {getattr(self, name)!r}")
        for name in ('min_contour_area', 'defect_depth_threshold'):
            if not _is_number(getattr(self, name)):
                raise ConfigError(f"{name} must be a number, got {getattr(self, name)!r}")

        if not isinstance(self.kernel_shape, str) or self.kernel_shape not in KERNEL_SHAPES:
            raise ConfigError(f"Unknown kernel shape '{self.kernel_shape}', "
                              f"expected one of {sorted(KERNEL_SHAPES)}")
        if self.kernel_size < 1 or self.kernel_size % 2 == 0:
            raise ConfigError(f"kernel_size must be a positive odd number: {self.kernel_size}")

        if self.min_contour_area < 0:
            raise ConfigError(f"min_contour_area must be >= 0: {self.min_contour_area}")
        if self.defect_depth_threshold < 0:
            raise ConfigError(f"defect_depth_threshold must be >= 0: {self.defect_depth_threshold}")
        if self.fist_max_defects < 0 or self.open_hand_defects <= self.fist_max_defects:
            raise ConfigError("open_hand_defects must be greater than fist_max_defects >= 0")
        return self

    @property
    def lower_bound(self):
        return np.array(self.skin_lower, dtype=np.uint8)

    @property
    def upper_bound(self):
        return np.array(self.skin_upper, dtype=np.uint8)

    @property
    def morph_shape(self):
        return KERNEL_SHAPES[self.kernel_shape]


DEFAULT_CONFIG = PipelineConfig()


def load_pipeline_config(path=None):
    """
    Load pipeline tunables from JSON or use defaults

    Args:
        path: JSON file; defaults to handpose_config.json in the project root

    Returns:
        PipelineConfig

    Raises:
        ConfigError: if the file exists but cannot be parsed or is invalid
    """
    config_path = Path(path) if path is not None else CONFIG_FILE

    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        return DEFAULT_CONFIG

    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    loaded = PipelineConfig.from_dict(config)
    logger.info("Loaded pipeline config from %s", config_path)
    return loaded


def save_pipeline_config(config, path=None):
    """Write config to JSON in the same shape load_pipeline_config reads"""
    config_path = Path(path) if path is not None else CONFIG_FILE
    with open(config_path, 'w') as f:
        json.dump(config.validate().to_dict(), f, indent=2)
    logger.info("Saved pipeline config to %s", config_path)
    return config_path
