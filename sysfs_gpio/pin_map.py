"""
Pin Map Configuration

Builds the immutable header-position -> hardware-pin mapping. The built-in
Raspberry Pi table can be overridden from a YAML file for boards with a
different header layout.

YAML format (position: pin, null for power/ground):

    3: 2
    5: 3
    6: null
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from sysfs_gpio.constants import DEFAULT_PIN_MAP, DEFAULT_PIN_MAP_FILE

PinMapping = Mapping[int, Optional[int]]


class PinMapConfig:
    """
    Pin map with YAML file support.

    Reads overrides from the configured YAML file if it exists, otherwise
    uses DEFAULT_PIN_MAP from constants.py.

    Usage:
        config = PinMapConfig()
        mapping = config.mapping        # read-only
        pin = config.mapping.get(11)    # 17
    """

    def __init__(
        self,
        config_path: Union[str, Path, None] = None,
        base_map: Optional[Mapping[int, Optional[int]]] = None,
    ):
        """
        Initialize pin map.

        Args:
            config_path: YAML override file (None = GPIO_PIN_MAP_FILE setting)
            base_map: Table the overrides apply to (None = DEFAULT_PIN_MAP)

        Raises:
            ValueError: If the file or base_map holds invalid entries
        """
        self.logger = logging.getLogger(__name__)

        path = config_path or DEFAULT_PIN_MAP_FILE
        self.config_path: Optional[Path] = Path(path) if path else None
        self._base_map = dict(DEFAULT_PIN_MAP if base_map is None else base_map)

        self._mapping = MappingProxyType(self._load_mapping())

        self.logger.debug(f"Pin map ready ({len(self._mapping)} positions)")

    def _load_mapping(self) -> Dict[int, Optional[int]]:
        """Load overrides from YAML file on top of the base table"""
        mapping = self._base_map.copy()

        if self.config_path is None:
            self._validate_mapping(mapping)
            return mapping

        if not self.config_path.exists():
            self.logger.info(
                f"Pin map file not found at {self.config_path}. Using defaults."
            )
            self._validate_mapping(mapping)
            return mapping

        try:
            with open(self.config_path, "r") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self.logger.warning(
                f"Failed to load pin map from {self.config_path}: {e}. "
                f"Using defaults."
            )
            self._validate_mapping(mapping)
            return mapping

        if not isinstance(file_config, dict):
            raise ValueError(
                f"Pin map file {self.config_path} must contain a mapping"
            )

        # File entries override the base table
        mapping.update(file_config)
        self._validate_mapping(mapping)

        self.logger.info(f"Loaded pin map overrides from {self.config_path}")
        return mapping

    @staticmethod
    def _validate_mapping(mapping: Dict[Any, Any]) -> None:
        """Positions are ints >= 1, pins are ints >= 0 or None"""
        for position, pin in mapping.items():
            if isinstance(position, bool) or not isinstance(position, int) or position < 1:
                raise ValueError(f"Invalid header position in pin map: {position!r}")

            if pin is None:
                continue

            if isinstance(pin, bool) or not isinstance(pin, int) or pin < 0:
                raise ValueError(
                    f"Invalid hardware pin for position {position}: {pin!r}"
                )

    @classmethod
    def freeze(cls, mapping: Mapping[int, Optional[int]]) -> PinMapping:
        """
        Validate a caller-supplied table and return a read-only copy.

        Raises:
            ValueError: If the table holds invalid entries
        """
        table = dict(mapping)
        cls._validate_mapping(table)
        return MappingProxyType(table)

    @property
    def mapping(self) -> PinMapping:
        """Read-only position -> pin mapping"""
        return self._mapping

    def mapped_positions(self) -> list[int]:
        """Header positions that have a hardware pin behind them"""
        return sorted(p for p, pin in self._mapping.items() if pin is not None)

    def __repr__(self) -> str:
        return f"PinMapConfig(path={self.config_path})"
