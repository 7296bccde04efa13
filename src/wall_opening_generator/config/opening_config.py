# File: src/wall_opening_generator/config/opening_config.py

"""
Run configuration for the wall opening generator.

Defaults reproduce the naming conventions of the models the tool was
written for: the mechanical model is the open document whose title
contains "ОВ", openings use the generic-model family "Отверстия", and the
family exposes "Ширина" (width) and "Высота" (height) parameters.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional
import json
import logging
import os

logger = logging.getLogger(__name__)

# Environment variables that override file/default values
ENV_PREFIX = "OPENING_"


@dataclass
class OpeningConfig:
    """
    Configuration for one opening generation run.

    secondary_document_marker: Substring identifying the mechanical model title
    family_name: Opening family name in the architectural model
    family_category: BuiltInCategory name the opening family belongs to
    width_parameter: Instance parameter receiving the opening width
    height_parameter: Instance parameter receiving the opening height
    activation_transaction_name: Name of the family activation transaction
    placement_transaction_name: Name prefix of per-duct placement transactions
    length_tolerance: Extra distance accepted past the duct end
    unit_tolerance: Allowed deviation of |direction| from 1.0
    debug: Enable DEBUG logging
    trace: Also log every raw ray hit (TRACE level)
    log_dir: Directory for log files
    """

    secondary_document_marker: str = "ОВ"
    family_name: str = "Отверстия"
    family_category: str = "OST_GenericModel"
    width_parameter: str = "Ширина"
    height_parameter: str = "Высота"
    activation_transaction_name: str = "Activate opening family"
    placement_transaction_name: str = "Place duct openings"
    length_tolerance: float = 0.0
    unit_tolerance: float = 1e-6
    debug: bool = False
    trace: bool = False
    log_dir: str = "logs"

    def __post_init__(self):
        if self.length_tolerance < 0:
            raise ValueError(
                f"length_tolerance must be >= 0, got {self.length_tolerance}"
            )
        if self.unit_tolerance <= 0:
            raise ValueError(
                f"unit_tolerance must be > 0, got {self.unit_tolerance}"
            )
        if not self.family_name:
            raise ValueError("family_name must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OpeningConfig":
        """
        Create OpeningConfig from a dictionary.

        Args:
            data: Mapping of field names to values

        Returns:
            OpeningConfig instance

        Raises:
            ValueError: If the mapping contains unknown keys or bad values
        """
        known = {f.name: f for f in fields(cls)}
        unknown = set(data) - set(known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        defaults = cls()
        values = {
            name: _convert(name, value, getattr(defaults, name))
            for name, value in data.items()
        }
        return cls(**values)


_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off", "")


def _convert(name: str, value: Any, template: Any) -> Any:
    """
    Convert a file or environment value to the type of the field default.

    Raises:
        ValueError: If the value cannot represent the field type
    """
    if isinstance(template, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS + _FALSE_STRINGS:
            return value.strip().lower() in _TRUE_STRINGS
        raise ValueError(f"{name} must be a boolean, got {value!r}")

    if isinstance(template, float):
        if isinstance(value, bool):
            raise ValueError(f"{name} must be a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must be a number, got {value!r}") from e

    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return value


def load_opening_config(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> OpeningConfig:
    """
    Load configuration from an optional JSON file and the environment.

    Precedence: environment (``OPENING_<FIELD>``) > JSON file > defaults.

    Args:
        path: Optional path to a JSON object with OpeningConfig fields
        environ: Environment mapping (defaults to os.environ)

    Returns:
        OpeningConfig instance

    Raises:
        ValueError: If the file is not a JSON object or has unknown keys
            or values of the wrong type
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    if path:
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid configuration JSON in {path}: {e}")
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a JSON object")
        values.update(data)
        logger.info(f"Loaded opening configuration from {path}")

    for f in fields(OpeningConfig):
        env_name = ENV_PREFIX + f.name.upper()
        if env_name in environ:
            values[f.name] = environ[env_name]
            logger.debug(f"Configuration override from {env_name}")

    return OpeningConfig.from_dict(values)
