"""
Configuration Document Loader

Reads a simulator YAML document and turns it into a validated, immutable
ConfigurationSnapshot. Sensor and actuator entries are dispatched on their
``type`` tag through SENSOR_CONFIG_TYPES / ACTUATOR_CONFIG_TYPES.

Raises:
    ConfigFileError: the document cannot be read
    ParseError: malformed YAML, missing keys or wrong-shaped values
    UnknownTypeError: a type tag matches no known variant
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ValidationError

from adcs_sim.config.models import (
    ACTUATOR_CONFIG_TYPES,
    SENSOR_CONFIG_TYPES,
    ActuatorRecord,
    ActuatorType,
    ControllerTargets,
    SatelliteParams,
    SensorRecord,
    SensorType,
    TimestepPolicy,
)
from adcs_sim.core.error_handling import with_error_context
from adcs_sim.core.exceptions import ConfigFileError, ParseError, UnknownTypeError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Top-level scalar keys that make up the timestep policy
TIMESTEP_KEYS = ("VariableTimestep", "TimeStep", "TimeStepMin", "TimeStepMax")


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses duplicate and non-scalar keys within one mapping."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                raise ParseError(
                    str(key),
                    f"mapping key must be a scalar (line {key_node.start_mark.line + 1})",
                )
            if key in seen:
                raise ParseError(
                    str(key), f"duplicate key (line {key_node.start_mark.line + 1})"
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


@dataclass(frozen=True)
class ConfigurationSnapshot:
    """
    One fully parsed configuration document.

    Sensor and actuator maps are read-only views; the records inside are
    frozen pydantic models.
    """

    sensors: Mapping[str, SensorRecord] = field(default_factory=lambda: MappingProxyType({}))
    actuators: Mapping[str, ActuatorRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    satellite: SatelliteParams = field(default_factory=SatelliteParams)
    timestep: TimestepPolicy = field(default_factory=TimestepPolicy)
    timeout_ms: int = 0
    controller: ControllerTargets = field(default_factory=ControllerTargets)
    source_path: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert snapshot to document-shaped dictionary (JSON-safe)."""

        def dump(model: BaseModel) -> Dict[str, Any]:
            return model.model_dump(mode="json", by_alias=True)

        data: Dict[str, Any] = {
            "Satellite": dump(self.satellite),
            "Sensors": {name: dump(rec) for name, rec in self.sensors.items()},
            "Actuators": {name: dump(rec) for name, rec in self.actuators.items()},
            "Timeout": self.timeout_ms,
            "Controller": dump(self.controller),
        }
        data.update(dump(self.timestep))
        return data


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def _build(model_cls, data: Any, key: str):
    if not isinstance(data, dict):
        raise ParseError(key, "expected a mapping", data)
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise ParseError(key, _describe(e)) from e


def _parse_components(document: Dict[str, Any], section: str, registry, enum_cls) -> Dict:
    entries = document.get(section)
    if entries is None:
        return {}
    if not isinstance(entries, dict):
        raise ParseError(section, "expected a mapping of component name to entry", entries)

    category = section.rstrip("s").lower()
    records = {}
    for name, entry in entries.items():
        key = f"{section}.{name}"
        if not isinstance(name, str):
            raise ParseError(key, "component name must be a string", name)
        if not isinstance(entry, dict):
            raise ParseError(key, "expected a mapping", entry)
        if "type" not in entry:
            raise ParseError(f"{key}.type", "missing type tag")

        tag = entry["type"]
        try:
            variant = enum_cls(tag)
        except ValueError:
            raise UnknownTypeError(
                category, name, tag, known=[t.value for t in registry]
            ) from None

        fields = {k: v for k, v in entry.items() if k != "type"}
        records[name] = _build(registry[variant], fields, key)
        logger.debug(f"Parsed {category} '{name}' ({variant.value})")
    return records


def parse_document(document: Any, source_path: Optional[Path] = None) -> ConfigurationSnapshot:
    """
    Build a snapshot from an already-decoded document.

    Args:
        document: Result of YAML decoding (must be a mapping)
        source_path: Where the document came from, kept for reporting

    Returns:
        ConfigurationSnapshot
    """
    if not isinstance(document, dict):
        raise ParseError("<document>", "top level must be a mapping", type(document).__name__)
    if "Satellite" not in document:
        raise ParseError("Satellite", "missing required section")

    satellite = _build(SatelliteParams, document["Satellite"], "Satellite")
    for required in ("Moment", "Position", "Velocity"):
        if required not in document["Satellite"]:
            raise ParseError(f"Satellite.{required}", "missing required key")

    timestep_fields = {k: document[k] for k in TIMESTEP_KEYS if k in document}
    timestep = _build(TimestepPolicy, timestep_fields, "<timestep>")
    if timestep.use_variable_timestep:
        for required in ("TimeStepMin", "TimeStepMax"):
            if required not in document:
                raise ParseError(required, "required when VariableTimestep is true")
    elif "TimeStep" not in document:
        raise ParseError("TimeStep", "required when VariableTimestep is false")

    timeout = document.get("Timeout", 0)
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0:
        raise ParseError("Timeout", "expected a non-negative integer (ms)", timeout)

    controller_data = document.get("Controller")
    controller = (
        ControllerTargets()
        if controller_data is None
        else _build(ControllerTargets, controller_data, "Controller")
    )

    sensors = _parse_components(document, "Sensors", SENSOR_CONFIG_TYPES, SensorType)
    actuators = _parse_components(document, "Actuators", ACTUATOR_CONFIG_TYPES, ActuatorType)

    return ConfigurationSnapshot(
        sensors=MappingProxyType(sensors),
        actuators=MappingProxyType(actuators),
        satellite=satellite,
        timestep=timestep,
        timeout_ms=timeout,
        controller=controller,
        source_path=source_path,
    )


@with_error_context("Configuration load")
def load_document(path: PathLike) -> ConfigurationSnapshot:
    """
    Read and parse the YAML document at ``path``.

    Args:
        path: Path to the document

    Returns:
        ConfigurationSnapshot
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(str(path), "read", e.strerror or str(e)) from e

    try:
        document = yaml.load(text, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise ParseError("<document>", f"invalid YAML: {e}") from e

    snapshot = parse_document(document, source_path=path)
    logger.debug(
        f"Parsed {path}: {len(snapshot.sensors)} sensor(s), "
        f"{len(snapshot.actuators)} actuator(s)"
    )
    return snapshot
