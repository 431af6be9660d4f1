"""
barrelrails configuration.

The bundled ``config/default.yaml`` holds every key; a project's
``barrelrails.yaml`` is deep-merged over it and the result is turned into
an immutable :class:`Config`.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .classifier import ClassifierSettings, PathClassifier
from .diagnostics import RULE_IDS, SEVERITIES
from .errors import ConfigError
from .lint_types import GREEN, NC, YELLOW
from .models import ArchitecturalLayer
from .yaml_safety import safe_yaml_load

logger = logging.getLogger(__name__)

CONFIG_NAME = "barrelrails.yaml"
MAX_CONFIG_SIZE = 1_000_000


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Override wins for scalars and lists."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_default_config_path() -> Path:
    """Get path to bundled default.yaml."""
    return Path(__file__).parent / "config" / "default.yaml"


def find_config() -> Path | None:
    """Find barrelrails.yaml in project or user home."""
    candidates = [
        Path(CONFIG_NAME),
        Path("config") / CONFIG_NAME,
        Path.home() / ".config" / "barrelrails" / CONFIG_NAME,
    ]
    for path in candidates:
        if path.exists():
            return path
    return None


def read_yaml(path: Path) -> dict:
    """Read one YAML mapping, raising ConfigError on any problem."""
    if not path.exists():
        raise ConfigError(f"Config not found: {path}")
    if path.stat().st_size > MAX_CONFIG_SIZE:
        raise ConfigError(f"Config file too large (max 1MB): {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = safe_yaml_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark:
            raise ConfigError(
                f"{path} is malformed (line {mark.line + 1}, column {mark.column + 1})"
            ) from e
        raise ConfigError(f"{path} is malformed: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at top level")
    return data


def load_raw_config(config_path: Path | str | None = None) -> dict:
    """Bundled defaults merged with the project file (explicit or discovered)."""
    data = read_yaml(get_default_config_path())
    path = Path(config_path) if config_path else find_config()
    if path is None:
        logger.debug("No %s found, using bundled defaults", CONFIG_NAME)
        return data
    logger.debug("Loading config from %s", path)
    return deep_merge(data, read_yaml(path))


def _string_list(data: dict, key: str, errors: list[str]) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        errors.append(f"'{key}' must be a list of strings")
        return []
    return value


def _check_layer_name(name, where: str, errors: list[str]) -> None:
    try:
        layer = ArchitecturalLayer.from_name(str(name))
    except ValueError:
        errors.append(f"{where}: unknown layer '{name}'")
        return
    if layer is ArchitecturalLayer.UNKNOWN:
        errors.append(f"{where}: layer 'unknown' cannot be configured")


def _check_pattern(data: dict, key: str, errors: list[str]) -> None:
    pattern = data.get(key)
    if not isinstance(pattern, str):
        errors.append(f"Missing '{key}'")
        return
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        errors.append(f"'{key}': invalid regex: {e}")
        return
    if "uri" not in compiled.groupindex:
        errors.append(f"'{key}': needs a named group 'uri'")


def validate_config(data: dict) -> list[str]:
    """Structural problems of a merged configuration mapping (empty when valid)."""
    errors: list[str] = []

    if "version" not in data:
        errors.append("Missing 'version' field")

    for key in ("extensions", "internal_directories", "excluded_directories",
                "excluded_suffixes", "core_directories"):
        _string_list(data, key, errors)
    if not data.get("extensions"):
        errors.append("'extensions' must name at least one extension")

    layers = data.get("layers")
    if not isinstance(layers, list) or not layers:
        errors.append("'layers' must be a non-empty list")
    else:
        for i, entry in enumerate(layers):
            if not isinstance(entry, dict) or "name" not in entry:
                errors.append(f"layers[{i}]: missing 'name'")
                continue
            _check_layer_name(entry["name"], f"layers[{i}]", errors)
            dirs = entry.get("directories")
            if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
                errors.append(f"layers[{i}]: 'directories' must be a list of strings")

    suffixes = data.get("layer_suffixes")
    if not isinstance(suffixes, dict):
        errors.append("'layer_suffixes' must map suffix to layer name")
    else:
        for suffix, name in suffixes.items():
            _check_layer_name(name, f"layer_suffixes.{suffix}", errors)

    ui = data.get("ui_framework") or {}
    if not isinstance(ui, dict):
        errors.append("'ui_framework' must be a mapping")
    else:
        _string_list(ui, "forbidden_prefixes", errors)
        _string_list(ui, "allowed", errors)

    _check_pattern(data, "import_pattern", errors)
    _check_pattern(data, "export_pattern", errors)

    rules = data.get("rules") or {}
    if not isinstance(rules, dict):
        errors.append("'rules' must be a mapping")
        rules = {}
    for rule_id, settings in rules.items():
        if rule_id not in RULE_IDS:
            errors.append(f"rules.{rule_id}: unknown rule")
            continue
        if settings is None:
            continue
        if not isinstance(settings, dict):
            errors.append(f"rules.{rule_id}: must be a mapping")
            continue
        severity = settings.get("severity")
        if severity is not None and severity not in SEVERITIES:
            errors.append(f"rules.{rule_id}: severity must be one of {', '.join(SEVERITIES)}")

    return errors


@dataclass(frozen=True)
class RuleSettings:
    enabled: bool = True
    severity: str | None = None


@dataclass(frozen=True)
class Config:
    """Immutable configuration passed explicitly to classifier and rules."""

    classifier: PathClassifier = field(default_factory=PathClassifier)
    version: str = "1.0"
    source_root: str = "lib"
    package_name: str | None = None
    prefer_layer_barrels: bool = False
    core_directories: frozenset[str] = frozenset({"core"})
    ui_forbidden_prefixes: tuple[str, ...] = ("package:flutter/",)
    ui_allowed: frozenset[str] = frozenset({"package:flutter/foundation.dart"})
    import_pattern: str = r"""^[ \t]*import\s+(['"])(?P<uri>[^'"]+)\1[^;]*;"""
    export_pattern: str = r"""^[ \t]*export\s+(['"])(?P<uri>[^'"]+)\1[^;]*;"""
    rules: dict[str, RuleSettings] = field(default_factory=dict)

    @property
    def extensions(self) -> tuple[str, ...]:
        return self.classifier.settings.extensions

    @property
    def source_dir(self) -> str:
        """Name of the source root directory, the first segment of virtual paths."""
        return Path(self.source_root).resolve().name

    def rule_settings(self, rule_id: str) -> RuleSettings:
        return self.rules.get(rule_id, RuleSettings())

    def rule_enabled(self, rule_id: str) -> bool:
        return self.rule_settings(rule_id).enabled


def build_config(data: dict) -> Config:
    """Turn a merged configuration mapping into a Config."""
    errors = validate_config(data)
    if errors:
        raise ConfigError("Invalid configuration: " + "; ".join(errors))

    layer_priority = tuple(
        (ArchitecturalLayer.from_name(str(entry["name"])), frozenset(entry["directories"]))
        for entry in data["layers"]
    )
    layer_suffixes = tuple(
        (str(suffix), ArchitecturalLayer.from_name(str(name)))
        for suffix, name in data["layer_suffixes"].items()
    )
    settings = ClassifierSettings(
        extensions=tuple(data["extensions"]),
        internal_directories=frozenset(data.get("internal_directories") or ()),
        layer_priority=layer_priority,
        layer_suffixes=layer_suffixes,
        excluded_directories=frozenset(data.get("excluded_directories") or ()),
        excluded_suffixes=tuple(data.get("excluded_suffixes") or ()),
    )

    rules = {}
    for rule_id, raw in (data.get("rules") or {}).items():
        raw = raw or {}
        rules[rule_id] = RuleSettings(
            enabled=bool(raw.get("enabled", True)),
            severity=raw.get("severity"),
        )

    ui = data.get("ui_framework") or {}
    package_name = data.get("package_name")
    return Config(
        classifier=PathClassifier(settings),
        version=str(data["version"]),
        source_root=str(data.get("source_root") or "lib"),
        package_name=str(package_name) if package_name else None,
        prefer_layer_barrels=bool(data.get("prefer_layer_barrels", False)),
        core_directories=frozenset(data.get("core_directories") or ()),
        ui_forbidden_prefixes=tuple(ui.get("forbidden_prefixes") or ()),
        ui_allowed=frozenset(ui.get("allowed") or ()),
        import_pattern=data["import_pattern"],
        export_pattern=data["export_pattern"],
        rules=rules,
    )


def load_config(config_path: Path | str | None = None) -> Config:
    """Load barrelrails.yaml (explicit path or discovered) over the bundled defaults."""
    return build_config(load_raw_config(config_path))


def read_package_name(project_dir: Path) -> str | None:
    """Package name from a pubspec.yaml next to the source root, if any."""
    pubspec = project_dir / "pubspec.yaml"
    if not pubspec.is_file():
        return None
    try:
        data = read_yaml(pubspec)
    except ConfigError as e:
        logger.warning("Ignoring %s: %s", pubspec, e)
        return None
    name = data.get("name")
    return str(name) if name else None


def init_config(target: Path = Path(CONFIG_NAME)) -> bool:
    """Copy the bundled default configuration into the project."""
    import shutil

    if target.exists():
        print(f"{YELLOW}{target} already exists{NC}")
        return False
    shutil.copy(get_default_config_path(), target)
    print(f"{GREEN}Created {target}{NC}")
    print("\nNext steps:")
    print(f"  1. Edit {target}: source_root, layers and internal_directories")
    print("  2. Run: barrelrails --all")
    print("  3. Run: barrelrails-cycles")
    return True
