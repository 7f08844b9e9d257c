"""
Generation options and their loading from mappings or YAML files.
"""

import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

QUOTE_STYLES = ("single", "double")
DECLARATION_ORDERS = ("discovery", "dependency")

DEFAULT_ROOT_NAME = "rootType"
DEFAULT_MAX_DEPTH = 200

# Key under which options may be nested inside a shared YAML file
CONFIG_SECTION = "jsonshape"


@dataclass
class GenerateOptions:
    """
    Settings for one type generation run.

    root_name: base name of the root declaration
    singularize: derive singular type names from plural field names
    literal_threshold: max distinct literals before widening; 0 disables literal tracking
    null_as_optional: render `T | null` fields as optional `T`
    indent: spaces used to indent fields of a declaration body
    quote: "single" or "double", for string literals and non-identifier keys
    extract_objects: give every object its own declaration instead of inlining small ones
    max_depth: deepest nesting accepted before failing
    declaration_order: "discovery" or "dependency" ordering of non-root declarations
    singular_overrides: extra plural -> singular mappings for the singularizer
    """
    root_name: str = DEFAULT_ROOT_NAME
    singularize: bool = True
    literal_threshold: int = 0
    null_as_optional: bool = False
    indent: int = 2
    quote: str = "single"
    extract_objects: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    declaration_order: str = "discovery"
    singular_overrides: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.root_name, str) or not self.root_name.strip():
            raise ConfigError("root_name must be a non-empty string")
        for name in ("singularize", "null_as_optional", "extract_objects"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a boolean")
        _require_int("literal_threshold", self.literal_threshold, minimum=0)
        _require_int("indent", self.indent, minimum=0)
        _require_int("max_depth", self.max_depth, minimum=1)
        if self.quote not in QUOTE_STYLES:
            raise ConfigError(f"quote must be one of {', '.join(QUOTE_STYLES)}, got {self.quote!r}")
        if self.declaration_order not in DECLARATION_ORDERS:
            raise ConfigError(
                f"declaration_order must be one of {', '.join(DECLARATION_ORDERS)}, "
                f"got {self.declaration_order!r}"
            )
        if not isinstance(self.singular_overrides, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in self.singular_overrides.items()
        ):
            raise ConfigError("singular_overrides must map strings to strings")
        self.singular_overrides = {k.lower(): v for k, v in self.singular_overrides.items()}

    @property
    def quote_char(self) -> str:
        return "'" if self.quote == "single" else '"'

    @property
    def tracks_literals(self) -> bool:
        return self.literal_threshold > 0

    def replace(self, **changes: Any) -> "GenerateOptions":
        """Return a validated copy with the given fields changed."""
        return replace(self, **_normalize_keys(changes))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerateOptions":
        """
        Build options from a mapping of settings.
        Keys may be snake_case (root_name) or camelCase (rootName).
        """
        if not isinstance(data, Mapping):
            raise ConfigError("options must be a mapping")
        return cls(**_normalize_keys(data))


def load_options(config_path: Path) -> GenerateOptions:
    """
    Load options from a YAML file.
    Settings may sit at the document root or under a `jsonshape:` section.
    A missing file yields the defaults.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return GenerateOptions()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

    if data is None:
        return GenerateOptions()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the root")

    section = data.get(CONFIG_SECTION, data)
    if section is None:
        return GenerateOptions()
    return GenerateOptions.from_mapping(section)


def resolve_options(options: Optional[GenerateOptions] = None, **overrides: Any) -> GenerateOptions:
    """Combine an optional base options object with keyword overrides."""
    base = options if options is not None else GenerateOptions()
    if not isinstance(base, GenerateOptions):
        raise ConfigError(f"expected GenerateOptions, got {type(base).__name__}")
    return base.replace(**overrides) if overrides else base


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(GenerateOptions)}
    result = {}
    for key, value in data.items():
        name = _to_snake_case(str(key))
        if name not in known:
            raise ConfigError(f"Unknown option: {key}")
        result[name] = value
    return result


def _to_snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).replace("-", "_").lower()


def _require_int(name: str, value: Any, minimum: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer")
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")


__all__ = [
    "DECLARATION_ORDERS",
    "GenerateOptions",
    "QUOTE_STYLES",
    "load_options",
    "resolve_options",
]
