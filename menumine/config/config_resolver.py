"""
Configuration Resolution for MENUMINE

Builds an ExtractionConfig from layered sources, later layers overriding
earlier ones:

1. Built-in defaults (menumine.config.defaults)
2. YAML config file (explicit path, or MENUMINE_CONFIG_PATH)
3. Environment variables (.env supported via python-dotenv)
4. Explicit overrides passed by the caller

Examples:
    # Defaults plus environment
    >>> config = load_config()

    # Project YAML plus a one-off override
    >>> config = load_config(Path("configs/menumine.yaml"), overrides={"byte_budget": 1500})
"""

import os
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from menumine.config.extraction_config import CompactionProfile, ExtractionConfig

load_dotenv()
DEFAULT_CONFIG_PATH = os.getenv("MENUMINE_CONFIG_PATH")

# Environment variable → (config field, parser)
ENV_OVERRIDES = {
    "TIMEZONE": ("timezone", str),
    "MEAL_REGEX": ("keyword_pattern", str),
    "MENU_URL": ("source_url", str),
    "MENUMINE_BYTE_BUDGET": ("byte_budget", int),
    "MENUMINE_MIN_GROUP_PAIRS": ("min_group_pairs", int),
    "MENUMINE_PROBE_TIMEOUT_S": ("probe_timeout_s", float),
    "MENUMINE_MIN_DOCUMENT_BYTES": ("min_document_bytes", int),
}

# Fields stored as tuples on the frozen config but as lists in YAML
_TUPLE_FIELDS = (
    "date_keys",
    "name_keys",
    "section_keys",
    "multi_section_list_keys",
    "multi_section_text_keys",
    "generic_names",
    "fallback_offsets",
)


def _plain(value: Any) -> Any:
    """Convert tuples to lists recursively so OmegaConf can hold the value."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def default_config_dict() -> Dict[str, Any]:
    """Built-in defaults as a plain nested dict."""
    return _plain(asdict(ExtractionConfig()))


def _env_overrides() -> Dict[str, Any]:
    """
    Collect overrides from environment variables.

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    overrides = {}
    for env_name, (field_name, parser) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[field_name] = parser(raw.strip())
        except ValueError as e:
            raise ValueError(f"Environment variable {env_name}={raw!r} is not a valid {parser.__name__}") from e
    return overrides


def config_from_dict(data: Dict[str, Any]) -> ExtractionConfig:
    """
    Build an ExtractionConfig from a plain dict.

    Args:
        data: Mapping of config field names to values (lists allowed for tuple fields)

    Returns:
        Validated, immutable ExtractionConfig

    Raises:
        ValueError: If a key is unknown or a value fails validation
    """
    known = {f.name for f in fields(ExtractionConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}. Available keys: {sorted(known)}")

    kwargs = dict(data)

    for name in _TUPLE_FIELDS:
        if kwargs.get(name) is not None:
            kwargs[name] = tuple(kwargs[name])

    if kwargs.get("profiles") is not None:
        try:
            kwargs["profiles"] = tuple(CompactionProfile(**p) for p in kwargs["profiles"])
        except TypeError as e:
            raise ValueError(f"Invalid compaction profile: {e}") from e

    if kwargs.get("section_aliases") is not None:
        kwargs["section_aliases"] = {
            str(alias).lower(): str(label) for alias, label in kwargs["section_aliases"].items()
        }

    return ExtractionConfig(**kwargs)


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    use_env: bool = True,
) -> ExtractionConfig:
    """
    Resolve the layered configuration into an ExtractionConfig.

    List-valued settings (key lists, profiles) are replaced wholesale by later
    layers; section_aliases are merged key by key.

    Args:
        config_path: Optional YAML file (defaults to MENUMINE_CONFIG_PATH if set)
        overrides: Optional explicit overrides, applied last
        use_env: Whether to read environment overrides

    Returns:
        Validated ExtractionConfig

    Raises:
        ValueError: If the merged config is invalid
    """
    layers = [OmegaConf.create(default_config_dict())]

    path = config_path or DEFAULT_CONFIG_PATH
    if path:
        layers.append(OmegaConf.load(Path(path)))

    if use_env:
        layers.append(OmegaConf.create(_env_overrides()))

    if overrides:
        layers.append(OmegaConf.create(_plain(overrides)))

    merged = OmegaConf.to_container(OmegaConf.merge(*layers), resolve=True)
    return config_from_dict(merged)
