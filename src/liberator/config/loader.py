from pathlib import Path
from typing import Any, Dict, List

import yaml

DEFAULT_CONFIG_PATH = Path("liberator.config.yaml")
DEFAULT_HOLDING_LOCATIONS_PATH = Path("config/holding_locations.yaml")

BASE_DATABASE_DEFAULTS: Dict[str, Any] = {
    "echo": False,
}


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load runtime configuration from YAML file.

    Args:
        path: Optional path to the config file. Defaults to liberator.config.yaml

    Returns:
        Dictionary with database, holding_locations and logging sections

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    database = config.get("database")
    if not isinstance(database, dict):
        raise ValueError("Config must have a 'database' section")
    if not database.get("url"):
        raise ValueError("Config 'database' section missing required field: url")
    config["database"] = {**BASE_DATABASE_DEFAULTS, **database}

    # Relative paths are relative to the config file, not the working directory
    holding_locations = Path(config.get("holding_locations") or DEFAULT_HOLDING_LOCATIONS_PATH)
    if not holding_locations.is_absolute():
        holding_locations = cfg_path.parent / holding_locations
    config["holding_locations"] = str(holding_locations)

    config["logging"] = config.get("logging") or {}
    config["logging"].setdefault("level", "INFO")
    return config


def load_holding_locations_config(path: Path | None = None) -> List[Dict[str, Any]]:
    """
    Load holding location metadata from YAML.

    Each entry describes one Voyager location code with its public label and
    whether it is always requestable (mediated access).

    Returns:
        List of normalized location dicts with code, label, always_requestable.
    """
    cfg_path = path or DEFAULT_HOLDING_LOCATIONS_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Holding locations config file not found: {cfg_path}")

    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Holding locations config must be a dictionary")

    entries = config.get("locations", [])
    if not isinstance(entries, list):
        raise ValueError("Holding locations config 'locations' must be a list")

    normalized: List[Dict[str, Any]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError("Each holding location entry must be a dictionary")
        code = entry.get("code")
        if not code or not isinstance(code, str):
            raise ValueError("Holding location entry missing 'code'")
        normalized.append(
            {
                "code": code,
                "label": str(entry.get("label") or ""),
                "always_requestable": bool(entry.get("always_requestable", False)),
            }
        )
    return normalized
