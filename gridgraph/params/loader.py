"""
YAML configuration loading and saving.

Example file:

    neighborhoods:
      - ndim: 2
        neighborhood: indirect
      - ndim: 3
        neighborhood: direct
        strides: [1, 256, 65536]
"""

from pathlib import Path
from typing import Any

import yaml

from gridgraph.params.schema import TableConfig, ValidationError


def load_config(path: str | Path) -> TableConfig:
    """
    Load table configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        TableConfig instance with validated parameters

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValidationError: If any parameter validation fails
        yaml.YAMLError: If the YAML is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValidationError(f"Configuration must be a dictionary, got {type(data)}")

    return TableConfig.from_dict(data)


def save_config(config: TableConfig, path: str | Path) -> None:
    """
    Save table configuration to a YAML file.

    Args:
        config: TableConfig instance to save
        path: Path to write YAML file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_config_with_overrides(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> TableConfig:
    """
    Load configuration with optional overrides.

    Top-level keys in overrides replace those read from the file.

    Example:
        config = load_config_with_overrides(
            path="config/tables.yaml",
            overrides={"neighborhoods": [{"ndim": 3, "neighborhood": "indirect"}]},
        )
    """
    data = load_config(path).to_dict() if path is not None else {}
    if overrides:
        data.update(overrides)
    return TableConfig.from_dict(data)
