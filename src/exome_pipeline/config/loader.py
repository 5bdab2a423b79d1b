"""Load the pipeline YAML configuration and apply CLI overrides."""

from pathlib import Path
from typing import Any

import pydantic_yaml

from .schema import PipelineConfig


def load_config(config_path: Path | str) -> PipelineConfig:
    """
    Parse and validate a pipeline configuration file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated PipelineConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return pydantic_yaml.parse_yaml_raw_as(PipelineConfig, config_path.read_text())


def _set_dotted(target: dict[str, Any], dotted_key: str, value: Any) -> None:
    # "filters.min_quality" -> target["filters"]["min_quality"]
    *parents, leaf = dotted_key.split(".")
    for part in parents:
        target = target.setdefault(part, {})
    target[leaf] = value


def load_config_with_overrides(
    config_path: Path | str,
    overrides: dict[str, Any],
) -> PipelineConfig:
    """
    Load config from YAML and replace selected values.

    Override keys may be dotted (``"filters.min_quality"``). ``None`` values
    are skipped so unset CLI options leave the file value in place.

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If the overridden config is invalid
    """
    config_dict = load_config(config_path).model_dump()

    for key, value in overrides.items():
        if value is None:
            continue
        _set_dotted(config_dict, key, value)

    return PipelineConfig.model_validate(config_dict)
