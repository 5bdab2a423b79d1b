from .loader import load_config, load_config_with_overrides
from .schema import (
    DEFAULT_OFF_TARGET_EFFECTS,
    DataSourceVersions,
    FilterSettings,
    PhenodigmSettings,
    PipelineConfig,
)

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "PipelineConfig",
    "DataSourceVersions",
    "FilterSettings",
    "PhenodigmSettings",
    "DEFAULT_OFF_TARGET_EFFECTS",
]
