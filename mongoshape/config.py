# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load engine settings from environment variables / .env file.
#   Provides typed config objects to the inference and
#   normalization engines and to the CLI.
#
# CLASSES:
# --------
# - InferenceConfig (dataclass)
#     max_examples: int     (default 3)
#     sample_size: int      (default 100)
#
# - NormalizationConfig (dataclass)
#     default_policy: str   (default "auto")
#
# - AppConfig (dataclass)
#     inference: InferenceConfig
#     normalization: NormalizationConfig
#     max_nesting_depth: int  (default 100, MongoDB's own nesting limit)
#     log_level: str          (default "WARNING")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from mongoshape.config import get_config
#   config = get_config()
#   print(config.max_nesting_depth)
#   print(config.normalization.default_policy)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_MAX_DEPTH = 100


@dataclass
class InferenceConfig:
    """Schema inference configuration."""
    max_examples: int = 3
    sample_size: int = 100


@dataclass
class NormalizationConfig:
    """Value normalization configuration."""
    default_policy: str = "auto"


@dataclass
class AppConfig:
    """Main application configuration."""
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)
    max_nesting_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    inference_config = InferenceConfig(
        max_examples=int(os.getenv("MONGOSHAPE_MAX_EXAMPLES", "3")),
        sample_size=int(os.getenv("MONGOSHAPE_SAMPLE_SIZE", "100"))
    )

    normalization_config = NormalizationConfig(
        default_policy=os.getenv("MONGOSHAPE_OBJECTID_MODE", "auto").lower()
    )

    _config_instance = AppConfig(
        inference=inference_config,
        normalization=normalization_config,
        max_nesting_depth=int(os.getenv("MONGOSHAPE_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))),
        log_level=os.getenv("MONGOSHAPE_LOG_LEVEL", "WARNING").upper()
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None
