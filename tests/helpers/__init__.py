"""Test helper utilities for Job Digest tests."""

from .config_factory import make_app_config, make_config_dict, make_env_config
from .static_adapter import StaticAdapter, make_job

__all__ = [
    "StaticAdapter",
    "make_job",
    "make_app_config",
    "make_config_dict",
    "make_env_config",
]
