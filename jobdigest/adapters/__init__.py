"""Job board adapter implementations.

This module provides adapters for the supported boards:
- Remote OK: remoteok.RemoteOKAdapter
- Web3.Career: web3career.Web3CareerAdapter

Use the factory function to instantiate the enabled adapters:
    from jobdigest.adapters.factory import build_adapters
    adapters = build_adapters(app_config, env_config)
    jobs = adapters[0].fetch()

Exception handling:
    from jobdigest.adapters.exceptions import AdapterError, AdapterHTTPError, AdapterTimeoutError
"""

from .base import BaseAdapter, RawRecordSink
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import ADAPTER_REGISTRY, build_adapters
from .remoteok import RemoteOKAdapter, RemoteOKRecord, normalize_remoteok_record
from .web3career import Web3CareerAdapter, Web3CareerRecord, normalize_web3career_record

__all__ = [
    # Base and factory
    "BaseAdapter",
    "RawRecordSink",
    "ADAPTER_REGISTRY",
    "build_adapters",
    # Adapters
    "RemoteOKAdapter",
    "RemoteOKRecord",
    "normalize_remoteok_record",
    "Web3CareerAdapter",
    "Web3CareerRecord",
    "normalize_web3career_record",
    # Exceptions
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
