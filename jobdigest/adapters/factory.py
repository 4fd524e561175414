"""Factory functions for instantiating job board adapters."""

import time
from typing import Callable, Dict, List, Optional, Type

from jobdigest.config.environment import EnvironmentConfig
from jobdigest.config.models import AppConfig
from jobdigest.domain.models import JobSource
from jobdigest.logging import get_logger

from .base import BaseAdapter, RawRecordSink
from .exceptions import AdapterConfigurationError
from .remoteok import RemoteOKAdapter
from .web3career import Web3CareerAdapter

logger = get_logger(__name__, component="adapter")

ADAPTER_REGISTRY: Dict[JobSource, Type[BaseAdapter]] = {
    JobSource.REMOTEOK: RemoteOKAdapter,
    JobSource.WEB3CAREER: Web3CareerAdapter,
}


def build_adapters(
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    raw_sink: Optional[RawRecordSink] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> List[BaseAdapter]:
    """Create one adapter per enabled source, in configured order.

    The order of the returned list is the deduplication precedence used by
    the aggregator: the first board listed wins a cross-board duplicate.

    Args:
        app_config: Application configuration (sources and HTTP settings)
        env_config: Environment configuration (API credentials)
        raw_sink: Optional sink receiving validated raw records
        sleep: Function used to wait between retry attempts

    Returns:
        Adapters for every enabled source

    Raises:
        AdapterConfigurationError: If a source type has no adapter or settings are invalid

    Example:
        >>> adapters = build_adapters(app_config, env_config)
        >>> [adapter.name for adapter in adapters]
        ['remoteok', 'web3career']
    """
    advanced = app_config.advanced
    adapters: List[BaseAdapter] = []

    for source in app_config.get_enabled_sources():
        adapter_class = ADAPTER_REGISTRY.get(source.type)
        if adapter_class is None:
            supported = ", ".join(sorted(s.value for s in ADAPTER_REGISTRY))
            raise AdapterConfigurationError(
                f"Unknown source type: {source.type}. Supported types: {supported}"
            )

        kwargs = dict(
            timeout=advanced.http_request_timeout,
            max_retries=advanced.max_retries,
            retry_delay=advanced.retry_delay_seconds,
            user_agent=advanced.user_agent,
            raw_sink=raw_sink,
            sleep=sleep,
        )
        if adapter_class is Web3CareerAdapter:
            kwargs["api_key"] = env_config.web3_career_api_key

        logger.debug(
            "Creating adapter instance",
            extra={
                "event": "adapter.created",
                "source_type": source.type.value,
                "adapter_class": adapter_class.__name__,
            },
        )
        adapters.append(adapter_class(**kwargs))

    return adapters
