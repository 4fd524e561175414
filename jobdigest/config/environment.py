"""Environment variable loading and validation.

Secrets and delivery settings live in the environment (or a ``.env`` file
loaded by the CLI), never in the YAML config.
"""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder.

    Nothing here is required at load time: a missing SMTP host disables
    email delivery and a missing Web3.Career key disables that adapter.
    """

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_pass: Optional[str] = None,
        smtp_sender_name: Optional[str] = None,
        log_level: Optional[str] = None,
        web3_career_api_key: Optional[str] = None,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_pass = smtp_pass
        self.smtp_sender_name = smtp_sender_name
        self.log_level = log_level
        self.web3_career_api_key = web3_career_api_key

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host)


def load_environment_config() -> EnvironmentConfig:
    """Load and validate environment variables.

    Optional environment variables:
    - SMTP_HOST: SMTP server hostname (email delivery disabled when unset)
    - SMTP_PORT: SMTP server port (1-65535, default 587)
    - SMTP_USER / SMTP_PASS: SMTP credentials, both or neither
    - SMTP_SENDER_NAME: Display name for the From header
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - WEB3_CAREER_API_KEY: Token for the Web3.Career API

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    smtp_host = _get("SMTP_HOST")
    smtp_port_str = _get("SMTP_PORT")
    smtp_user = _get("SMTP_USER")
    smtp_pass = _get("SMTP_PASS")
    log_level = _get("LOG_LEVEL")

    smtp_port = 587
    if smtp_port_str:
        try:
            smtp_port = int(smtp_port_str)
            if not 1 <= smtp_port <= 65535:
                errors.append(f"Invalid SMTP_PORT: {smtp_port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid SMTP_PORT: '{smtp_port_str}'. Must be a valid integer.")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if smtp_user and not smtp_pass:
        errors.append("SMTP_USER is set but SMTP_PASS is not. Both must be set for authentication.")
    elif smtp_pass and not smtp_user:
        errors.append("SMTP_PASS is set but SMTP_USER is not. Both must be set for authentication.")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Verify SMTP_PORT is a number between 1 and 65535",
            ],
        )

    return EnvironmentConfig(
        smtp_host=smtp_host,
        smtp_port=smtp_port,
        smtp_user=smtp_user,
        smtp_pass=smtp_pass,
        smtp_sender_name=_get("SMTP_SENDER_NAME"),
        log_level=log_level.upper() if log_level else None,
        web3_career_api_key=_get("WEB3_CAREER_API_KEY"),
    )


def _get(name: str) -> Optional[str]:
    """Read a variable, treating blank values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
