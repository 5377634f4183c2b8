"""Startup-time logging of the effective configuration."""

from apmpay.common.config import CommonSettings
from apmpay.common.logging import logger

SECRET_MARKERS = ("key", "secret", "password", "token", "client_id")


def redacted_settings(config: CommonSettings) -> dict[str, str]:
    """Return settings as strings, masking credential-like fields that are set."""

    safe: dict[str, str] = {}
    for name, value in config.model_dump(mode="json").items():
        if any(marker in name for marker in SECRET_MARKERS):
            safe[name] = "<redacted>" if value else "<unset>"
        else:
            safe[name] = str(value)
    return safe


def log_startup_config(config: CommonSettings) -> None:
    """Log the active provider mode and settings for quick troubleshooting."""

    logger.info(
        "starting %s payment_mode=%s config=%s",
        config.service_name,
        config.payment_mode.value,
        redacted_settings(config),
    )
