"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

MAX_UTC_OFFSET_SECONDS = 18 * 3600
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_clock_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate clock parameters."""
        errors = []

        if "utc_offset_seconds" in params:
            value = params["utc_offset_seconds"]
            if value is not None and (not _is_int(value) or abs(value) > MAX_UTC_OFFSET_SECONDS):
                errors.append(ValidationError(
                    field="utc_offset_seconds",
                    message="Must be null or an integer between -64800 and 64800",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_session_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate session parameters."""
        errors = []

        if "pre_market_hour" in params:
            value = params["pre_market_hour"]
            if not _is_int(value) or not 0 <= value <= 23:
                errors.append(ValidationError(
                    field="pre_market_hour",
                    message="Must be an integer between 0 and 23",
                    value=value
                ))

        for field in ("pre_market_minute", "pre_market_second"):
            if field in params:
                value = params[field]
                if not _is_int(value) or not 0 <= value <= 59:
                    errors.append(ValidationError(
                        field=field,
                        message="Must be an integer between 0 and 59",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "clock" in config:
            errors.extend(ConfigValidator.validate_clock_params(config["clock"]))

        if "session" in config:
            errors.extend(ConfigValidator.validate_session_params(config["session"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
