from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    FILE_READ = "file_read"
    FILE_PARSE = "file_parse"
    SCHEMA_VALIDATION = "schema_validation"
    SERVICE_NOT_FOUND = "service_not_found"
    MISSING_CONFIGURATION = "missing_configuration"
    VALUE_VALIDATION = "value_validation"


class ConfigError(RuntimeError):
    """Configuration failure tagged with the source that produced it."""

    def __init__(self, kind: ErrorKind, message: str, cause: BaseException | None = None) -> None:
        self.kind = kind
        self.message = message
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} - error = {self.cause}"


class ServiceNotFoundError(ConfigError):
    def __init__(self, service_name: str) -> None:
        self.service_name = service_name
        super().__init__(ErrorKind.SERVICE_NOT_FOUND, f"service '{service_name}' not found")
