from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import urlparse

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from openapi_plugin_config.errors import ConfigError, ErrorKind, ServiceNotFoundError

CURRENT_SCHEMA_VERSION = "1"


class ServiceConfiguration(Protocol):
    def get_swagger_url(self) -> str: ...

    def is_insecure_skip_verify_enabled(self) -> bool: ...

    def validate(self) -> None: ...


class PluginConfigSchema(Protocol):
    def get_service_config(self, service_name: str) -> ServiceConfiguration: ...

    def validate(self) -> None: ...


class ServiceConfigV1(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    swagger_url: str = Field(
        default="",
        validation_alias=AliasChoices("swagger-url", "swagger_url"),
        serialization_alias="swagger-url",
    )
    insecure_skip_verify: bool = False
    # Opaque to the resolver; passed through to resource generation.
    schema_configuration: list[dict[str, Any]] | None = None
    telemetry: dict[str, Any] | None = None

    @field_validator("swagger_url", mode="before")
    @classmethod
    def _blank_url(cls, value: Any) -> Any:
        return "" if value is None else value

    def get_swagger_url(self) -> str:
        return self.swagger_url

    def is_insecure_skip_verify_enabled(self) -> bool:
        return self.insecure_skip_verify

    def validate(self) -> None:
        if not self.swagger_url:
            raise ConfigError(ErrorKind.VALUE_VALIDATION, "service configuration missing swagger URL")
        if not _is_url(self.swagger_url):
            raise ConfigError(
                ErrorKind.VALUE_VALIDATION,
                f"service swagger URL must be a valid URL, got '{self.swagger_url}'",
            )


class PluginConfigSchemaV1(BaseModel):
    """Version 1 of the plugin configuration file.

    The top level maps service names to their configuration::

        version: '1'
        services:
          example:
            swagger-url: https://api.example.com/swagger.json
            insecure_skip_verify: false
    """

    version: str = CURRENT_SCHEMA_VERSION
    services: dict[str, ServiceConfigV1] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("services", mode="before")
    @classmethod
    def _services_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def single_service(
        cls,
        service_name: str,
        swagger_url: str,
        insecure_skip_verify: bool = False,
    ) -> PluginConfigSchemaV1:
        service = ServiceConfigV1(swagger_url=swagger_url, insecure_skip_verify=insecure_skip_verify)
        return cls(services={service_name: service})

    def get_service_config(self, service_name: str) -> ServiceConfigV1:
        config = self.services.get(service_name)
        if config is None:
            raise ServiceNotFoundError(service_name)
        return config

    def validate(self) -> None:
        if self.version != CURRENT_SCHEMA_VERSION:
            raise ConfigError(
                ErrorKind.SCHEMA_VALIDATION,
                f"provider configuration version '{self.version}' not matching current implementation, "
                f"please use version '{CURRENT_SCHEMA_VERSION}' of provider configuration specification",
            )
        for service_name, config in self.services.items():
            try:
                config.validate()
            except ConfigError as exc:
                raise ConfigError(
                    ErrorKind.SCHEMA_VALIDATION,
                    f"service '{service_name}' configuration not valid",
                    cause=exc,
                ) from exc


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)
