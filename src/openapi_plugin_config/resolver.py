from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import IO, AnyStr

from openapi_plugin_config.config import (
    INSECURE_SKIP_VERIFY_ENV,
    PLUGIN_CONFIGURATION_FILE_NAME,
    SWAGGER_URL_ENV_PATTERN,
    terraform_plugins_vendor_dir,
)
from openapi_plugin_config.env import candidate_env_names, env_bool, lookup_env
from openapi_plugin_config.errors import ConfigError, ErrorKind, ServiceNotFoundError
from openapi_plugin_config.models import PluginConfigSchema, PluginConfigSchemaV1, ServiceConfiguration
from openapi_plugin_config.schema_file import decode_plugin_config

logger = logging.getLogger(__name__)


def resolve_service_configuration(
    provider_name: str,
    configuration: IO[AnyStr] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServiceConfiguration:
    """Resolve the validated service configuration for ``provider_name``.

    A non-empty ``OTF_VAR_<provider_name>_SWAGGER_URL`` always wins; the
    configuration stream is only read when that variable is unset or empty.
    """
    service_config = _from_environment(provider_name, environ)
    if service_config is None and configuration is not None:
        service_config = _from_configuration_file(provider_name, configuration)

    logger.debug("serviceConfig = %r", service_config)

    if service_config is None or not service_config.get_swagger_url():
        raise ConfigError(
            ErrorKind.MISSING_CONFIGURATION,
            "swagger url not provided, please export OTF_VAR_<provider_name>_SWAGGER_URL env variable "
            f"with the URL where '{provider_name}' service provider is exposing the swagger file OR create "
            f"a plugin configuration file ({PLUGIN_CONFIGURATION_FILE_NAME}) at {terraform_plugins_vendor_dir(environ)} "
            "following the Plugin configuration schema specifications",
        )

    try:
        service_config.validate()
    except ConfigError as exc:
        raise ConfigError(
            ErrorKind.VALUE_VALIDATION,
            f"service configuration for '{provider_name}' not valid",
            cause=exc,
        ) from exc

    return service_config


def _from_environment(provider_name: str, environ: Mapping[str, str] | None) -> ServiceConfiguration | None:
    names = candidate_env_names(SWAGGER_URL_ENV_PATTERN, provider_name)
    found = lookup_env(names, environ)
    if found is None:
        return None

    env_name, swagger_url = found
    logger.info("%s set with value %s", env_name, swagger_url)
    skip_verify = env_bool(INSECURE_SKIP_VERIFY_ENV, environ)
    logger.info("%s set with value %s", INSECURE_SKIP_VERIFY_ENV, skip_verify)

    schema: PluginConfigSchema = PluginConfigSchemaV1.single_service(provider_name, swagger_url, skip_verify)
    return schema.get_service_config(provider_name)


def _from_configuration_file(provider_name: str, configuration: IO[AnyStr]) -> ServiceConfiguration | None:
    try:
        source = configuration.read()
    except (OSError, ValueError) as exc:
        raise ConfigError(
            ErrorKind.FILE_READ,
            f"failed to read {PLUGIN_CONFIGURATION_FILE_NAME} configuration file",
            cause=exc,
        ) from exc

    schema: PluginConfigSchema = decode_plugin_config(source)
    try:
        schema.validate()
    except ConfigError as exc:
        raise ConfigError(
            ErrorKind.SCHEMA_VALIDATION,
            f"error occurred while validating '{PLUGIN_CONFIGURATION_FILE_NAME}'",
            cause=exc,
        ) from exc

    try:
        return schema.get_service_config(provider_name)
    except ServiceNotFoundError:
        logger.debug("service '%s' not present in %s", provider_name, PLUGIN_CONFIGURATION_FILE_NAME)
        return None
