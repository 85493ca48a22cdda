from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from openapi_plugin_config.config import (
    PLUGIN_CONFIGURATION_FILE_ENV_PATTERN,
    PLUGIN_CONFIGURATION_FILE_NAME,
    terraform_plugins_vendor_dir,
)
from openapi_plugin_config.env import candidate_env_names, multi_env_default
from openapi_plugin_config.models import ServiceConfiguration
from openapi_plugin_config.resolver import resolve_service_configuration

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PluginConfiguration:
    """Resolution context for one provider.

    ``configuration`` holds the opened plugin configuration file, or None when
    the file does not exist. In that case OTF_VAR_<provider_name>_SWAGGER_URL
    must be set.
    """

    provider_name: str
    configuration: IO[bytes] | None = None
    environ: Mapping[str, str] | None = None

    def get_service_configuration(self) -> ServiceConfiguration:
        return resolve_service_configuration(self.provider_name, self.configuration, self.environ)


def plugin_configuration_path(provider_name: str, environ: Mapping[str, str] | None = None) -> Path:
    names = candidate_env_names(PLUGIN_CONFIGURATION_FILE_ENV_PATTERN, provider_name)
    override = multi_env_default(names, "", environ)
    if override:
        return Path(override).expanduser()
    return terraform_plugins_vendor_dir(environ) / PLUGIN_CONFIGURATION_FILE_NAME


@contextmanager
def open_plugin_configuration(
    provider_name: str,
    environ: Mapping[str, str] | None = None,
) -> Iterator[PluginConfiguration]:
    path = plugin_configuration_path(provider_name, environ)
    if not path.exists():
        logger.info("open api plugin configuration not present at %s", path)
        yield PluginConfiguration(provider_name=provider_name, environ=environ)
        return

    logger.info("found open api plugin configuration at %s", path)
    with path.open("rb") as handle:
        yield PluginConfiguration(provider_name=provider_name, configuration=handle, environ=environ)
