from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from openapi_plugin_config.config import PLUGIN_CONFIGURATION_FILE_NAME
from openapi_plugin_config.errors import ConfigError, ErrorKind
from openapi_plugin_config.models import PluginConfigSchemaV1, ServiceConfigV1


def decode_plugin_config(raw: bytes | str) -> PluginConfigSchemaV1:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise _parse_error(exc) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise _parse_error(TypeError(f"expected a mapping at top level, got {type(data).__name__}"))

    try:
        return PluginConfigSchemaV1.model_validate(data)
    except ValidationError as exc:
        raise _parse_error(exc) from exc


def encode_plugin_config(schema: PluginConfigSchemaV1) -> str:
    data = schema.model_dump(by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False)


def write_plugin_config(path: Path, schema: PluginConfigSchemaV1) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode_plugin_config(schema), encoding="utf-8")


def default_plugin_config(provider_name: str, swagger_url: str) -> PluginConfigSchemaV1:
    return PluginConfigSchemaV1(
        services={
            provider_name: ServiceConfigV1(swagger_url=swagger_url, insecure_skip_verify=False),
        },
    )


def _parse_error(exc: BaseException) -> ConfigError:
    return ConfigError(
        ErrorKind.FILE_PARSE,
        f"failed to unmarshall {PLUGIN_CONFIGURATION_FILE_NAME} configuration file",
        cause=exc,
    )
