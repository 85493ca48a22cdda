from pathlib import Path

import pytest

from openapi_plugin_config.errors import ConfigError, ErrorKind
from openapi_plugin_config.schema_file import (
    decode_plugin_config,
    default_plugin_config,
    write_plugin_config,
)


def test_decode_plugin_config() -> None:
    raw = b"""
version: '1'
services:
  example:
    swagger-url: https://file.example.com/spec.json
    insecure_skip_verify: true
    schema_configuration:
      - schema_property_name: apikey_auth
        default_value: secret
"""

    schema = decode_plugin_config(raw)
    config = schema.get_service_config("example")

    assert config.get_swagger_url() == "https://file.example.com/spec.json"
    assert config.is_insecure_skip_verify_enabled() is True
    assert config.schema_configuration == [{"schema_property_name": "apikey_auth", "default_value": "secret"}]


def test_decode_numeric_version() -> None:
    schema = decode_plugin_config(b"version: 1\nservices: {}\n")

    assert schema.version == "1"
    schema.validate()


def test_decode_empty_document_yields_empty_schema() -> None:
    schema = decode_plugin_config(b"")

    assert schema.services == {}


@pytest.mark.parametrize(
    "raw",
    [
        b"services: [unclosed",
        b"- just\n- a list\n",
        b"services:\n  example:\n    insecure_skip_verify: not-a-bool\n",
    ],
)
def test_decode_failures_name_the_configuration_file(raw: bytes) -> None:
    with pytest.raises(ConfigError) as exc_info:
        decode_plugin_config(raw)

    assert exc_info.value.kind is ErrorKind.FILE_PARSE
    assert "terraform-provider-openapi.yaml" in str(exc_info.value)
    assert exc_info.value.cause is not None


def test_write_plugin_config(tmp_path: Path) -> None:
    target = tmp_path / "plugins" / "terraform-provider-openapi.yaml"

    write_plugin_config(target, default_plugin_config("example", "https://api.example.com/swagger.json"))

    text = target.read_text(encoding="utf-8")
    assert "swagger-url: https://api.example.com/swagger.json" in text
    schema = decode_plugin_config(text)
    assert schema.get_service_config("example").get_swagger_url() == "https://api.example.com/swagger.json"
