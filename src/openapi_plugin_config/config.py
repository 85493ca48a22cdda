from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

PLUGIN_CONFIGURATION_FILE_NAME = "terraform-provider-openapi.yaml"

SWAGGER_URL_ENV_PATTERN = "OTF_VAR_{}_SWAGGER_URL"
INSECURE_SKIP_VERIFY_ENV = "OTF_INSECURE_SKIP_VERIFY"
PLUGIN_CONFIGURATION_FILE_ENV_PATTERN = "OTF_VAR_{}_PLUGIN_CONFIGURATION_FILE"


def terraform_plugins_vendor_dir(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path:
    env = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    if platform.startswith("win"):
        app_data = env.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(app_data) / "terraform.d" / "plugins"

    home = env.get("HOME") or str(Path.home())
    return Path(home) / ".terraform.d" / "plugins"
