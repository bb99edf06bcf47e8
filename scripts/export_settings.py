"""Write the service's environment variables to docs/env-vars.json.

Run from the repository root: python scripts/export_settings.py
"""

import json
import sys
from pathlib import Path
from typing import Any, Type

from pydantic import SecretStr
from pydantic_core import PydanticUndefined
from pydantic_settings import BaseSettings

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.settings import (  # noqa: E402
    AuthSettings,
    FeedSettings,
    OIDCSettings,
    RecordStoreSettings,
    Settings,
)


def _display_default(default: Any, is_required: bool) -> Any:
    if isinstance(default, SecretStr):
        return None if is_required else "********"
    if is_required or default is None:
        return None
    if isinstance(default, (bool, int, float, list, dict)):
        return default
    return str(default)


def describe_settings(settings_class: Type[BaseSettings]) -> dict[str, Any]:
    """Describe one settings class as a list of environment variables."""
    prefix = settings_class.model_config.get("env_prefix", "")
    variables = []

    for name, field in settings_class.model_fields.items():
        type_name = getattr(field.annotation, "__name__", str(field.annotation))
        default = field.get_default(call_default_factory=True)

        # Empty secrets must be supplied by the deployment
        is_required = default is PydanticUndefined or (
            isinstance(default, SecretStr) and default.get_secret_value() == ""
        )

        variables.append(
            {
                "env_var": f"{prefix}{name.upper()}",
                "type": "Secret" if "Secret" in type_name else type_name,
                "default": _display_default(default, is_required),
                "required": is_required,
                "description": field.description or "",
            }
        )

    return {
        "class_name": settings_class.__name__,
        "prefix": prefix,
        "doc": (settings_class.__doc__ or "").strip().splitlines()[0:1],
        "variables": variables,
    }


def export_settings() -> Path:
    classes = [Settings, RecordStoreSettings, FeedSettings, OIDCSettings, AuthSettings]
    data = {cls.__name__: describe_settings(cls) for cls in classes}

    output_path = root_path / "docs" / "env-vars.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)
    return output_path


if __name__ == "__main__":
    print(f"Exported settings to {export_settings()}")
