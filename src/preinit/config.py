"""Load and save import settings as YAML / JSON documents."""

from __future__ import annotations

import json
import logging
from io import StringIO
from pathlib import Path
from typing import Any, Final

from ruamel.yaml import YAML

from .exceptions import SettingsLoadError
from .settings import Settings

logger = logging.getLogger(__name__)

_YAML_EXTS: Final[set[str]] = {".yaml", ".yml"}
_JSON_EXTS: Final[set[str]] = {".json"}

SUPPORTED_EXTS: Final[set[str]] = _YAML_EXTS | _JSON_EXTS

_yaml_parser = YAML(typ="safe")  # safe loader, YAML 1.2


def _yaml_dumper() -> YAML:
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.default_flow_style = False
    yaml.allow_unicode = True
    return yaml


def load_settings(path: str | Path) -> Settings:
    """
    Read a settings document from disk.

    Legacy option names (``on_NameError``, ``use_accessors``,
    ``overwrite_values``) are accepted.

    Raises:
        SettingsLoadError: The file is missing, has an unsupported extension,
            cannot be parsed or does not hold a mapping.
        pydantic.ValidationError: A setting has an invalid value or is unknown.
    """
    file_path = Path(path)

    if not file_path.exists():
        logger.error("Settings file not found: %s", file_path)
        raise SettingsLoadError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_EXTS:
        raise SettingsLoadError(
            f"Unsupported extension '{file_path.suffix}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTS))}"
        )

    raw_text = file_path.read_text(encoding="utf-8")

    try:
        if suffix in _YAML_EXTS:
            data: Any = _yaml_parser.load(raw_text)
        else:
            data = json.loads(raw_text)
    except Exception as exc:
        raise SettingsLoadError(f"Cannot parse {file_path.name}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsLoadError("Top-level object must be a mapping")

    logger.debug("Settings loaded from %s (%d keys)", file_path, len(data))
    return Settings.model_validate(data)


def dump_settings(settings: Settings, output_path: str | Path | None = None) -> str:
    """
    Serialize *settings* to YAML.

    Args:
        settings: The settings to serialize.
        output_path: Optional file path to save the YAML to.

    Returns:
        The YAML text.
    """
    data = settings.model_dump(mode="json")

    stream = StringIO()
    _yaml_dumper().dump(data, stream)
    yaml_content = stream.getvalue()

    if output_path:
        target = Path(output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(yaml_content, encoding="utf-8")
        logger.info("Settings saved to %s", target)

    return yaml_content
