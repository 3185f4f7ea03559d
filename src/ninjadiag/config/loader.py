import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict
from pydantic import ValidationError

from ninjadiag.core.models import OutputSettings, ParserSettings
from ninjadiag.utils.errors import ConfigError

ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]+))?\}")
ALLOWED_SECTIONS = {"parser", "output"}
DEFAULT_CONFIG_NAME = "ninjadiag.yaml"

def interpolate_env_vars(content: str) -> str:
    """Replace ${VAR} or ${VAR:default} with environment variables."""
    def replace_match(match: re.Match) -> str:
        var_name = match.group(1)
        default_value = match.group(2) if match.group(2) is not None else ""
        return os.environ.get(var_name, default_value)

    return ENV_VAR_PATTERN.sub(replace_match, content)

def load_config(path: Path) -> Dict[str, Any]:
    """
    Load ninjadiag.yaml with environment variable interpolation.

    Keeps only the known sections: parser, output.
    Raises ConfigError if the file exists but cannot be read or parsed.
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read file: {e}", path=str(path))

    try:
        full_config = yaml.safe_load(interpolate_env_vars(content)) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", path=str(path))

    if not isinstance(full_config, dict):
        raise ConfigError("Top level must be a mapping.", path=str(path))

    return {k: v for k, v in full_config.items() if k in ALLOWED_SECTIONS}

def settings_from_config(config: Dict[str, Any]) -> ParserSettings:
    """Build ParserSettings from the 'parser' section; env vars fill the gaps."""
    try:
        return ParserSettings(**(config.get("parser") or {}))
    except ValidationError as e:
        raise ConfigError(f"Invalid 'parser' section: {e}")

def output_settings_from_config(config: Dict[str, Any]) -> OutputSettings:
    try:
        return OutputSettings(**(config.get("output") or {}))
    except ValidationError as e:
        raise ConfigError(f"Invalid 'output' section: {e}")
