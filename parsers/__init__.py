"""parsers/ — Book config loaders (YAML and JSON)."""

from pathlib import Path

from errors import ConfigError
from models import Book

SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}


def load_config(config_path: Path) -> Book:
    """
    Dispatch to the appropriate loader based on file extension. Relative paths
    in the config resolve against the config file's directory.
    """
    config_path = Path(config_path).resolve()
    suffix = config_path.suffix.lower()

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    if suffix in (".yaml", ".yml"):
        from parsers.yaml_config import load_yaml
        return load_yaml(config_path)
    elif suffix == ".json":
        from parsers.json_config import load_json
        return load_json(config_path)
    else:
        raise ConfigError(
            f"Unsupported config format: '{suffix}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )
