import json
import pathlib
from collections import defaultdict

import toml
from traitlets.config import LoggingConfigurable
from traitlets.config.loader import Config


LEGACY_KEYWORDS = {
    # General
    "LOGLEVEL": "ArgScan.log_level",
    "STRICT": "General.strict",
    "SKIP_PROGRAM_NAME": "General.skip_program_name",
    # Options
    "OPTIONS": "Options.table",
}


def readConfiguration(conf):
    """Read a configuration file either in JSON or TOML format.

    `conf` may also be a dict, which is returned as a copy.
    """
    if conf:
        if isinstance(conf, dict):
            return dict(conf)
        pth = pathlib.Path(conf.name)
        suffix = pth.suffix.lower()
        if suffix == ".json":
            reader = json
        elif suffix == ".toml":
            reader = toml
        else:
            reader = None
        if reader:
            return reader.loads(conf.read())
        else:
            return {}
    else:
        return {}


def nested_dict_update(d: dict, key: str, value) -> None:
    root, *path, key = key.split(".")
    sub_dict = d[root]
    for part in path:
        if part not in sub_dict:
            sub_dict[part] = defaultdict(dict)
        sub_dict = sub_dict[part]
    sub_dict[key] = value


def convert_config(legacy_config: dict, logger: LoggingConfigurable) -> Config:
    """Map flat legacy keywords (``STRICT = true``) onto traitlets sections."""
    d = defaultdict(dict)
    for key, value in legacy_config.items():
        key = key.upper()
        item = LEGACY_KEYWORDS.get(key)
        if item is None:
            logger.warning(f"Unknown keyword {key!r} in config file")
            continue
        if key == "OPTIONS":
            value = dict(value)
        elif key == "LOGLEVEL" and isinstance(value, str):
            value = value.upper()
        nested_dict_update(d=d, key=item, value=value)
    return Config(d)
