from typing import Optional

from heyweb.cli.config import CLIConfig, get_config

_global_config: Optional[CLIConfig] = None


def set_global_config(config: CLIConfig) -> None:
    global _global_config
    _global_config = config


def get_global_config() -> CLIConfig:
    if _global_config is None:
        return get_config()
    return _global_config
