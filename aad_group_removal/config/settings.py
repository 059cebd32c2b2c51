"""Settings object handed to the action at construction time."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from ..auth.credentials import SECRET_NAMES
from .config_loader import ConfigLoader

ADDRESS = "ADDRESS"


@dataclass
class ActionSettings:
    environment: Dict[str, str] = field(default_factory=dict)
    secrets: Dict[str, str] = field(default_factory=dict, repr=False)
    connection_timeout: float = 10
    read_timeout: float = 30
    rate_limit_delay: float = 5.0
    retry_unknown_errors: bool = True

    @property
    def default_address(self) -> Optional[str]:
        return self.environment.get(ADDRESS) or None


def split_environ(environ: Mapping[str, str]) -> tuple[Dict[str, str], Dict[str, str]]:
    """Separate secret values from plain environment values."""
    environment: Dict[str, str] = {}
    secrets: Dict[str, str] = {}
    for key, value in environ.items():
        if key in SECRET_NAMES:
            secrets[key] = value
        else:
            environment[key] = value
    return environment, secrets


def load_action_settings(
    config_file: str = "configs/config.json",
    environment: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_loader: Optional[ConfigLoader] = None,
) -> ActionSettings:
    """Load settings from dotenv files, the JSON config and the process environment."""

    loader = config_loader or ConfigLoader(config_file=config_file, environment=environment)
    env_values, secrets = split_environ(os.environ if environ is None else environ)

    return ActionSettings(
        environment=env_values,
        secrets=secrets,
        connection_timeout=float(loader.get("http.connection_timeout", 10)),
        read_timeout=float(loader.get("http.read_timeout", 30)),
        rate_limit_delay=float(loader.get("error_handling.rate_limit_delay", 5.0)),
        retry_unknown_errors=bool(loader.get("error_handling.retry_unknown_errors", True)),
    )
