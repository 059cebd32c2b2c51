"""
Configuration loader for the remove-from-group action.
Loads dotenv files per environment and an optional JSON settings file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads environment files and JSON configuration."""

    def __init__(self, config_file: str = "configs/config.json", environment: Optional[str] = None,
                 base_path: Optional[Path] = None):
        """
        Initialize config loader.

        Args:
            config_file: Path to configuration file, relative to base_path
            environment: Environment name selecting envs/.env.<environment>
            base_path: Project root; defaults to the current working directory
        """
        self.config_file = config_file
        self.config: Dict[str, Any] = {}
        self.environment = environment or "default"
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self._load_environment_config()
        self._load_config()

    def _load_environment_config(self):
        """Load environment-specific configuration"""
        # The main .env may name the environment to load next
        main_env_path = self.base_path / 'envs' / '.env'
        if main_env_path.exists():
            load_dotenv(main_env_path, override=False)
            logger.debug("[OK] Loaded main env config from %s", main_env_path)

            env_from_file = os.getenv('ACTION_ENVIRONMENT')
            if env_from_file:
                self.environment = env_from_file

        env_file_path = self.base_path / 'envs' / f'.env.{self.environment}'
        if env_file_path.exists():
            load_dotenv(env_file_path, override=True)
            logger.debug("[OK] Loaded %s specific config from %s", self.environment, env_file_path)

    def _load_config(self):
        """Load configuration from JSON file; a missing file means defaults."""
        config_path = self.base_path / self.config_file
        if not config_path.exists():
            logger.debug("[!] Configuration file %s not found, using defaults", config_path)
            return
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                self.config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {config_path}: {e}") from e
        logger.debug("Loaded configuration from: %s", config_path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., "http.read_timeout")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def is_debug_mode(self) -> bool:
        return bool(self.get("logging.debug", False))

    def setup_logging(self):
        """Setup logging based on configuration."""
        log_level = self.get("logging.level", "INFO")
        debug = self.is_debug_mode()

        level = logging.DEBUG if debug else getattr(logging, str(log_level).upper(), logging.INFO)
        logging.getLogger("aad_group_removal").setLevel(level)
