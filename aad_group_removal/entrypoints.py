import asyncio
from typing import Any, Dict, Mapping, Optional

from .action import RemoveFromGroupAction
from .config import ActionSettings, load_action_settings


def _action(settings: Optional[ActionSettings], config_file: str) -> RemoveFromGroupAction:
    return RemoveFromGroupAction(settings or load_action_settings(config_file=config_file))


def run_invoke_sync(
    params: Mapping[str, Any],
    settings: Optional[ActionSettings] = None,
    config_file: str = "configs/config.json",
) -> Dict[str, Any]:
    """
    Synchronous helper to remove a user from a group.

    Intended for scripts and job runners that don't want to manage asyncio
    directly. Settings are loaded from the environment when not given.
    """
    return asyncio.run(_action(settings, config_file).invoke(params))


def run_error_sync(
    params: Mapping[str, Any],
    settings: Optional[ActionSettings] = None,
    config_file: str = "configs/config.json",
) -> Dict[str, Any]:
    return asyncio.run(_action(settings, config_file).error(params))


def run_halt_sync(
    params: Mapping[str, Any],
    settings: Optional[ActionSettings] = None,
    config_file: str = "configs/config.json",
) -> Dict[str, Any]:
    return asyncio.run(_action(settings, config_file).halt(params))
