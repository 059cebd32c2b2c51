"""
Azure AD Remove User from Group Action
Resolves a user's directory object ID and removes it from a group via the
Microsoft Graph API, with async/await and aiohttp.
"""
__version__ = "1.0.0"
from .action import RemoveFromGroupAction
from .entrypoints import run_error_sync, run_halt_sync, run_invoke_sync

__all__ = ["RemoveFromGroupAction", "run_invoke_sync", "run_error_sync", "run_halt_sync"]
