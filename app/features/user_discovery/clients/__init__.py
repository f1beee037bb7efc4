"""
HTTP adapters for the upstream user and follow services.
"""

from .follow_graph_client import FollowGraphClient
from .user_directory_client import UserDirectoryClient

__all__ = ["FollowGraphClient", "UserDirectoryClient"]
