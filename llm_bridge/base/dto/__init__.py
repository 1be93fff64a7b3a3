"""DTO validation package."""

from .chat import Role, ContentPartDTO, MessageDTO, ChatRequestDTO
from .provider_config import ProviderConfig, RouterConfig

__all__ = [
    "Role",
    "ContentPartDTO",
    "MessageDTO",
    "ChatRequestDTO",
    "ProviderConfig",
    "RouterConfig",
]
