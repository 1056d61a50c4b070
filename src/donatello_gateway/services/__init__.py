"""Services package for Donatello Gateway.

Submodules are loaded lazily so that importing a single service does not
pull in every other one.
"""

__all__ = ["ConversationService", "ChatRelayService", "MintService"]


def __getattr__(name):
    if name == "ConversationService":
        from .conversation_service import ConversationService as _ConversationService

        return _ConversationService
    if name == "ChatRelayService":
        from .chat_relay_service import ChatRelayService as _ChatRelayService

        return _ChatRelayService
    if name == "MintService":
        from .mint_service import MintService as _MintService

        return _MintService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
