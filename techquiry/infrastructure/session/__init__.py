from .slots import SessionAuthenticationSlot, SessionSlotRegistry

__all__ = ["SessionAuthenticationSlot", "SessionSlotRegistry"]
