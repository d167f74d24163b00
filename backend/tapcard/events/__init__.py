"""Event primitives for the card sharing workflow."""

from .card_events import (
    CardEvent,
    CardEventListener,
    CardEvents,
    ConnectionCreated,
    ProfileViewed,
    emit_connection_created,
    emit_profile_viewed,
    register_listener,
    unregister_listener,
)

__all__ = [
    "CardEvent",
    "CardEventListener",
    "CardEvents",
    "ConnectionCreated",
    "ProfileViewed",
    "emit_connection_created",
    "emit_profile_viewed",
    "register_listener",
    "unregister_listener",
]
