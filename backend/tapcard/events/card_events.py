"""Typed sharing-workflow events and dispatcher helpers.

Background work that reacts to a new connection or profile view (push
notifications, digests) subscribes here instead of running inside the
request.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger("tapcard.events.cards")


class CardEvent(BaseModel):
    """Base class for card domain events."""

    model_config = ConfigDict(extra="forbid", frozen=True)


CardEventListener = Callable[[CardEvent], None]


class CardEvents:
    """Registry for card event listeners."""

    _listeners: List[CardEventListener] = []

    @classmethod
    def register(cls, listener: CardEventListener) -> None:
        cls._listeners.append(listener)

    @classmethod
    def unregister(cls, listener: CardEventListener) -> None:
        cls._listeners = [existing for existing in cls._listeners if existing is not listener]

    @classmethod
    def listeners(cls) -> Sequence[CardEventListener]:
        return tuple(cls._listeners)

    @classmethod
    def dispatch(cls, event: CardEvent) -> None:
        for listener in list(cls._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Card event listener error: %s", listener)
        logger.info("card_event=%s payload=%s", event.__class__.__name__, event.model_dump())


class ConnectionCreated(CardEvent):
    connection_id: int
    from_user_id: str
    to_user_id: str
    to_profile_id: Optional[int] = None
    scan_method: Optional[str] = None
    connected_at: datetime


class ProfileViewed(CardEvent):
    view_id: int
    profile_id: int
    viewer_user_id: Optional[str] = None
    viewed_at: datetime


def register_listener(listener: CardEventListener) -> None:
    """Register an in-process listener for card events."""
    CardEvents.register(listener)


def unregister_listener(listener: CardEventListener) -> None:
    """Remove a previously registered listener."""
    CardEvents.unregister(listener)


def emit_connection_created(
    *,
    connection_id: int,
    from_user_id: str,
    to_user_id: str,
    connected_at: datetime,
    to_profile_id: Optional[int] = None,
    scan_method: Optional[str] = None,
) -> ConnectionCreated:
    event = ConnectionCreated(
        connection_id=connection_id,
        from_user_id=from_user_id,
        to_user_id=to_user_id,
        to_profile_id=to_profile_id,
        scan_method=scan_method,
        connected_at=connected_at,
    )
    CardEvents.dispatch(event)
    return event


def emit_profile_viewed(
    *,
    view_id: int,
    profile_id: int,
    viewed_at: datetime,
    viewer_user_id: Optional[str] = None,
) -> ProfileViewed:
    event = ProfileViewed(
        view_id=view_id,
        profile_id=profile_id,
        viewer_user_id=viewer_user_id,
        viewed_at=viewed_at,
    )
    CardEvents.dispatch(event)
    return event


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
