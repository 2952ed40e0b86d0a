"""
Default event handlers.

Log-only handlers for the message, friend and group events the bot
subscribes to. Replace or extend them on the registry for real replies.
"""

import logging

from transport.qq.schemas import EventEnvelope, EventType

from .registry import EventRegistry

logger = logging.getLogger(__name__)


def _author_id(payload: EventEnvelope):
    return payload.author.open_id if payload.author else None


async def handle_group_at_message(payload: EventEnvelope) -> None:
    logger.info(
        f"Group @ message: {(payload.content or '')[:50]}",
        extra={
            "group_openid": payload.group_openid or payload.group_id,
            "author": _author_id(payload),
            "message_id": payload.id,
        },
    )


async def handle_c2c_message(payload: EventEnvelope) -> None:
    logger.info(
        f"C2C message: {(payload.content or '')[:50]}",
        extra={"author": _author_id(payload), "message_id": payload.id},
    )


async def handle_friend_add(payload: EventEnvelope) -> None:
    logger.info("Friend added", extra={"author": _author_id(payload)})


async def handle_friend_del(payload: EventEnvelope) -> None:
    logger.info("Friend removed", extra={"author": _author_id(payload)})


async def handle_group_add_robot(payload: EventEnvelope) -> None:
    logger.info(
        "Bot added to group",
        extra={"group_openid": payload.group_openid or payload.group_id},
    )


async def handle_group_del_robot(payload: EventEnvelope) -> None:
    logger.info(
        "Bot removed from group",
        extra={"group_openid": payload.group_openid or payload.group_id},
    )


async def handle_direct_message(payload: EventEnvelope) -> None:
    logger.info(
        f"Guild direct message: {(payload.content or '')[:50]}",
        extra={"author": _author_id(payload), "message_id": payload.id},
    )


async def handle_message_create(payload: EventEnvelope) -> None:
    logger.info(
        f"Guild channel message: {(payload.content or '')[:50]}",
        extra={"author": _author_id(payload), "message_id": payload.id},
    )


DEFAULT_HANDLERS = {
    EventType.GROUP_AT_MESSAGE_CREATE: handle_group_at_message,
    EventType.C2C_MESSAGE_CREATE: handle_c2c_message,
    EventType.FRIEND_ADD: handle_friend_add,
    EventType.FRIEND_DEL: handle_friend_del,
    EventType.GROUP_ADD_ROBOT: handle_group_add_robot,
    EventType.GROUP_DEL_ROBOT: handle_group_del_robot,
    EventType.DIRECT_MESSAGE_CREATE: handle_direct_message,
    EventType.MESSAGE_CREATE: handle_message_create,
}


def create_default_registry() -> EventRegistry:
    """Registry with the log-only handlers installed."""
    registry = EventRegistry()
    for event_type, callback in DEFAULT_HANDLERS.items():
        registry.register(event_type, callback)
    return registry
