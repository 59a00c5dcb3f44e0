# campusconnect/common/realtime.py
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def chat_group(chat_id) -> str:
    return f"chat_{int(chat_id)}"


def user_group(user_id) -> str:
    return f"user_{int(user_id)}"


def group_send(group: str, event: dict) -> bool:
    """Push an event to a channel-layer group from sync code.

    Safe to call from views and services. Delivery is best-effort: a missing
    or failing channel layer is logged and reported as False.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("no channel layer configured, dropping %s", event.get("type"))
        return False
    try:
        async_to_sync(channel_layer.group_send)(group, event)
    except Exception:
        logger.exception("group_send to %s failed", group)
        return False
    return True
