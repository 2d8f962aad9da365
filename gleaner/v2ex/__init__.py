"""Mapping descriptions and record models for v2ex pages.

Importing this package registers its mappings.
"""

from gleaner.v2ex.mappings import MY_TOPICS, NOTIFICATIONS
from gleaner.v2ex.models import (
    MyTopicsPage,
    NotificationReply,
    NotificationsPage,
    TopicItem,
)

__all__ = [
    "MY_TOPICS",
    "NOTIFICATIONS",
    "MyTopicsPage",
    "NotificationReply",
    "NotificationsPage",
    "TopicItem",
]
