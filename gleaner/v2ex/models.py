"""Record models for v2ex listing pages."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from gleaner.common import text_parsers, url_utils
from gleaner.record import Record, ValidityRule, derived


class TopicItem(Record):
    """One topic row of the "my topics" listing."""

    user_link: str = Field("", description="Profile link of the author")
    avatar_src: str = Field("", description="Avatar image src as served")
    title: str = Field("", description="Topic title")
    link: str = Field("", description="Topic link, e.g. /t/12345#reply10")
    comment_count: int = Field(0, description="Number of replies")
    tag_title: str = Field("", description="Display name of the node")
    tag_link: str = Field("", description="Node link, e.g. /go/qna")
    time_text: str = Field(
        "", description="Own text of the metadata line (bullets and time)"
    )

    @derived
    def topic_id(self) -> str:
        return text_parsers.extract_topic_id(self.link)

    @derived
    def username(self) -> str | None:
        return text_parsers.extract_username(self.user_link)

    @derived
    def avatar_url(self) -> str:
        return url_utils.adjust_avatar(self.avatar_src)

    @derived
    def elapsed_time(self) -> str:
        """Compact elapsed-time phrase, e.g. ``36天前``."""
        return text_parsers.extract_time_phrase(self.time_text)

    @derived
    def tag_name(self) -> str:
        return text_parsers.extract_tag_name(self.tag_link)


class MyTopicsPage(Record):
    """The "my topics" page: one page of topics plus the page count."""

    validity_rule: ClassVar[ValidityRule | None] = ValidityRule(
        children="items", primary_field="title"
    )

    total: int = Field(0, description="Number of pages")
    items: tuple[TopicItem, ...] = Field(
        (), description="Topics in page order"
    )


class NotificationReply(Record):
    """One entry of the notifications listing."""

    element_id: str = Field("", description="id attribute, e.g. n_123")
    avatar_src: str = Field("", description="Avatar image src as served")
    member_link: str = Field("", description="Profile link of the sender")
    member_name: str = Field("", description="Display name of the sender")
    title: str = Field("", description="Headline describing the event")
    content: str = Field("", description="Quoted reply body, if any")
    time_text: str = Field("", description="Elapsed time as displayed")
    link: str = Field("", description="Link to the topic and reply")

    @derived
    def notification_id(self) -> str:
        return text_parsers.slice_after(self.element_id, "n_")

    @derived
    def topic_id(self) -> str:
        return text_parsers.extract_topic_id(self.link)

    @derived
    def username(self) -> str | None:
        return text_parsers.extract_username(self.member_link)

    @derived
    def avatar_url(self) -> str:
        return url_utils.adjust_avatar(self.avatar_src)

    @derived
    def elapsed_time(self) -> str:
        return text_parsers.extract_time_phrase(self.time_text)


class NotificationsPage(Record):
    """One page of notifications, the page count and the unread count."""

    validity_rule: ClassVar[ValidityRule | None] = ValidityRule(
        children="replies", primary_field="title"
    )

    total: int = Field(0, description="Number of pages")
    replies: tuple[NotificationReply, ...] = Field(
        (), description="Notifications in page order"
    )
    unread_text: str = Field(
        "", description="Sidebar unread label, e.g. 2 条未读提醒"
    )

    @derived
    def unread_count(self) -> int:
        """Number of unread notifications, 0 when the label is missing."""
        return text_parsers.extract_leading_int(self.unread_text)
