"""Mapping descriptions for v2ex listing pages.

Both pages wrap their content in ``div#Wrapper`` and expose the page count
as the ``max`` attribute of the page-number input. The notifications page
also reads the unread label from the right sidebar.
"""

from gleaner.mapping import (
    AttrMode,
    ChildrenSpec,
    FieldSpec,
    MappingDescription,
    register_mapping,
)
from gleaner.v2ex.models import (
    MyTopicsPage,
    NotificationReply,
    NotificationsPage,
    TopicItem,
)

WRAPPER = "div#Wrapper"
PAGE_COUNT = FieldSpec("total", "input.page_input", attr="max", type=int)

TOPIC_ITEM = MappingDescription(
    name="v2ex-topic-item",
    model=TopicItem,
    fields=(
        FieldSpec("user_link", 'td > a[href^="/member"]', attr="href"),
        FieldSpec("avatar_src", "img.avatar", attr="src"),
        FieldSpec("title", "span.item_title"),
        FieldSpec("link", "span.item_title a", attr="href"),
        FieldSpec("comment_count", "a[class^=count_]", type=int),
        FieldSpec("tag_title", "a.node"),
        FieldSpec("tag_link", "a.node", attr="href"),
        FieldSpec("time_text", "span.small.fade", mode=AttrMode.OWN_TEXT),
    ),
)

MY_TOPICS = register_mapping(
    MappingDescription(
        name="v2ex-my-topics",
        model=MyTopicsPage,
        root=WRAPPER,
        fields=(PAGE_COUNT,),
        children=(ChildrenSpec("items", "div.cell.item", TOPIC_ITEM),),
    )
)

NOTIFICATION_REPLY = MappingDescription(
    name="v2ex-notification-reply",
    model=NotificationReply,
    fields=(
        FieldSpec("element_id", "", attr="id"),
        FieldSpec("avatar_src", "img.avatar", attr="src"),
        FieldSpec("member_link", 'a[href^="/member"]', attr="href"),
        FieldSpec("member_name", 'span.fade a[href^="/member"] strong'),
        FieldSpec("title", "span.fade", mode=AttrMode.OWN_TEXT),
        FieldSpec("content", "div.payload"),
        FieldSpec("time_text", "span.snow"),
        FieldSpec("link", 'a[href^="/t/"]', attr="href"),
    ),
)

NOTIFICATIONS = register_mapping(
    MappingDescription(
        name="v2ex-notifications",
        model=NotificationsPage,
        root=WRAPPER,
        fields=(
            PAGE_COUNT,
            FieldSpec("unread_text", '#Rightbar a[href="/notifications"]'),
        ),
        children=(
            ChildrenSpec("replies", "div.cell[id^=n_]", NOTIFICATION_REPLY),
        ),
    )
)
