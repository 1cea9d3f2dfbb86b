from typing import Mapping, Tuple


def resolve_identity(
    feed_title: str,
    aliases: Mapping[str, str],
    avatars: Mapping[str, str],
    default_avatar: str,
) -> Tuple[str, str]:
    """Map a feed's own title to (display name, avatar url).

    Titles without an alias are used as-is. Unknown or empty avatars fall
    back to default_avatar, so the returned avatar is never empty.
    """
    name = aliases.get(feed_title, feed_title)
    avatar = avatars.get(name) or default_avatar
    return name, avatar
