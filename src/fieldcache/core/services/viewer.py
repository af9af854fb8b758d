"""Viewer identity lookup for private cached fields.

The default lookup reads ``user`` off the request context, which may be
a dict (Ariadne's default) or an object (Strawberry's context classes),
then reads the user's ``id`` the same way. Pass your own callable to
FieldCacheService when authentication lives elsewhere:

    service = FieldCacheService(
        store=store,
        key_builder=DefaultKeyBuilder(),
        viewer=lambda context: context["request"].state.user_id,
    )
"""

from collections.abc import Mapping
from typing import Any


def default_viewer_identity(context: Any) -> Any | None:
    """Get the identity of the current viewer.

    Args:
        context: The GraphQL request context.

    Returns:
        The viewer's identity, or None for anonymous requests.
    """
    user = _lookup(context, "user")
    if user is None:
        return None
    if isinstance(user, (str, int)):
        return user
    return _lookup(user, "id")


def _lookup(obj: Any, name: str) -> Any | None:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)
