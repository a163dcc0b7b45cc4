"""Sender authorization against configured allow-lists."""

from chatrelay.config.models import AccessConfig
from chatrelay.domain.exceptions import AuthorizationDenied


def is_allowed(user_id: int, chat_id: int, access: AccessConfig) -> bool:
    """Check whether a sender may use the bot.

    Admins always pass. With both allow-lists empty everyone passes;
    otherwise the user or the chat must be listed.

    Args:
        user_id: Sender ID.
        chat_id: Chat the message was sent in.
        access: Access configuration.

    Returns:
        True if the sender is allowed.
    """
    if user_id in access.admin_user_ids:
        return True

    if not access.allowed_user_ids and not access.allowed_chat_ids:
        return True

    return user_id in access.allowed_user_ids or chat_id in access.allowed_chat_ids


def ensure_allowed(user_id: int, chat_id: int, access: AccessConfig) -> None:
    """Raise if the sender may not use the bot.

    Raises:
        AuthorizationDenied: If ``is_allowed`` is False.
    """
    if not is_allowed(user_id, chat_id, access):
        raise AuthorizationDenied(user_id, chat_id)
