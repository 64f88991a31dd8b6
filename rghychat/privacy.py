"""Privacy checks for a user's block and visibility lists."""

from __future__ import annotations

from .user import User


class Privacy:
    """Answers whether a user has blocked or hidden things from others.

    An unknown user has empty lists, so every check is False.
    """

    def __init__(self, user_id: int) -> None:
        user = User.by_id(user_id)
        if user is None:
            self._blocked: frozenset[int] = frozenset()
            self._info_hidden: frozenset[int] = frozenset()
            self._seen_hidden: frozenset[int] = frozenset()
            self._last_seen_hidden: frozenset[int] = frozenset()
        else:
            self._blocked = frozenset(user.blocked)
            self._info_hidden = frozenset(user.info_visibility)
            self._seen_hidden = frozenset(user.seen_visibility)
            self._last_seen_hidden = frozenset(user.last_seen_visibility)

    def is_blocked_by(self, user_id: int) -> bool:
        return user_id in self._blocked

    def info_is_hidden_by(self, user_id: int) -> bool:
        return user_id in self._info_hidden

    def seen_is_hidden_by(self, user_id: int) -> bool:
        return user_id in self._seen_hidden

    def last_seen_is_hidden_by(self, user_id: int) -> bool:
        return user_id in self._last_seen_hidden