"""Sender authorization for the chat bot."""

from typing import Iterable
from config import Config


class AccessPolicy:
    """Allow-list of chat usernames permitted to talk to the bot.

    Args:
        allowed_users: Usernames, with or without a leading "@".
    """

    def __init__(self, allowed_users: Iterable[str]):
        self._allowed = frozenset(
            name for name in (_normalize(user) for user in allowed_users) if name
        )

    @classmethod
    def from_config(cls, config: Config) -> "AccessPolicy":
        """Build the policy from the resolved allow-list in config."""
        return cls(config.authorized_users)

    def is_allowed(self, sender: str) -> bool:
        """Check whether the provided username is authorized.

        An empty username is always denied.
        """
        name = _normalize(sender or "")
        return bool(name) and name in self._allowed


def _normalize(username: str) -> str:
    return username.strip().removeprefix("@")
