"""Transport-neutral inbound chat message."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class InboundMessage:
    """A chat message as seen by the pipeline.

    Attributes:
        sender: Sender username; None when the message has no sender at all,
                "" when the sender has no username.
        chat_id: Channel to reply to.
        text: Full raw message text.
        command: Command name without "/" or "@botname", if the message is a command.
        command_args: Text following the command, stripped.
    """

    sender: Optional[str]
    chat_id: int
    text: str
    command: Optional[str] = None
    command_args: str = ""

    @property
    def is_command(self) -> bool:
        return self.command is not None


def split_command(text: str, length: Optional[int] = None) -> Tuple[str, str]:
    """Split "/name@bot args" into ("name", "args").

    Args:
        text: Message text starting with "/".
        length: Length of the command token when the transport reports it;
                otherwise the token runs to the first whitespace.

    Returns:
        Command name and stripped argument text.
    """
    if length is None:
        parts = text.split(maxsplit=1)
        token = parts[0] if parts else ""
        rest = parts[1] if len(parts) > 1 else ""
    else:
        token, rest = text[:length], text[length:]

    name = token.removeprefix("/").split("@", 1)[0]
    return name, rest.strip()


def from_text(sender: Optional[str], chat_id: int, text: str) -> InboundMessage:
    """Build a message from plain text; a leading "/" marks a command."""
    if text.startswith("/") and len(text) > 1 and not text[1].isspace():
        command, args = split_command(text)
        return InboundMessage(sender, chat_id, text, command, args)
    return InboundMessage(sender, chat_id, text)
