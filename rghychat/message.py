"""Chat messages and their kinds."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering

from .status import Status
from .user import User


class MessageDataType(IntEnum):
    TEXT = 1
    VOICE = 2
    DOCUMENT = 3
    IMAGE = 4


class MessageType(IntEnum):
    RECEIVED = 1
    SENT = 2


class MessageOptions(IntEnum):
    NORMAL = 1
    REPLY = 2


@total_ordering
@dataclass(eq=False)
class MessageModel:
    """A single message; messages compare and hash by ``message_id`` alone."""

    message_id: int = 0
    user_id: int = 0
    datatype: MessageDataType = MessageDataType.TEXT
    message_type: MessageType = MessageType.RECEIVED
    option: MessageOptions = MessageOptions.NORMAL
    reply_message_id: int = 0
    content: str = ""
    status: Status = field(default_factory=Status)
    prompt: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageModel):
            return NotImplemented
        return self.message_id == other.message_id

    def __lt__(self, other: MessageModel) -> bool:
        if not isinstance(other, MessageModel):
            return NotImplemented
        return self.message_id < other.message_id

    def __hash__(self) -> int:
        return hash(self.message_id)

    def to_json(self) -> dict:
        return {
            "id": self.message_id,
            "user_id": self.user_id,
            "reply_message_id": self.reply_message_id,
            "datatype": int(self.datatype),
            "option": int(self.option),
            "content": self.content,
            "prompt": self.prompt,
            "status": self.status.to_json(),
        }

    @classmethod
    def from_json(cls, data: dict) -> MessageModel:
        """Decode a message.

        Messages from the signed-in user are SENT; all others are RECEIVED
        and count as seen by their sender.
        """
        status = Status.from_json(data["status"])
        sender = int(data["user_id"])
        current = User.current()
        if current is not None and current.id == sender:
            message_type = MessageType.SENT
        else:
            message_type = MessageType.RECEIVED
            status.mark_seen(sender)
        return cls(
            message_id=int(data["id"]),
            user_id=sender,
            datatype=MessageDataType(int(data["datatype"])),
            message_type=message_type,
            option=MessageOptions(int(data["option"])),
            reply_message_id=int(data["reply_message_id"]),
            content=str(data["content"]),
            status=status,
            prompt=str(data["prompt"]),
        )