"""Chat rooms, groups and the in-memory room registry."""

from __future__ import annotations

import json
from enum import IntEnum
from pathlib import Path
from typing import ClassVar, Iterable

from .message import MessageModel
from .user import User


class ChatType(IntEnum):
    INDIVIDUAL = 0
    GROUP = 1


def _require_user(user_id: int) -> User:
    user = User.by_id(user_id)
    if user is None:
        raise KeyError(f"no user with id {user_id}")
    return user


class ChatRoom:
    """A conversation between users; registered rooms are shared objects."""

    _rooms: ClassVar[dict[int, ChatRoom]] = {}
    _id_generator: ClassVar[int] = 0

    def __init__(
        self,
        name: str | None = None,
        users: Iterable[int] | None = None,
        messages: Iterable[MessageModel] | None = None,
        *,
        room_id: int | None = None,
    ) -> None:
        if room_id is None:
            ChatRoom._id_generator += 1
            room_id = ChatRoom._id_generator
        self.id = room_id
        self.name = name if name is not None else f"ChatRoomModel{room_id}"
        self.users: list[int] = list(users or [])
        self._messages: dict[int, MessageModel] = {}
        for message in messages or []:
            self._messages.setdefault(message.message_id, message)
        self.is_group = False
        self.chat_type = ChatType.INDIVIDUAL

    @property
    def messages(self) -> list[MessageModel]:
        """Messages ordered by id."""
        return [self._messages[key] for key in sorted(self._messages)]

    @classmethod
    def create_chat(cls, user_ids: Iterable[int]) -> ChatRoom:
        """Open an individual chat for saved users and register it."""
        chat = ChatRoom()
        for user_id in user_ids:
            chat._add_member(user_id)
        current = User.current()
        if current is not None:
            refreshed = User.by_id(current.id)
            if refreshed is not None:
                User.set_current(refreshed)
        chat.save()
        return chat

    def _add_member(self, user_id: int) -> None:
        user = _require_user(user_id)
        user.add_chat_room(self.id)
        user.save()
        self.users.append(user_id)

    @classmethod
    def get(cls, room_id: int) -> ChatRoom | None:
        return ChatRoom._rooms.get(room_id)

    def message(self, message_id: int) -> MessageModel:
        try:
            return self._messages[message_id]
        except KeyError:
            raise KeyError(f"no message with id {message_id}") from None

    def add_message(self, message: MessageModel) -> None:
        """Add a message unless one with the same id is already present."""
        self._messages.setdefault(message.message_id, message)
        self.save()

    def set_messages(self, messages: Iterable[MessageModel]) -> None:
        self._messages = {}
        for message in messages:
            self._messages.setdefault(message.message_id, message)
        self.save()

    def clear_messages(self) -> None:
        self._messages.clear()
        self.save()

    def remove_message(self, message_id: int) -> None:
        """Remove the first message whose id is not below ``message_id``."""
        for key in sorted(self._messages):
            if key >= message_id:
                del self._messages[key]
                self.save()
                return
        raise KeyError(f"no message with id at least {message_id}")

    def save(self) -> None:
        ChatRoom._rooms[self.id] = self

    def to_json(self) -> dict:
        return {
            "type": self.is_group,
            "chatType": int(self.chat_type),
            "id": self.id,
            "name": self.name,
            "users": list(self.users),
            "messages": [message.to_json() for message in self.messages],
        }

    @classmethod
    def from_json(cls, data: dict) -> ChatRoom:
        """Decode and register a room; group data yields a :class:`Group`."""
        if bool(data["type"]):
            return Group.from_json(data)
        room = ChatRoom(
            str(data["name"]),
            [int(user) for user in data["users"]],
            [MessageModel.from_json(item) for item in data["messages"]],
            room_id=int(data["id"]),
        )
        room.save()
        return room

    @classmethod
    def read_all(cls, path: str | Path) -> None:
        """Load rooms from ``path``; an empty file loads nothing."""
        text = Path(path).read_text(encoding="utf-8")
        if not text.strip():
            return
        for item in json.loads(text):
            ChatRoom._id_generator += 1
            room = ChatRoom.from_json(item)
            ChatRoom._rooms[room.id] = room

    @classmethod
    def write_all(cls, path: str | Path) -> None:
        payload = [ChatRoom._rooms[key].to_json() for key in sorted(ChatRoom._rooms)]
        Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    @classmethod
    def reset(cls) -> None:
        """Forget every registered room and restart ids."""
        ChatRoom._rooms = {}
        ChatRoom._id_generator = 0

    def __lt__(self, other: ChatRoom) -> bool:
        """A room sorts first when its last message was delivered later."""
        if not self._messages or not other._messages:
            raise ValueError("cannot order chat rooms without messages")
        mine = self.messages[-1].status.delivery_time
        theirs = other.messages[-1].status.delivery_time
        return theirs < mine


class Role(IntEnum):
    NOT_MEMBER = 0
    MEMBER = 1
    ADMIN = 2
    OWNER = 3


_ROLE_NAMES = {
    Role.OWNER: "Owner",
    Role.ADMIN: "Admin",
    Role.MEMBER: "Member",
    Role.NOT_MEMBER: "Not Member",
}


class Group(ChatRoom):
    """A chat room with a picture, description and member roles."""

    def __init__(
        self,
        name: str | None = None,
        users: Iterable[int] | None = None,
        messages: Iterable[MessageModel] | None = None,
        members_roles: dict[int, Role] | None = None,
        image_path: str = "default image",
        description: str = "Rghyapp Group",
        type_permission: bool = True,
        *,
        room_id: int | None = None,
    ) -> None:
        super().__init__(name, users, messages, room_id=room_id)
        self.members_roles: dict[int, Role] = dict(members_roles or {})
        self.image_path = image_path
        self.description = description
        self.type_permission = type_permission
        self.is_group = True
        self.chat_type = ChatType.GROUP

    @classmethod
    def create_group(
        cls,
        name: str,
        admin_id: int,
        image_path: str,
        description: str,
        type_permission: bool,
    ) -> Group:
        """Create and register a group owned by ``admin_id``, who becomes current."""
        group = cls(
            name,
            members_roles={admin_id: Role.ADMIN},
            image_path=image_path,
            description=description,
            type_permission=type_permission,
        )
        group.add_member(admin_id)
        group.save()
        User.set_current(_require_user(admin_id))
        return group

    def role_of(self, member: int) -> Role:
        return self.members_roles.get(member, Role.NOT_MEMBER)

    def is_member(self, user_id: int) -> bool:
        return self.role_of(user_id) is not Role.NOT_MEMBER

    def change_member_role(self, member: int | User, role: Role) -> None:
        member_id = member.id if isinstance(member, User) else int(member)
        self.members_roles[member_id] = Role(role)

    def add_member(self, member: int) -> None:
        """Add a saved user; the first member becomes the owner."""
        user = _require_user(member)
        user.add_chat_room(self.id)
        user.save()
        self.members_roles[member] = Role.OWNER if not self.users else Role.MEMBER
        self.users.append(member)

    def remove_member(self, member: int) -> None:
        """Remove a member, promoting an admin (or else the first member) if no owner is left."""
        user = _require_user(member)
        self.users.remove(member)
        user.remove_chat_room(self.id)
        user.save()
        self.members_roles.pop(member, None)
        roles = self.members_roles.values()
        has_owner = Role.OWNER in roles
        has_admin = has_owner or Role.ADMIN in roles
        if not has_owner:
            if has_admin:
                for user_id in self.users:
                    if self.members_roles.get(user_id) is Role.ADMIN:
                        self.members_roles[user_id] = Role.OWNER
                        break
            elif self.users:
                self.members_roles[self.users[0]] = Role.OWNER
        current = User.current()
        if current is not None and current.id == user.id:
            User.set_current(user)

    def delete_group(self) -> None:
        ChatRoom._rooms.pop(self.id, None)

    @staticmethod
    def role_to_string(role: Role | int) -> str:
        try:
            return _ROLE_NAMES[Role(role)]
        except ValueError:
            return "Unknown"

    def to_json(self) -> dict:
        data = super().to_json()
        data["Image_Path"] = self.image_path
        data["Description"] = self.description
        data["Member_Roles"] = [
            {"id": member, "Role": int(self.members_roles[member])}
            for member in sorted(self.members_roles)
        ]
        data["Type_Permission"] = self.type_permission
        return data

    @classmethod
    def from_json(cls, data: dict) -> Group:
        roles: dict[int, Role] = {}
        for entry in data["Member_Roles"]:
            value = int(entry["Role"])
            if value in Role._value2member_map_:
                roles[int(entry["id"])] = Role(value)
        group = cls(
            str(data["name"]),
            [int(user) for user in data["users"]],
            [MessageModel.from_json(item) for item in data["messages"]],
            roles,
            str(data["Image_Path"]),
            str(data["Description"]),
            bool(data["Type_Permission"]),
            room_id=int(data["id"]),
        )
        group.save()
        return group