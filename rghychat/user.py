"""Users, their stories, and the in-memory user registry."""

from __future__ import annotations

import copy
import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import ClassVar

from . import date
from .hashing import generate_hash, validate_password as _check_password
from .profile import UserProfileDescription

_STORY_LIFETIME = timedelta(hours=24)
_MOBILE_PATTERN = re.compile(r"\+[1-9][0-9]{7,14}")
_STRENGTH_RULE = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[^A-Za-z0-9]).{8,}"
)


def _read_json(path: str | Path) -> object | None:
    """Return the parsed content of ``path``, or None when the file is empty."""
    text = Path(path).read_text(encoding="utf-8")
    if not text.strip():
        return None
    return json.loads(text)


def _write_json(path: str | Path, payload: object) -> None:
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")


@dataclass
class Story:
    """A short-lived post by a user, hidden from excluded contacts."""

    user_id: int
    publish_time: datetime
    story_text: str = ""
    story_photo_path: str = ""
    excluded_ids: set[int] = field(default_factory=set)
    story_color: str = ""

    _registry: ClassVar[list[Story]] = []

    def to_json(self) -> dict:
        return {
            "userId": self.user_id,
            "publishTime": date.to_json(self.publish_time),
            "storyText": self.story_text,
            "storyPhotoPath": self.story_photo_path,
            "excludedIds": sorted(self.excluded_ids),
            "storyColor": self.story_color,
        }

    @classmethod
    def from_json(cls, data: dict) -> Story:
        return cls(
            user_id=int(data["userId"]),
            publish_time=date.from_json(data["publishTime"]),
            story_text=str(data["storyText"]),
            story_photo_path=str(data["storyPhotoPath"]),
            excluded_ids={int(x) for x in data["excludedIds"]},
            story_color=str(data["storyColor"]),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once more than 24 hours have passed since publishing."""
        if now is None:
            now = date.now()
        return now - self.publish_time > _STORY_LIFETIME

    def exclude_contact(self, contact_id: int) -> None:
        self.excluded_ids.add(contact_id)

    def include_contact(self, contact_id: int) -> None:
        self.excluded_ids.discard(contact_id)

    def is_excluded(self, contact_id: int) -> bool:
        """Return True if the author has ``contact_id`` as a contact and excluded them."""
        owner = User.by_id(self.user_id)
        if owner is None:
            return False
        return owner.has_contact(contact_id) and contact_id in self.excluded_ids

    def save(self) -> None:
        type(self)._registry.append(copy.deepcopy(self))

    @classmethod
    def read_stories(cls, path: str | Path) -> None:
        """Load stories from ``path``, skipping expired ones."""
        payload = _read_json(path) or []
        for item in payload:
            story = cls.from_json(item)
            if not story.is_expired():
                cls._registry.append(story)

    @classmethod
    def write_stories(cls, path: str | Path) -> None:
        _write_json(path, [story.to_json() for story in cls._registry])

    @classmethod
    def stories_by_user(cls, user_id: int) -> list[Story]:
        """Return the saved stories of ``user_id``, oldest first."""
        found = [copy.deepcopy(s) for s in cls._registry if s.user_id == user_id]
        return sorted(found, key=lambda s: s.publish_time)


@dataclass
class User:
    """An account with contacts, chat rooms, stories and privacy lists.

    The class keeps a registry of saved users and the signed-in user; values
    handed out and stored are independent copies.
    """

    id: int
    last_seen: datetime = field(default_factory=date.now)
    mobile_number: str = ""
    password: str = field(default_factory=str)
    first_name: str = ""
    last_name: str = ""
    chat_rooms: list[int] = field(default_factory=list)
    stories: list[Story] = field(default_factory=list)
    contacts: set[int] = field(default_factory=set)
    profile: UserProfileDescription = field(default_factory=UserProfileDescription)
    info_visibility: set[int] = field(default_factory=set)
    last_seen_visibility: set[int] = field(default_factory=set)
    blocked: set[int] = field(default_factory=set)
    seen_visibility: set[int] = field(default_factory=set)

    _users: ClassVar[list[User]] = []
    _count: ClassVar[int] = 0
    _current: ClassVar[User | None] = None

    def __post_init__(self) -> None:
        self.chat_rooms.sort(reverse=True)
        self.stories.sort(key=lambda s: s.publish_time)

    @classmethod
    def create(
        cls,
        mobile_number: str,
        password: str,
        first_name: str,
        last_name: str,
        profile: UserProfileDescription | None = None,
    ) -> User:
        """Make a user with the next free id, last seen now."""
        User._count += 1
        return cls(
            id=User._count,
            last_seen=date.now(),
            mobile_number=mobile_number,
            password=password,
            first_name=first_name,
            last_name=last_name,
            profile=profile if profile is not None else UserProfileDescription(),
        )

    def add_contact(self, user_id: int) -> None:
        self.contacts.add(user_id)

    def has_contact(self, user_id: int) -> bool:
        return user_id in self.contacts

    def add_story(self, story: Story) -> None:
        self.stories.append(story)
        self.stories.sort(key=lambda s: s.publish_time)

    def add_chat_room(self, chat_id: int) -> None:
        """Add a chat room; rooms are kept highest id first."""
        self.chat_rooms.append(chat_id)
        self.chat_rooms.sort(reverse=True)

    def remove_chat_room(self, chat_id: int) -> None:
        self.chat_rooms = [room for room in self.chat_rooms if room != chat_id]

    def save(self) -> None:
        """Store a copy of this user, replacing any saved user with the same id."""
        snapshot = copy.deepcopy(self)
        for index, stored in enumerate(User._users):
            if stored.id == self.id:
                User._users[index] = snapshot
                return
        User._users.append(snapshot)

    def delete_account(self) -> None:
        User._users = [user for user in User._users if user.id != self.id]

    def recommend_contacts(self) -> list[User]:
        """Return contacts of contacts that are not direct contacts, by id."""
        distance: dict[int, int] = {self.id: 0}
        queue: list[User] = [self]
        recommended: dict[int, User] = {}
        while queue:
            user = queue.pop(0)
            level = distance[user.id]
            if level > 2:
                break
            for contact_id in sorted(user.contacts):
                if contact_id in distance:
                    continue
                distance[contact_id] = level + 1
                contact = User.by_id(contact_id)
                if contact is None:
                    continue
                queue.append(contact)
                if level + 1 == 2:
                    recommended[contact.id] = contact
        return [recommended[key] for key in sorted(recommended)]

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "mobileNumber": self.mobile_number,
            "password": self.password,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "infoVisibility": sorted(self.info_visibility),
            "seenVisibility": sorted(self.seen_visibility),
            "lastSeenVisibility": sorted(self.last_seen_visibility),
            "blocked": sorted(self.blocked),
            "contacts": sorted(self.contacts),
            "chatRooms": sorted(self.chat_rooms, reverse=True),
            "lastSeen": date.to_json(self.last_seen),
            "stories": [story.to_json() for story in self.stories],
            "userProfileDescription": self.profile.to_json(),
        }

    @classmethod
    def from_json(cls, data: dict) -> User:
        """Decode a user; expired stories are dropped."""
        stories = [Story.from_json(item) for item in data["stories"]]
        return cls(
            id=int(data["id"]),
            last_seen=date.from_json(data["lastSeen"]),
            mobile_number=str(data["mobileNumber"]),
            password=str(data["password"]),
            first_name=str(data["firstName"]),
            last_name=str(data["lastName"]),
            chat_rooms=[int(room) for room in data["chatRooms"]],
            stories=[story for story in stories if not story.is_expired()],
            contacts={int(x) for x in data["contacts"]},
            profile=UserProfileDescription.from_json(data["userProfileDescription"]),
            info_visibility={int(x) for x in data["infoVisibility"]},
            last_seen_visibility={int(x) for x in data["lastSeenVisibility"]},
            blocked={int(x) for x in data["blocked"]},
            seen_visibility={int(x) for x in data["seenVisibility"]},
        )

    @classmethod
    def all_users(cls) -> list[User]:
        return copy.deepcopy(User._users)

    @classmethod
    def by_id(cls, user_id: int) -> User | None:
        for user in User._users:
            if user.id == user_id:
                return copy.deepcopy(user)
        return None

    @classmethod
    def by_mobile(cls, mobile_number: str) -> User | None:
        for user in User._users:
            if user.mobile_number == mobile_number:
                return copy.deepcopy(user)
        return None

    @classmethod
    def read_users(cls, path: str | Path) -> None:
        """Load saved users from ``path``; ids continue after the last one read."""
        payload = _read_json(path)
        if not payload:
            return
        User._users.extend(cls.from_json(item) for item in payload)
        if User._users:
            User._count = User._users[-1].id

    @classmethod
    def write_users(cls, path: str | Path) -> None:
        _write_json(path, [user.to_json() for user in User._users])

    @classmethod
    def read_current_user(cls, path: str | Path) -> None:
        payload = _read_json(path)
        if payload:
            cls.set_current(cls.from_json(payload))

    @classmethod
    def write_current_user(cls, path: str | Path) -> None:
        current = User._current
        _write_json(path, current.to_json() if current is not None else None)

    @classmethod
    def login(cls, mobile_number: str, password: str) -> bool:
        """Sign in when the password matches the stored hash."""
        user = cls.by_mobile(mobile_number)
        if user is None or not _check_password(password, user.password):
            return False
        cls.set_current(user)
        return True

    @classmethod
    def sign_up(
        cls,
        mobile_number: str,
        first_name: str,
        last_name: str,
        password: str,
        profile: UserProfileDescription,
    ) -> bool:
        """Register a user with a hashed password and sign them in."""
        user = cls.create(
            mobile_number, generate_hash(password), first_name, last_name, profile
        )
        user.save()
        cls.set_current(user)
        return True

    @classmethod
    def current(cls) -> User | None:
        return copy.deepcopy(User._current)

    @classmethod
    def set_current(cls, user: User) -> None:
        User._current = copy.deepcopy(user)

    @classmethod
    def logout(cls) -> None:
        User._current = None

    @classmethod
    def reset(cls) -> None:
        """Forget all saved users, the id counter, the current user and saved stories."""
        User._users = []
        User._count = 0
        User._current = None
        Story._registry.clear()

    @staticmethod
    def validate_mobile_number(mobile_number: str) -> bool:
        return _MOBILE_PATTERN.fullmatch(mobile_number) is not None

    @staticmethod
    def validate_password(password: str) -> bool:
        """Require 8+ characters with lower, upper, digit and another symbol."""
        return _STRENGTH_RULE.fullmatch(password) is not None