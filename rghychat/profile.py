"""Public profile of a user."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class UserProfileDescription:
    """Picture, about text, name, phone and links shown to other users."""

    id: int | None = None
    image_path: str = "defaultPhoto"
    about: str = "I use Rghyapp"
    name: str | None = None
    phone: str = "Not avaliable"
    social_media_links: list[str] = field(default_factory=list)
    visibility_option: bool = False

    _ids: ClassVar[itertools.count] = itertools.count(1)

    def __post_init__(self) -> None:
        if self.id is None:
            self.id = next(type(self)._ids)
        if self.name is None:
            self.name = f"User{self.id}"

    @classmethod
    def create(
        cls,
        image_path: str,
        about: str,
        social_media_links: list[str],
        visibility_option: bool,
    ) -> UserProfileDescription:
        """Make a profile with a fresh id and an empty name and phone."""
        return cls(
            image_path=image_path,
            about=about,
            name="",
            phone="",
            social_media_links=list(social_media_links),
            visibility_option=visibility_option,
        )

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "imagePath": self.image_path,
            "About": self.about,
            "Name": self.name,
            "Phone": self.phone,
            "SocialMediaLinks": list(self.social_media_links),
            "VisibilityOption": self.visibility_option,
        }

    @classmethod
    def from_json(cls, data: dict) -> UserProfileDescription:
        return cls(
            id=int(data["id"]),
            image_path=str(data["imagePath"]),
            about=str(data["About"]),
            name=str(data["Name"]),
            phone=str(data["Phone"]),
            social_media_links=[str(link) for link in data["SocialMediaLinks"]],
            visibility_option=bool(data["VisibilityOption"]),
        )