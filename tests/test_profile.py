import pytest

from rghychat.profile import UserProfileDescription


def test_defaults():
    profile = UserProfileDescription()
    assert profile.image_path == "defaultPhoto"
    assert profile.about == "I use Rghyapp"
    assert profile.phone == "Not avaliable"
    assert profile.name == "User" + str(profile.id)
    assert profile.visibility_option is False


def test_ids_increase():
    first = UserProfileDescription()
    second = UserProfileDescription()
    assert second.id == first.id + 1


def test_create_leaves_name_and_phone_empty():
    profile = UserProfileDescription.create("me.png", "hello", ["https://example.com/me"], True)
    assert profile.name == ""
    assert profile.phone == ""
    assert profile.image_path == "me.png"
    assert profile.social_media_links == ["https://example.com/me"]
    assert profile.visibility_option is True


def test_create_takes_fresh_id():
    before = UserProfileDescription()
    created = UserProfileDescription.create("x.png", "about", [], False)
    assert created.id > before.id


def test_to_json_keys():
    profile = UserProfileDescription(id=5, name="Sam", phone="n/a")
    assert set(profile.to_json()) == {
        "id",
        "imagePath",
        "About",
        "Name",
        "Phone",
        "SocialMediaLinks",
        "VisibilityOption",
    }


def test_round_trip():
    profile = UserProfileDescription(
        id=42,
        image_path="pic.png",
        about="text",
        name="Sam",
        phone="n/a",
        social_media_links=["https://example.com/sam"],
        visibility_option=True,
    )
    assert UserProfileDescription.from_json(profile.to_json()) == profile


def test_from_json_missing_key():
    with pytest.raises(KeyError):
        UserProfileDescription.from_json({"id": 1})