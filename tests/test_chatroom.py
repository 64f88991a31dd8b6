from datetime import datetime

import pytest

from rghychat.chatroom import ChatRoom, ChatType, Group, Role
from rghychat.message import MessageModel
from rghychat.status import Status
from rghychat.user import User


@pytest.fixture(autouse=True)
def _clean_registries():
    User.reset()
    ChatRoom.reset()
    yield
    User.reset()
    ChatRoom.reset()


def _user(tag):
    password = "password"
    user = User.create(f"m{tag}", password=password, first_name=f"N{tag}", last_name="X")
    user.save()
    return user


def test_default_room_name_and_ids():
    first = ChatRoom()
    second = ChatRoom()
    assert first.name == "ChatRoomModel1"
    assert second.id == first.id + 1
    assert first.chat_type is ChatType.INDIVIDUAL
    assert ChatRoom.get(first.id) is None


def test_create_chat_links_users():
    a, b = _user(1), _user(2)
    User.set_current(a)
    chat = ChatRoom.create_chat([a.id, b.id])
    assert chat.users == [a.id, b.id]
    assert ChatRoom.get(chat.id) is chat
    assert chat.id in User.by_id(b.id).chat_rooms
    assert chat.id in User.current().chat_rooms


def test_create_chat_with_unknown_user_raises():
    with pytest.raises(KeyError):
        ChatRoom.create_chat([99])


def test_messages_behave_like_ordered_set():
    room = ChatRoom()
    room.add_message(MessageModel(3, content="c"))
    room.add_message(MessageModel(1, content="a"))
    room.add_message(MessageModel(3, content="dup"))
    assert [m.message_id for m in room.messages] == [1, 3]
    assert room.message(3).content == "c"
    assert ChatRoom.get(room.id) is room
    with pytest.raises(KeyError):
        room.message(2)


def test_remove_message_uses_lower_bound():
    room = ChatRoom()
    room.set_messages([MessageModel(1), MessageModel(3)])
    room.remove_message(2)
    assert [m.message_id for m in room.messages] == [1]
    with pytest.raises(KeyError):
        room.remove_message(5)


def test_clear_messages():
    room = ChatRoom()
    room.set_messages([MessageModel(1), MessageModel(2)])
    room.clear_messages()
    assert room.messages == []


def test_individual_round_trip():
    me = _user(1)
    User.set_current(me)
    room = ChatRoom("pair", [me.id, 2], [MessageModel(1, user_id=me.id)])
    data = room.to_json()
    assert data["type"] is False
    assert data["chatType"] == 0
    ChatRoom.reset()
    decoded = ChatRoom.from_json(data)
    assert not isinstance(decoded, Group)
    assert decoded.to_json() == data
    assert ChatRoom.get(room.id) is decoded


def test_group_round_trip_dispatches_on_type():
    admin = _user(1)
    group = Group.create_group("team", admin.id, "pic.png", "about us", False)
    data = group.to_json()
    ChatRoom.reset()
    decoded = ChatRoom.from_json(data)
    assert isinstance(decoded, Group)
    assert decoded.to_json() == data
    assert decoded.role_of(admin.id) is Role.OWNER


def test_write_and_read_all(tmp_path):
    me = _user(1)
    User.set_current(me)
    ChatRoom("one", [me.id])
    ChatRoom("two", [me.id]).save()
    ChatRoom.create_chat([me.id])
    path = tmp_path / "rooms.json"
    ChatRoom.write_all(path)
    ChatRoom.reset()
    ChatRoom.read_all(path)
    assert ChatRoom.get(2).name == "two"
    assert ChatRoom.get(1) is None
    assert ChatRoom().id == 3


def test_read_all_empty_file(tmp_path):
    path = tmp_path / "rooms.json"
    path.write_text("")
    ChatRoom.read_all(path)
    assert ChatRoom.get(1) is None


def test_room_with_latest_message_sorts_first():
    older = ChatRoom()
    newer = ChatRoom()
    older.add_message(MessageModel(1, status=Status(delivery_time=datetime(2024, 1, 1))))
    newer.add_message(MessageModel(1, status=Status(delivery_time=datetime(2024, 2, 1))))
    assert newer < older
    assert not older < newer
    assert sorted([older, newer])[0] is newer


def test_ordering_without_messages_raises():
    with pytest.raises(ValueError):
        ChatRoom() < ChatRoom()


def test_create_group_makes_admin_owner_and_current():
    admin = _user(1)
    other = _user(2)
    User.set_current(other)
    group = Group.create_group("team", admin.id, "pic.png", "desc", True)
    assert group.role_of(admin.id) is Role.OWNER
    assert group.users == [admin.id]
    assert User.current().id == admin.id
    assert group.id in User.current().chat_rooms
    assert ChatRoom.get(group.id) is group


def test_add_member_and_roles():
    a, b, c = _user(1), _user(2), _user(3)
    group = Group.create_group("team", a.id, "", "", True)
    group.add_member(b.id)
    assert group.role_of(b.id) is Role.MEMBER
    assert group.is_member(b.id)
    assert not group.is_member(c.id)
    group.change_member_role(User.by_id(b.id), Role.ADMIN)
    assert group.role_of(b.id) is Role.ADMIN
    group.change_member_role(c.id, Role.MEMBER)
    assert group.is_member(c.id)


def test_removing_owner_promotes_admin():
    a, b, c = _user(1), _user(2), _user(3)
    group = Group.create_group("team", a.id, "", "", True)
    group.add_member(b.id)
    group.add_member(c.id)
    group.change_member_role(c.id, Role.ADMIN)
    group.remove_member(a.id)
    assert group.users == [b.id, c.id]
    assert group.role_of(c.id) is Role.OWNER
    assert group.role_of(b.id) is Role.MEMBER
    assert not group.is_member(a.id)
    assert group.id not in User.by_id(a.id).chat_rooms
    assert User.current().chat_rooms == []


def test_removing_owner_without_admin_promotes_first_member():
    a, b, c = _user(1), _user(2), _user(3)
    group = Group.create_group("team", a.id, "", "", True)
    group.add_member(b.id)
    group.add_member(c.id)
    group.remove_member(a.id)
    assert group.role_of(b.id) is Role.OWNER
    assert group.role_of(c.id) is Role.MEMBER


def test_remove_non_member_raises():
    a, b = _user(1), _user(2)
    group = Group.create_group("team", a.id, "", "", True)
    with pytest.raises(ValueError):
        group.remove_member(b.id)


def test_delete_group():
    a = _user(1)
    group = Group.create_group("team", a.id, "", "", True)
    group.delete_group()
    assert ChatRoom.get(group.id) is None


def test_role_to_string():
    assert Group.role_to_string(Role.OWNER) == "Owner"
    assert Group.role_to_string(Role.ADMIN) == "Admin"
    assert Group.role_to_string(Role.MEMBER) == "Member"
    assert Group.role_to_string(Role.NOT_MEMBER) == "Not Member"
    assert Group.role_to_string(7) == "Unknown"


def test_group_json_skips_unknown_roles():
    a = _user(1)
    group = Group.create_group("team", a.id, "", "", True)
    data = group.to_json()
    data["Member_Roles"].append({"id": 50, "Role": 9})
    decoded = Group.from_json(data)
    assert 50 not in decoded.members_roles
    assert decoded.role_of(a.id) is Role.OWNER