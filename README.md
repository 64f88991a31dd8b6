# rghychat

The data layer of a small chat application. It covers users and their
profiles, 24-hour stories, one-to-one chat rooms, groups with member roles,
message delivery and seen status, privacy checks, and a prefix trie with
autocompletion. All data is held in memory, and registries can be saved to
and loaded from JSON files at paths you choose.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `rghychat.date`: `now()` returns the local time to the second.
  `to_json` and `from_json` convert a `datetime` to and from
  `{"time": {"year": ..., "second": ...}}`. `format_moment(moment, reference=None)`
  returns one of three labels. A moment on the reference day gives
  "Today, 09:30 AM". A moment less than seven days old gives the weekday
  and time. Anything older gives the full date and time.
- `rghychat.status`: `Status` is a dataclass recording the delivery time,
  who has seen a message and who has deleted it. `mark_seen` sets `seen`
  once `size` distinct readers have seen the message. The module also has
  `is_deleted_for`, `mark_deleted_for`, `to_json` and `from_json`.
- `rghychat.search`: `SearchEngine` is a trie with `add_word`,
  `add_word_with_id`, `search`, `auto_complete(word, limit)` and
  `get_ids(word)`. `auto_complete` visits busier branches first.
  `get_ids` gathers the ids of every word that starts with the prefix.
  `main()` runs a short demonstration.
- `rghychat.profile`: `UserProfileDescription` is a user's public profile:
  image path, about text, name, phone, social links and a visibility flag.
  Ids are assigned automatically. It has `create`, `to_json` and
  `from_json`.
- `rghychat.hashing`: `generate_hash(password, rounds=10)` produces a
  bcrypt `$2b$` hash and clamps rounds to the range 4–31.
  `validate_password(password, hashed)` returns `False` for a malformed
  hash instead of raising.
- `rghychat.waveform`: `sample_amplitudes(path, step=300)` skips a 44-byte
  WAV header, reads 16-bit little-endian samples and returns every
  `step`-th `|sample| / 32768`. `resource_path(file_name, base_dir=None)`
  builds `<base_dir>/../../Resources/<file_name>`.
- `rghychat.user`: `User` and `Story`.
  - Registry: `save`, `delete_account`, `all_users`, `by_id`,
    `by_mobile`, `reset`.
  - Files: `read_users`/`write_users` and
    `read_current_user`/`write_current_user`.
  - Accounts: `sign_up` stores a hashed password, `login` checks it, and
    `current`, `set_current` and `logout` manage the signed-in user.
  - Checks: `validate_mobile_number` and `validate_password`.
  - Contacts: `recommend_contacts` returns contacts of contacts.
  - Stories: a story expires 24 hours after it is published.
    `exclude_contact` and `include_contact` control who it is hidden
    from. `read_stories`, `write_stories` and `stories_by_user` keep a
    separate story registry.
- `rghychat.message`: `MessageModel` and the enums `MessageDataType`,
  `MessageType` and `MessageOptions`. Messages compare by id.
  `from_json` marks a message as `SENT` when it comes from the current
  user. Otherwise it marks the message `RECEIVED` and counts it as seen by
  its sender.
- `rghychat.chatroom`: `ChatRoom`, `Group`, `ChatType` and `Role`.
  - Rooms: `create_chat` registers a room and adds it to each member's
    chat list. Messages are kept by id through `message`, `add_message`,
    `set_messages`, `clear_messages` and `remove_message`.
  - Registry: `get`, `read_all`, `write_all` and `reset`.
  - Groups: `create_group`, `add_member` (the first member becomes
    owner), `remove_member` (promotes a new owner if needed),
    `change_member_role`, `role_of`, `is_member`, `delete_group` and
    `role_to_string`.
- `rghychat.privacy`: `Privacy(user_id)` answers `is_blocked_by`,
  `info_is_hidden_by`, `seen_is_hidden_by` and `last_seen_is_hidden_by`
  from that user's saved lists. An unknown user gives `False` for every
  check.

## Example

```python
from rghychat.search import SearchEngine

engine = SearchEngine()
for word in ["car", "cat", "care", "cut"]:
    engine.add_word(word)

engine.search("car")             # True
engine.search("ca")              # False
engine.auto_complete("ca", 5)    # ['car', 'care', 'cat']
```

```python
from datetime import datetime
from rghychat import date

reference = datetime(2025, 5, 10, 18, 0)
date.format_moment(datetime(2025, 5, 10, 9, 30), reference)  # 'Today, 09:30 AM'
```

To print the demonstration completions, run:

```
rghychat-search-demo
```

## What it does not do

The package has no user interface and no network layer. Nothing sends or
receives messages between machines; rooms, users and stories live in
process memory until written to JSON. No data files are located
automatically: every `read_*` and `write_*` call takes an explicit path.