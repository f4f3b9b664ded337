"""Tests for the storage accessors."""

import json

import pytest

from src.models.user import User
from src.schemas.user import UserCreate
from src.services.storage import (
    InMemoryUserStorage,
    JsonFileUserStorage,
    parse_document,
    serialize_document,
)
from src.services.user_service import UserService

HASH = "$2b$04$abcdefghijklmnopqrstuu5lQ1uJ2v1kYv0t3bWnQpB1fJkWlq9K6"

DOCUMENT = """[
  {
    "id": "1700000000000",
    "name": "Zoë",
    "email": "z@x.com",
    "password": "%s",
    "profilePictureUrl": "",
    "role": "admin"
  },
  {
    "id": "1700000000001",
    "name": "Bob",
    "email": "b@x.com",
    "password": "%s",
    "profilePictureUrl": "https://example.com/b.png"
  }
]""" % (HASH, HASH)


def make_user(user_id: str = "1", email: str = "a@x.com") -> User:
    return User(id=user_id, name="Ann", email=email, password=HASH)


class TestDocumentFormat:
    """Tests for parsing and serializing the storage document."""

    def test_serialize_uses_two_space_indent_and_field_order(self):
        text = serialize_document([make_user()])
        assert text.startswith('[\n  {\n    "id": "1",\n    "name": "Ann",')
        assert list(json.loads(text)[0]) == ["id", "name", "email", "password", "profilePictureUrl"]

    def test_serialize_empty(self):
        assert serialize_document([]) == "[]"

    def test_parse_rejects_non_array(self):
        with pytest.raises(ValueError):
            parse_document('{"id": "1"}')

    def test_parse_skips_invalid_records(self):
        users = parse_document(
            '[{"id": "1"}, {"id": "2", "name": "B", "email": "b@x.com", "password": "h"}]'
        )
        assert [user.id for user in users] == ["2"]

    def test_parse_reads_null_picture_as_empty(self):
        users = parse_document(
            '[{"id": "1", "name": "A", "email": "a@x.com", "password": "h",'
            ' "profilePictureUrl": null}]'
        )
        assert users[0].profile_picture_url == ""

    def test_round_trip_is_byte_identical(self):
        """Writing back an unmodified document reproduces it exactly."""
        assert serialize_document(parse_document(DOCUMENT)) == DOCUMENT

    def test_extra_keys_are_preserved(self):
        users = parse_document(DOCUMENT)
        assert users[0].to_document()["role"] == "admin"

    def test_numeric_ids_are_read_as_strings(self):
        users = parse_document(
            '[{"id": 5, "name": "A", "email": "a@x.com", "password": "h"}]'
        )
        assert users[0].id == "5"
        assert users[0].profile_picture_url == ""


class TestJsonFileUserStorage:
    """Tests for the file-backed storage accessor."""

    @pytest.mark.asyncio
    async def test_load_missing_file(self, tmp_path):
        storage = JsonFileUserStorage(tmp_path / "users.json")
        assert await storage.load() == []

    @pytest.mark.asyncio
    async def test_load_malformed_file(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text("{not json", encoding="utf-8")
        assert await JsonFileUserStorage(path).load() == []

    @pytest.mark.asyncio
    async def test_load_non_array(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text('{"users": []}', encoding="utf-8")
        assert await JsonFileUserStorage(path).load() == []

    @pytest.mark.asyncio
    async def test_load_invalid_utf8(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        assert await JsonFileUserStorage(path).load() == []

    @pytest.mark.asyncio
    async def test_save_then_load(self, tmp_path):
        storage = JsonFileUserStorage(tmp_path / "users.json")
        users = [make_user("1", "a@x.com"), make_user("2", "b@x.com")]

        assert await storage.save(users) is True

        loaded = await storage.load()
        assert [user.id for user in loaded] == ["1", "2"]
        assert [user.to_document() for user in loaded] == [
            user.to_document() for user in users
        ]

    @pytest.mark.asyncio
    async def test_save_load_is_idempotent(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(DOCUMENT, encoding="utf-8")
        storage = JsonFileUserStorage(path)

        assert await storage.save(await storage.load()) is True

        assert path.read_text(encoding="utf-8") == DOCUMENT

    @pytest.mark.asyncio
    async def test_save_writes_utf8(self, tmp_path):
        path = tmp_path / "users.json"
        storage = JsonFileUserStorage(path)
        await storage.save(parse_document(DOCUMENT))
        assert "Zoë".encode() in path.read_bytes()

    @pytest.mark.asyncio
    async def test_save_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "users.json"
        assert await JsonFileUserStorage(path).save([make_user()]) is True
        assert path.exists()

    @pytest.mark.asyncio
    async def test_save_failure_returns_false(self, tmp_path):
        target = tmp_path / "users.json"
        target.mkdir()
        storage = JsonFileUserStorage(target)
        assert await storage.save([make_user()]) is False
        assert target.is_dir()
        assert not (tmp_path / ".users.json.tmp").exists()

    @pytest.mark.asyncio
    async def test_bad_record_does_not_erase_collection(self, tmp_path):
        """A record with a null picture survives loading and the next write."""
        path = tmp_path / "users.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "1", "name": "A", "email": "a@x.com", "password": HASH},
                    {
                        "id": "2",
                        "name": "B",
                        "email": "b@x.com",
                        "password": HASH,
                        "profilePictureUrl": None,
                    },
                    {"id": "3", "name": "broken"},
                ]
            ),
            encoding="utf-8",
        )
        storage = JsonFileUserStorage(path)
        service = UserService(storage)

        assert [user.id for user in await storage.load()] == ["1", "2"]

        await service.create_user(UserCreate(name="New", email="new@x.com", password="pw"))

        emails = [user.email for user in await storage.load()]
        assert emails == ["a@x.com", "b@x.com", "new@x.com"]


class TestInMemoryUserStorage:
    """Tests for the in-memory storage accessor."""

    @pytest.mark.asyncio
    async def test_empty_by_default(self):
        assert await InMemoryUserStorage().load() == []

    @pytest.mark.asyncio
    async def test_loaded_users_are_copies(self):
        storage = InMemoryUserStorage()
        await storage.save([make_user()])

        users = await storage.load()
        users[0].name = "Changed"

        assert (await storage.load())[0].name == "Ann"

    @pytest.mark.asyncio
    async def test_malformed_document(self):
        assert await InMemoryUserStorage(document="nope").load() == []

    @pytest.mark.asyncio
    async def test_fail_on_save(self):
        storage = InMemoryUserStorage(fail_on_save=True)
        assert await storage.save([make_user()]) is False
        assert storage.document is None
        assert storage.save_count == 0
