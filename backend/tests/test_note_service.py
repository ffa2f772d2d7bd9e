"""
NotesApp Backend — Note Service Tests
=======================================

What:  Tests for NoteService (list, get, create, update, delete).
How:   Unit tests run against a mocked session; integration tests run against
       a real SQLite database.

What we test:
    ✅ Not-found translation for get/update/delete
    ✅ Update checks existence before validating the body
    ✅ Empty title/content rejected before touching the store
    ✅ SQLAlchemy failures wrapped in StoreError with the error text
    ✅ Full create → get → list → update → delete cycle on a real database
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from notesapp.exceptions import (
    MissingFieldError,
    NoteNotFoundError,
    StoreError,
    ValidationError,
)
from notesapp.models.note import Note
from notesapp.services.note_service import MAX_NOTE_ID, NoteService, parse_note_id


class TestParseNoteId:

    @pytest.mark.parametrize(
        "raw, expected", [("1", 1), ("42", 42), ("007", 7), (5, 5), (str(MAX_NOTE_ID), MAX_NOTE_ID)]
    )
    def test_accepts_positive_ids(self, raw, expected):
        assert parse_note_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["abc", "", "0", "-1", "+1", " 1", "1.5", "1e3", "\u0661", str(MAX_NOTE_ID + 1),
         "99999999999999999999", 0, -3, True, None, 1.0],
    )
    def test_unmatchable_ids_are_not_found(self, raw):
        with pytest.raises(NoteNotFoundError):
            parse_note_id(raw)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["get_note", "delete_note"])
    async def test_no_query_for_unmatchable_id(self, mock_database, mock_session, operation):
        with pytest.raises(NoteNotFoundError):
            await getattr(NoteService(mock_database), operation)("99999999999999999999")

        mock_session.get.assert_not_awaited()


class TestNoteServiceGet:
    """Tests for get_note retrieval."""

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_database, mock_session, sample_note_data):
        """Existing note should return NoteResponse."""
        mock_session.get.return_value = Note(**sample_note_data)

        result = await NoteService(mock_database).get_note(sample_note_data["id"])

        assert result.id == sample_note_data["id"]
        assert result.title == sample_note_data["title"]
        assert result.content == sample_note_data["content"]
        mock_session.get.assert_awaited_once_with(Note, sample_note_data["id"])

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_database, mock_session):
        """Non-existent note should raise NoteNotFoundError."""
        mock_session.get.return_value = None

        with pytest.raises(NoteNotFoundError) as exc_info:
            await NoteService(mock_database).get_note(99)

        assert exc_info.value.message == "Note not found"
        assert exc_info.value.context["resource_id"] == 99

    @pytest.mark.asyncio
    async def test_get_note_store_failure(self, broken_database):
        error = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(StoreError) as exc_info:
            await NoteService(broken_database(error)).get_note(1)

        assert "connection refused" in exc_info.value.context["error"]


class TestNoteServiceList:

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_database, mock_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = mock_result

        result = await NoteService(mock_database).list_notes()

        assert result == []

    @pytest.mark.asyncio
    async def test_list_notes_store_failure(self, mock_database, mock_session):
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))

        with pytest.raises(StoreError):
            await NoteService(mock_database).list_notes()


class TestNoteServiceCreate:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title, content, field",
        [
            (None, "C", "title"),
            ("", "C", "title"),
            ("T", None, "content"),
            ("T", "", "content"),
        ],
    )
    async def test_create_requires_title_and_content(
        self, mock_database, mock_session, title, content, field
    ):
        with pytest.raises(MissingFieldError) as exc_info:
            await NoteService(mock_database).create_note(title=title, content=content)

        assert exc_info.value.field == field
        mock_session.add.assert_not_called()


class TestNoteServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_missing_note_is_not_found_even_with_empty_body(
        self, mock_database, mock_session
    ):
        """Existence is checked first: an unknown id never yields a 400."""
        mock_session.get.return_value = None

        with pytest.raises(NoteNotFoundError):
            await NoteService(mock_database).update_note(42, title=None, content="")

    @pytest.mark.asyncio
    async def test_update_existing_note_validates_body(
        self, mock_database, mock_session, sample_note_data
    ):
        note = Note(**sample_note_data)
        mock_session.get.return_value = note

        with pytest.raises(MissingFieldError):
            await NoteService(mock_database).update_note(1, title="New", content="")

    @pytest.mark.asyncio
    async def test_update_changes_only_title_and_content(
        self, mock_database, mock_session, sample_note_data
    ):
        note = Note(**sample_note_data)
        mock_session.get.return_value = note

        result = await NoteService(mock_database).update_note(1, title="New", content="Body")

        assert result.message == "Note updated successfully"
        assert note.title == "New"
        assert note.content == "Body"
        assert note.id == sample_note_data["id"]
        assert note.created_at == sample_note_data["created_at"]

    @pytest.mark.asyncio
    async def test_update_unmatchable_id_with_mistyped_body(self, mock_database, mock_session):
        with pytest.raises(NoteNotFoundError):
            await NoteService(mock_database).update_note("abc", title=5, content=["x"])

        mock_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_rejects_overlong_title(self, mock_database, mock_session, sample_note_data):
        mock_session.get.return_value = Note(**sample_note_data)

        with pytest.raises(ValidationError) as exc_info:
            await NoteService(mock_database).update_note(1, title="t" * 256, content="Body")

        assert exc_info.value.field == "title"


class TestNoteServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, mock_database, mock_session):
        mock_session.get.return_value = None

        with pytest.raises(NoteNotFoundError):
            await NoteService(mock_database).delete_note(7)

        mock_session.delete.assert_not_awaited()


class TestNoteServiceIntegration:
    """End-to-end behaviour against a real SQLite database."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, database):
        service = NoteService(database)

        created = await service.create_note(title="T", content="C")
        fetched = await service.get_note(created.id)

        assert created.id > 0
        assert (fetched.id, fetched.title, fetched.content) == (created.id, "T", "C")

    @pytest.mark.asyncio
    async def test_create_assigns_fresh_ids_and_list_keeps_insertion_order(self, database):
        service = NoteService(database)

        first = await service.create_note(title="A", content="same")
        second = await service.create_note(title="A", content="same")
        notes = await service.list_notes()

        assert first.id != second.id
        assert [n.id for n in notes] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_update_persists(self, database):
        service = NoteService(database)
        created = await service.create_note(title="Old", content="Old body")

        await service.update_note(created.id, title="New", content="New body")
        fetched = await service.get_note(created.id)

        assert fetched.title == "New"
        assert fetched.content == "New body"

    @pytest.mark.asyncio
    async def test_delete_twice(self, database):
        service = NoteService(database)
        created = await service.create_note(title="T", content="C")

        result = await service.delete_note(created.id)
        assert result.message == "Note deleted successfully"

        with pytest.raises(NoteNotFoundError):
            await service.delete_note(created.id)
        with pytest.raises(NoteNotFoundError):
            await service.get_note(created.id)
