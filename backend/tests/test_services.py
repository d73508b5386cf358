"""
Noteful Backend: Service Unit Tests
=====================================

What:  Tests for the CRUD services' error translation and delete behavior.
How:   Uses the mock AsyncSession from conftest; no database involved.

What we test:
    ✅ Malformed ids rejected before any database call
    ✅ Unique-constraint failures become ConflictError (400)
    ✅ Other persistence failures become InternalError (500)
    ✅ Deletes of missing rows are no-ops
    ✅ Tag delete pulls the tag off notes before deleting it
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from noteful.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from noteful.models import Folder
from noteful.schemas.folder import FolderIn
from noteful.schemas.note import NoteIn
from noteful.schemas.tag import TagIn
from noteful.services import FolderService, NoteService, TagService
from noteful.services.crud_service import is_duplicate_key


def _unique_violation() -> IntegrityError:
    return IntegrityError(
        "INSERT INTO folders ...", {}, Exception("UNIQUE constraint failed: folders.name")
    )


class TestIsDuplicateKey:

    def test_sqlite_message(self):
        assert is_duplicate_key(_unique_violation()) is True

    def test_postgres_sqlstate(self):
        orig = Exception("boom")
        orig.sqlstate = "23505"
        assert is_duplicate_key(IntegrityError("INSERT", {}, orig)) is True

    def test_other_constraint(self):
        exc = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
        assert is_duplicate_key(exc) is False


class TestFolderServiceGet:

    def setup_method(self):
        self.folder_id = uuid.uuid4()

    @pytest.mark.asyncio
    async def test_malformed_id_skips_database(self, mock_db_session):
        with pytest.raises(ValidationError, match="The `id` is not valid"):
            await FolderService(mock_db_session).get("NOT-A-VALID-ID")
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session):
        folder = Folder(id=self.folder_id, name="Work")
        mock_db_session.get.return_value = folder

        result = await FolderService(mock_db_session).get(str(self.folder_id))

        assert result is folder
        mock_db_session.get.assert_awaited_once_with(Folder, self.folder_id)

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await FolderService(mock_db_session).get(str(self.folder_id))
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_database_down(self, mock_db_session):
        mock_db_session.get.side_effect = OperationalError("SELECT", {}, Exception("gone"))
        with pytest.raises(InternalError) as exc_info:
            await FolderService(mock_db_session).get(str(self.folder_id))
        assert exc_info.value.status_code == 500
        assert exc_info.value.cause == "OperationalError"


class TestFolderServiceWrite:

    @pytest.mark.asyncio
    async def test_create_missing_name(self, mock_db_session):
        with pytest.raises(ValidationError, match="Missing `name` in request body"):
            await FolderService(mock_db_session).create(FolderIn())
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_duplicate_name(self, mock_db_session):
        mock_db_session.flush.side_effect = _unique_violation()

        with pytest.raises(ConflictError) as exc_info:
            await FolderService(mock_db_session).create(FolderIn(name="Work"))

        assert exc_info.value.message == "The folder name already exists"
        assert exc_info.value.status_code == 400
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_commits_before_returning(self, mock_db_session):
        await FolderService(mock_db_session).create(FolderIn(name="Work"))

        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_is_internal_error(self, mock_db_session):
        mock_db_session.commit.side_effect = OperationalError(
            "COMMIT", {}, Exception("disk I/O error")
        )

        with pytest.raises(InternalError):
            await FolderService(mock_db_session).create(FolderIn(name="Work"))

        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_unique_violation_is_conflict(self, mock_db_session):
        mock_db_session.commit.side_effect = _unique_violation()

        with pytest.raises(ConflictError):
            await FolderService(mock_db_session).create(FolderIn(name="Work"))

    @pytest.mark.asyncio
    async def test_create_other_integrity_error(self, mock_db_session):
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: folders.created_at")
        )
        with pytest.raises(InternalError):
            await FolderService(mock_db_session).create(FolderIn(name="Work"))

    @pytest.mark.asyncio
    async def test_update_duplicate_name(self, mock_db_session):
        folder_id = uuid.uuid4()
        mock_db_session.get.return_value = Folder(id=folder_id, name="Drafts")
        mock_db_session.flush.side_effect = _unique_violation()

        with pytest.raises(ConflictError):
            await FolderService(mock_db_session).update(str(folder_id), FolderIn(name="Work"))

    @pytest.mark.asyncio
    async def test_update_validates_before_lookup(self, mock_db_session):
        with pytest.raises(ValidationError):
            await FolderService(mock_db_session).update(str(uuid.uuid4()), FolderIn(name=""))
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, mock_db_session):
        await FolderService(mock_db_session).delete(str(uuid.uuid4()))
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, mock_db_session):
        with pytest.raises(ValidationError):
            await FolderService(mock_db_session).delete("DOESNOTEXIST")


class TestTagServiceDelete:

    @pytest.mark.asyncio
    async def test_removes_links_then_tag(self, mock_db_session):
        result = MagicMock(rowcount=1)
        mock_db_session.execute = AsyncMock(return_value=result)

        await TagService(mock_db_session).delete(str(uuid.uuid4()))

        statements = [str(call.args[0]) for call in mock_db_session.execute.await_args_list]
        assert len(statements) == 2
        assert statements[0].startswith("DELETE FROM note_tags")
        assert statements[1].startswith("DELETE FROM tags")

    @pytest.mark.asyncio
    async def test_commits_after_both_statements(self, mock_db_session):
        mock_db_session.execute = AsyncMock(return_value=MagicMock(rowcount=1))

        await TagService(mock_db_session).delete(str(uuid.uuid4()))

        assert mock_db_session.execute.await_count == 2
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cleanup_failure_is_internal_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("DELETE", {}, Exception("database is locked"))
        )

        with pytest.raises(InternalError):
            await TagService(mock_db_session).delete(str(uuid.uuid4()))

        # The tag row itself is never touched
        assert mock_db_session.execute.await_count == 1
        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_duplicate_name(self, mock_db_session):
        mock_db_session.flush.side_effect = _unique_violation()
        with pytest.raises(ConflictError, match="The tag name already exists"):
            await TagService(mock_db_session).create(TagIn(name="breed"))


class TestNoteServiceValidate:

    @pytest.mark.asyncio
    async def test_missing_title(self, mock_db_session):
        with pytest.raises(ValidationError, match="Missing `title` in request body"):
            await NoteService(mock_db_session).create(NoteIn(content="no title"))

    @pytest.mark.asyncio
    async def test_malformed_folder_id(self, mock_db_session):
        with pytest.raises(ValidationError, match="The `folderId` is not valid"):
            await NoteService(mock_db_session).create(NoteIn(title="t", folder_id="nope"))
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_tag_id(self, mock_db_session):
        with pytest.raises(ValidationError, match="The `tags` array contains an invalid `id`"):
            await NoteService(mock_db_session).create(NoteIn(title="t", tags=["nope"]))
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_tag_id(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute = AsyncMock(return_value=result)

        with pytest.raises(ValidationError) as exc_info:
            await NoteService(mock_db_session).create(
                NoteIn(title="t", tags=[str(uuid.uuid4())])
            )
        assert exc_info.value.context["field"] == "tags"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_with_malformed_folder_filter(self, mock_db_session):
        with pytest.raises(ValidationError, match="The `folderId` is not valid"):
            await NoteService(mock_db_session).list_all(folder_id="bad")
