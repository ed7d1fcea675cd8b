"""
Note Service.

Business logic layer for notes. Decides whether each request may
touch a note given its hidden/pinned state, the PIN credential sent
with the request, and the rules protecting the clipboard note.
Persistence is delegated to NoteRepository.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.config import get_app_config
from notekeeper.core.exceptions import (
    AuthorizationError,
    ClipboardProtectedError,
    NotFoundError,
    NotHiddenError,
    ReservedTitleError,
    StorageError,
    UnhideRequiresExplicitOperationError,
    ValidationError,
)
from notekeeper.core.security import verify_pin
from notekeeper.models.note import CLIPBOARD_TITLE, MAX_NOTE_ID, Note
from notekeeper.repositories.note import NoteRepository
from notekeeper.schemas.note import BatchDeleteResult, FlagChange, NoteCreate, NoteUpdate
from notekeeper.services.base import BaseService


def _is_positive_int(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 < value <= MAX_NOTE_ID
    )


class NoteService(BaseService):
    """
    Service for note business logic.

    Every check against the PIN is made at call time; nothing about a
    caller's credential is remembered between calls.
    """

    def __init__(
        self,
        session: AsyncSession,
        update_may_unhide: bool | None = None,
    ) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        if update_may_unhide is None:
            update_may_unhide = get_app_config().features.notes_update_may_unhide
        self.update_may_unhide = update_may_unhide

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def list_visible(self) -> list[Note]:
        """List all notes that are not hidden."""
        return await self.repo.get_visible()

    async def list_hidden(self, credential: str | None) -> list[Note]:
        """
        List hidden notes.

        Without a valid PIN this returns an empty list instead of an
        error, so callers cannot learn whether hidden notes exist.
        """
        if not verify_pin(credential):
            self._log_debug("Hidden notes requested without valid PIN")
            return []
        return await self.repo.get_hidden()

    async def get_note(self, note_id: int, credential: str | None = None) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If the note does not exist, or is hidden and
                the PIN is missing or wrong
        """
        note = await self.repo.get_by_id(note_id)
        if note.is_hidden and not verify_pin(credential):
            raise NotFoundError("Note not found")
        return note

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note.

        Args:
            data: Note creation data

        Returns:
            Created note with its assigned id and timestamps

        Raises:
            ValidationError: If the title is empty
            ReservedTitleError: If the title is "Clipboard"
        """
        self._validate_required({"title": data.title}, ["title"])
        if data.title == CLIPBOARD_TITLE:
            raise ReservedTitleError(
                f'Cannot create a note with the reserved title "{CLIPBOARD_TITLE}".'
            )

        self._log_operation("Creating note", title=data.title, hidden=bool(data.hidden))

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                title=data.title,
                content=data.content,
                pinned=1 if data.pinned else 0,
                hidden=1 if data.hidden else 0,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def update_note(
        self,
        note_id: int,
        data: NoteUpdate,
        credential: str | None = None,
    ) -> Note:
        """
        Replace a note's title and content, and optionally its flags.

        Args:
            note_id: Note ID to update
            data: New title/content; pinned/hidden only when given
            credential: PIN sent with the request

        Returns:
            The note as stored after the write

        Raises:
            ValidationError: If the title is empty
            NotFoundError: If the note does not exist or vanished before the write
            AuthorizationError: If the note is hidden and the PIN is wrong
            ClipboardProtectedError: If the clipboard note would be renamed or unpinned
            ReservedTitleError: If a regular note would be renamed to "Clipboard"
            UnhideRequiresExplicitOperationError: If revealing through update is disabled
        """
        self._validate_required({"title": data.title}, ["title"])

        note = await self.repo.get_by_id(note_id)

        if note.is_hidden:
            self._require_pin(credential, "Unauthorized. Valid PIN required to modify a hidden note.")

        if note.is_clipboard:
            if data.title != CLIPBOARD_TITLE or data.pinned_change is FlagChange.OFF:
                raise ClipboardProtectedError(
                    "Cannot change title or unpin the special clipboard note."
                )
            values: dict[str, Any] = {"content": data.content}
        else:
            if data.title == CLIPBOARD_TITLE:
                raise ReservedTitleError(
                    f'Cannot change note title to the reserved title "{CLIPBOARD_TITLE}".'
                )
            if (
                note.is_hidden
                and data.hidden_change is FlagChange.OFF
                and not self.update_may_unhide
            ):
                raise UnhideRequiresExplicitOperationError()

            values = {"title": data.title, "content": data.content}
            for field, change in (
                ("pinned", data.pinned_change),
                ("hidden", data.hidden_change),
            ):
                if change is not FlagChange.UNSPECIFIED:
                    values[field] = change.as_int

        self._log_operation("Updating note", note_id=note_id, fields=sorted(values))

        matched = await self._execute_db_operation(
            "update_note",
            self.repo.update_note(note_id, **values),
        )
        if matched == 0:
            raise NotFoundError("Note not found")

        return await self.repo.get_by_id(note_id)

    async def unhide_note(self, note_id: int, credential: str | None) -> Note:
        """
        Make a hidden note visible.

        Raises:
            AuthorizationError: If the PIN is missing or wrong
            NotFoundError: If the note does not exist
            NotHiddenError: If the note is already visible
        """
        self._require_pin(credential, "Unauthorized. Valid PIN required to unhide a note.")

        note = await self.repo.get_by_id(note_id)
        if not note.is_hidden:
            raise NotHiddenError("Note is not hidden")

        self._log_operation("Unhiding note", note_id=note_id)

        matched = await self._execute_db_operation(
            "unhide_note",
            self.repo.update_note(note_id, hidden=0),
        )
        if matched == 0:
            raise NotFoundError("Note not found")

        return await self.repo.get_by_id(note_id)

    async def delete_note(self, note_id: int, credential: str | None = None) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: If the note does not exist
            ClipboardProtectedError: If the note is the clipboard note
            AuthorizationError: If the note is hidden and the PIN is wrong
        """
        note = await self.repo.get_by_id(note_id)

        if note.is_clipboard:
            raise ClipboardProtectedError("Cannot delete the special clipboard note.")
        if note.is_hidden:
            self._require_pin(credential, "Unauthorized. Valid PIN required to delete a hidden note.")

        self._log_operation("Deleting note", note_id=note_id)

        deleted = await self._execute_db_operation(
            "delete_note",
            self.repo.delete_by_id(note_id),
        )
        if deleted == 0:
            raise NotFoundError("Note not found")

    async def delete_notes(
        self,
        ids: list[Any],
        credential: str | None = None,
    ) -> BatchDeleteResult:
        """
        Delete several notes as one unit.

        IDs that do not exist are ignored. If any matched note is hidden
        without a valid PIN, or is the clipboard note, nothing is deleted.

        Raises:
            ValidationError: If ids is empty or has non-positive-integer entries
            NotFoundError: If none of the ids exist
            AuthorizationError: If a matched note is hidden and the PIN is wrong
            ClipboardProtectedError: If the clipboard note is among the ids
            StorageError: If the delete failed and was rolled back
        """
        invalid = [value for value in ids if not _is_positive_int(value)]
        if not ids or invalid:
            raise ValidationError(
                "An array of positive integer note IDs is required.",
                details={"invalid_ids": invalid},
            )

        notes = await self.repo.get_many(sorted(set(ids)))
        if not notes:
            raise NotFoundError("No valid notes found")

        if any(note.is_hidden for note in notes):
            self._require_pin(credential, "Unauthorized. Valid PIN required to delete a hidden note.")

        clipboard = next((note for note in notes if note.is_clipboard), None)
        if clipboard is not None:
            raise ClipboardProtectedError(
                f"Cannot delete the special clipboard note (ID: {clipboard.id})."
            )

        note_ids = [note.id for note in notes]
        self._log_operation("Deleting notes", note_ids=note_ids)

        deleted_ids = await self._execute_atomic(
            "delete_notes",
            self.repo.delete_many(note_ids),
        )
        if len(deleted_ids) != len(note_ids):
            self._logger.warning(
                "Batch delete removed fewer notes than matched",
                extra={"matched": len(note_ids), "deleted": len(deleted_ids)},
            )

        return BatchDeleteResult(deleted_count=len(deleted_ids), deleted_ids=deleted_ids)

    # -------------------------------------------------------------------------
    # Bootstrap
    # -------------------------------------------------------------------------

    async def ensure_clipboard_note(self) -> Note:
        """
        Create the clipboard note if it does not exist yet.

        Safe to call repeatedly. If another writer creates the note
        first, the unique index rejects our insert and the existing
        note is returned.
        """
        existing = await self.repo.get_clipboard()
        if existing is not None:
            return existing

        self._log_operation("Creating special clipboard note", title=CLIPBOARD_TITLE)
        try:
            return await self.repo.create(
                title=CLIPBOARD_TITLE,
                content="",
                pinned=1,
                hidden=0,
            )
        except IntegrityError:
            await self.session.rollback()
            existing = await self.repo.get_clipboard()
            if existing is None:
                raise StorageError("Could not create the clipboard note")
            return existing

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_pin(self, credential: str | None, message: str) -> None:
        if not verify_pin(credential):
            self._logger.warning(
                "Rejected request without valid PIN",
                extra={"service": self.__class__.__name__},
            )
            raise AuthorizationError(message)
