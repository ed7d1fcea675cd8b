"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.utils import utc_now
from notekeeper.models.note import CLIPBOARD_TITLE, Note
from notekeeper.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_visible(self) -> list[Note]:
        """
        Get all notes that are not hidden.

        Returns:
            Visible notes, pinned first, most recently updated first
        """
        return await self._list_by_hidden(0)

    async def get_hidden(self) -> list[Note]:
        """
        Get all hidden notes.

        Returns:
            Hidden notes, pinned first, most recently updated first
        """
        return await self._list_by_hidden(1)

    async def get_clipboard(self) -> Note | None:
        """Get the reserved clipboard note if it exists."""
        result = await self.session.execute(
            select(Note).where(Note.title == CLIPBOARD_TITLE).order_by(Note.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def update_note(self, id: int, **values: Any) -> int:
        """
        Write values to a note and refresh updated_at.

        Returns:
            Number of rows matched (0 if the note was deleted meanwhile)
        """
        return await self.update_fields(id, updated_at=utc_now(), **values)

    async def _list_by_hidden(self, hidden: int) -> list[Note]:
        result = await self.session.execute(
            select(Note)
            .where(Note.hidden == hidden)
            .order_by(Note.pinned.desc(), Note.updated_at.desc(), Note.id.desc())
        )
        return list(result.scalars().all())
