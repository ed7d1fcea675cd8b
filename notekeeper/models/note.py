"""
Note Model.

Database model for notes, including the reserved clipboard note.
"""

from sqlalchemy import Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.models.base import Base, TimestampMixin

CLIPBOARD_TITLE = "Clipboard"

# Largest value an SQLite INTEGER primary key can hold.
MAX_NOTE_ID = 2**63 - 1


class Note(TimestampMixin, Base):
    """
    Note database model.

    pinned and hidden are stored as 0/1 integers. The partial unique
    index allows at most one row titled "Clipboard".
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index(
            "uq_notes_single_clipboard",
            "title",
            unique=True,
            sqlite_where=text(f"title = '{CLIPBOARD_TITLE}'"),
            postgresql_where=text(f"title = '{CLIPBOARD_TITLE}'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        index=True,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    pinned: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default=text("0"),
        nullable=False,
    )
    hidden: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default=text("0"),
        nullable=False,
    )

    @property
    def is_clipboard(self) -> bool:
        return self.title == CLIPBOARD_TITLE

    @property
    def is_hidden(self) -> bool:
        return self.hidden == 1

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, hidden={self.hidden})>"
