"""Defines classes for representing notes and the content users supply for them.

The most important class is :class:`Note`.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class NoteFields:
    """The user-editable content of a note, as passed to :meth:`notekeeper.store.NoteStore.create` or
    :meth:`notekeeper.store.NoteStore.update`.
    """

    title: str
    """The text of the note. Must not be empty once a trailing newline is removed."""

    body: Optional[str] = None
    """Optional longer text."""

    label: Optional[str] = None
    """Optional short category, such as ``work`` or ``shopping``."""

    def cleaned(self) -> NoteFields:
        """Returns a copy with a single trailing newline removed from the title, as left by reading a line of input."""
        title = self.title
        if title.endswith('\r\n'):
            title = title[:-2]
        elif title.endswith('\n'):
            title = title[:-1]
        return NoteFields(title=title, body=self.body, label=self.label)


@dataclass
class Note:
    """A note as stored in the database.

    Instances are produced by :class:`notekeeper.store.NoteStore`; changing the attributes of an instance does not
    change the stored note.
    """

    id: int
    """Assigned by the store when the note is created. Never changes and is never reused."""

    title: str
    body: Optional[str] = None
    label: Optional[str] = None

    date: Optional[datetime] = None
    """When the note was created. Editing the note does not change this."""

    done: bool = False
    """Whether the note has been marked as completed. Once True, it stays True."""

    def fields(self) -> NoteFields:
        return NoteFields(title=self.title, body=self.body, label=self.label)

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'id': self.id,
            'title': self.title,
            'body': self.body,
            'label': self.label,
            'date': self.date.isoformat() if self.date else None,
            'done': self.done,
        }
