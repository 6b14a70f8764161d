"""Provides the :class:`NoteStore` class."""

from collections import namedtuple
from datetime import datetime
import logging
import os
import os.path
import sqlite3
from typing import List, Optional
from notekeeper.models import Note, NoteFields


logger = logging.getLogger(__name__)


class Error(Exception):
    """Base class for the errors a :class:`NoteStore` raises."""
    pass


class NotFoundError(Error):
    """Raised when no note has the requested id."""

    def __init__(self, note_id):
        super().__init__(f'Note {note_id} not found.')
        self.note_id = note_id


class InvalidInputError(Error):
    """Raised before anything is written when the supplied content is unusable."""
    pass


class EngineError(Error):
    """Wraps a failure reported by SQLite while opening, preparing, binding or executing."""
    pass


_SQL_CREATE_SCHEMA = """
CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT,
    body TEXT,
    date TEXT,
    done INTEGER,
    label TEXT
);
"""

# Columns missing from databases created with the older (id, text, done) layout.
_MIGRATION_COLUMNS = ['title TEXT', 'body TEXT', 'date TEXT', 'label TEXT']

_SQL_SELECT = 'SELECT id, title, body, label, date, done FROM notes'

_SQL_INSERT_NOTE = 'INSERT INTO notes (title, body, label, date, done) VALUES (?, ?, ?, ?, ?)'
_SqlInsertNoteRow = namedtuple('SqlInsertNoteRow', ['title', 'body', 'label', 'date', 'done'])

_SQL_UPDATE_NOTE = 'UPDATE notes SET title = ?, body = ?, label = ? WHERE id = ?'
_SqlUpdateNoteRow = namedtuple('SqlUpdateNoteRow', ['title', 'body', 'label', 'id'])


def _note_from_row(row: sqlite3.Row) -> Note:
    return Note(id=row['id'],
                title=row['title'],
                body=row['body'],
                label=row['label'],
                date=_parse_date(row['date']),
                done=bool(row['done']))


class NoteStore:
    """Stores notes in a SQLite database file.

    The file (and its parent directory) is created if it does not exist. The ``notes`` table is created or
    upgraded as needed when the instance is created, and checked again at the start of every operation.
    Pass ``':memory:'`` as the path for a throwaway database.

    Every method raises :exc:`EngineError` if SQLite reports a problem. Methods that act on a single note raise
    :exc:`NotFoundError` if there is no note with the given id.

    Remember to call :meth:`close` when done with the instance, or use the instance as a context manager.
    """
    def __init__(self, path: str):
        self.path = path
        self.connection = None
        self._connect()
        try:
            self.ensure_schema()
        except EngineError:
            self.close()
            raise

    def _connect(self):
        logger.debug('Opening note database at %s', self.path)
        try:
            if self.path != ':memory:':
                parent = os.path.dirname(self.path)
                if parent:
                    os.makedirs(parent, exist_ok=True)
            self.connection = sqlite3.connect(self.path)
        except (OSError, sqlite3.Error) as e:
            raise EngineError(f"Can't open database {self.path}: {e}") from e
        self.connection.row_factory = sqlite3.Row

    def _execute(self, sql: str, params=()) -> sqlite3.Cursor:
        try:
            return self.connection.execute(sql, params)
        except (sqlite3.Error, OverflowError) as e:
            raise EngineError(f'SQL error: {e}') from e

    def ensure_schema(self) -> None:
        """Creates the ``notes`` table if it is missing. Calling this again does nothing.

        A table left by an older version, holding only ``id``, ``text`` and ``done``, gets the newer columns
        added and its ``text`` copied into ``title``.
        """
        try:
            with self.connection:
                self.connection.executescript(_SQL_CREATE_SCHEMA)
                columns = {r['name'] for r in self.connection.execute('PRAGMA table_info(notes)')}
                if 'title' not in columns:
                    logger.info('Upgrading notes table in %s', self.path)
                    for column in _MIGRATION_COLUMNS:
                        if column.split()[0] not in columns:
                            self.connection.execute(f'ALTER TABLE notes ADD COLUMN {column}')
                    if 'text' in columns:
                        self.connection.execute('UPDATE notes SET title = text')
        except sqlite3.Error as e:
            raise EngineError(f'SQL error: {e}') from e

    def exists(self, note_id: int) -> int:
        """Returns the number of notes with the given id, which is either 0 or 1."""
        self.ensure_schema()
        return self._execute('SELECT COUNT(*) FROM notes WHERE id = ?', (note_id,)).fetchone()[0]

    def _check_exists(self, note_id: int) -> None:
        if self.exists(note_id) == 0:
            raise NotFoundError(note_id)

    def create(self, fields: NoteFields) -> Note:
        """Saves a new note and returns it with its newly assigned id.

        Raises :exc:`InvalidInputError` if the title is empty after removing a trailing newline.
        """
        fields = _validate(fields)
        row = _SqlInsertNoteRow(title=fields.title,
                                body=fields.body,
                                label=fields.label,
                                date=datetime.now().isoformat(timespec='seconds'),
                                done=0)
        self.ensure_schema()
        with self.connection:
            cursor = self._execute(_SQL_INSERT_NOTE, row)
        logger.debug('Created note %s', cursor.lastrowid)
        return self.get(cursor.lastrowid)

    def get(self, note_id: int) -> Note:
        self.ensure_schema()
        row = self._execute(f'{_SQL_SELECT} WHERE id = ?', (note_id,)).fetchone()
        if row is None:
            raise NotFoundError(note_id)
        return _note_from_row(row)

    def list(self) -> List[Note]:
        """Returns all notes, oldest (lowest id) first. Returns an empty list if there are none."""
        self.ensure_schema()
        return [_note_from_row(r) for r in self._execute(f'{_SQL_SELECT} ORDER BY id')]

    def update(self, note_id: int, fields: NoteFields) -> Note:
        """Replaces the title, body and label of a note. Its id, creation date and done flag are kept.

        Raises :exc:`InvalidInputError` if the title is empty after removing a trailing newline.
        """
        fields = _validate(fields)
        self._check_exists(note_id)
        with self.connection:
            self._execute(_SQL_UPDATE_NOTE, _SqlUpdateNoteRow(title=fields.title,
                                                               body=fields.body,
                                                               label=fields.label,
                                                               id=note_id))
        logger.debug('Updated note %s', note_id)
        return self.get(note_id)

    def mark_done(self, note_id: int) -> Note:
        """Marks a note as completed. Marking an already completed note is not an error."""
        self._check_exists(note_id)
        with self.connection:
            self._execute('UPDATE notes SET done = 1 WHERE id = ?', (note_id,))
        logger.debug('Marked note %s as done', note_id)
        return self.get(note_id)

    def delete(self, note_id: int) -> None:
        """Permanently removes a note. Its id will not be assigned to any later note."""
        self._check_exists(note_id)
        with self.connection:
            self._execute('DELETE FROM notes WHERE id = ?', (note_id,))
        logger.debug('Deleted note %s', note_id)

    def close(self):
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _validate(fields: NoteFields) -> NoteFields:
    fields = fields.cleaned()
    if not fields.title:
        raise InvalidInputError('Note text must not be empty.')
    return fields


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug('Ignoring unrecognized date %r', value)
        return None
