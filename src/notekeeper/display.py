"""Formats notes for printing to a terminal.

Nothing here touches the database; every function works on :class:`notekeeper.models.Note` instances that have
already been fetched.
"""

from typing import Iterable, Optional, TextIO
from terminaltables import AsciiTable
from notekeeper.models import Note


MAX_DISPLAY_LENGTH = 50
ELLIPSIS = '...'

_STRIKE_START = '\033[9m'
_STRIKE_END = '\033[0m'


def truncate(value: Optional[str], max_length: int = MAX_DISPLAY_LENGTH) -> str:
    """Shortens long values for display.

    A value at least ``max_length`` characters long is cut to ``max_length`` characters, the last three of which
    are replaced with ``...``. So with the default of 50, a 60-character title is shown as its first 47 characters
    followed by ``...``. Shorter values are returned unchanged, and None becomes an empty string.
    """
    if value is None:
        return ''
    if len(value) >= max_length:
        return value[:max_length - len(ELLIPSIS)] + ELLIPSIS
    return value


def strikethrough(text: str) -> str:
    return f'{_STRIKE_START}{text}{_STRIKE_END}'


def supports_strikethrough(stream: TextIO, term: Optional[str]) -> bool:
    """Guesses whether ANSI strikethrough will render on the given stream.

    ``term`` should be the value of the ``TERM`` environment variable, if any.
    """
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty() and term and term != 'dumb')


def _title(note: Note, decorate: bool, max_length: Optional[int] = MAX_DISPLAY_LENGTH) -> str:
    title = truncate(note.title, max_length) if max_length else (note.title or '')
    if note.done and decorate:
        return strikethrough(title)
    return title


def format_line(note: Note, decorate: bool = False) -> str:
    """Returns a one-line summary like ``1 buy milk``, with the label in brackets if there is one.

    If the note is done and ``decorate`` is True, the title is struck through.
    """
    line = f'{note.id} {_title(note, decorate)}'
    if note.label:
        line += f' [{truncate(note.label)}]'
    return line


def format_note(note: Note, decorate: bool = False) -> str:
    """Returns every field of the note, one per line, without truncation."""
    lines = [f'id: {note.id}',
             f'title: {_title(note, decorate, max_length=None)}']
    if note.body:
        lines.append(f'body: {note.body}')
    if note.label:
        lines.append(f'label: {note.label}')
    if note.date:
        lines.append(f'date: {note.date}')
    return '\n'.join(lines)


def format_table(notes: Iterable[Note], decorate: bool = False) -> str:
    data = [('ID', 'Title', 'Label', 'Date')]
    for note in notes:
        data.append((str(note.id),
                     _title(note, decorate),
                     truncate(note.label),
                     note.date.strftime('%Y-%m-%d') if note.date else ''))
    table = AsciiTable(data)
    table.justify_columns[0] = 'right'
    return table.table
