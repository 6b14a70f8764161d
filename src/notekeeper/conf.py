from __future__ import annotations
from dataclasses import dataclass
import os
from typing import Mapping, Optional


DEFAULT_DATA_DIR = '.config'
DEFAULT_FILENAME = 'notes.db'


def resolve_path(home: Optional[str], data_dir: Optional[str], filename: str = DEFAULT_FILENAME) -> str:
    """Returns the path of the notes database as ``home/data_dir/filename``.

    A missing ``home`` is treated as an empty string and a missing ``data_dir`` falls back to ``.config``,
    so this never fails. Nothing is read from the environment here; see :meth:`NotekeeperConf.for_environ`.
    """
    return os.sep.join([home or '', data_dir or DEFAULT_DATA_DIR, filename])


@dataclass
class NotekeeperConf:
    """Settings resolved once at startup and passed to the rest of the tool."""

    home: str = ''
    """The user's home directory. Taken from ``HOME``."""

    data_dir: str = DEFAULT_DATA_DIR
    """Directory, relative to :attr:`home`, holding the database. Taken from ``XDG_DATA_DIR``."""

    filename: str = DEFAULT_FILENAME
    """Name of the SQLite database file."""

    log_level: str = 'WARNING'
    """Level name for the ``logging`` module. Taken from ``LOG_LEVEL``.

    The ``--verbose`` command-line flag overrides this with ``DEBUG``.
    """

    term: Optional[str] = None
    """The terminal type, from ``TERM``. Used to decide whether completed notes can be struck through."""

    @classmethod
    def for_environ(cls, environ: Mapping[str, str] = None) -> NotekeeperConf:
        """Builds an instance from environment variables.

        This is the only place the process environment is consulted. Pass a mapping to use something other
        than ``os.environ``.
        """
        if environ is None:
            environ = os.environ
        return cls(home=environ.get('HOME', ''),
                   data_dir=environ.get('XDG_DATA_DIR', DEFAULT_DATA_DIR),
                   log_level=environ.get('LOG_LEVEL', 'WARNING'),
                   term=environ.get('TERM'))

    def db_path(self) -> str:
        return resolve_path(self.home, self.data_dir, self.filename)

    def instantiate(self):
        """Opens a :class:`notekeeper.store.NoteStore` at :meth:`db_path`. Remember to close it."""
        from notekeeper.store import NoteStore
        return NoteStore(self.db_path())
