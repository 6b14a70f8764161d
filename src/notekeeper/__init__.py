"""Keeps short notes in a local SQLite database.

If you installed via ``pip``, run ``notekeeper help`` to get help.

To use the Python API, look at :class:`notekeeper.store.NoteStore`, or get one via
:meth:`notekeeper.conf.NotekeeperConf.instantiate`.
"""
