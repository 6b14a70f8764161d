from datetime import datetime
import io
from notekeeper.display import truncate, strikethrough, supports_strikethrough, format_line, format_note,\
    format_table
from notekeeper.models import Note


def test_truncate():
    assert truncate('short') == 'short'
    assert truncate('x' * 49) == 'x' * 49
    assert truncate('x' * 50) == 'x' * 47 + '...'
    assert truncate('abcdefghij' * 10) == ('abcdefghij' * 5)[:47] + '...'
    assert len(truncate('y' * 500)) == 50
    assert truncate('') == ''
    assert truncate(None) == ''
    assert truncate('abcdef', 5) == 'ab...'


def test_strikethrough():
    assert strikethrough('buy milk') == '\033[9mbuy milk\033[0m'


class FakeTty(io.StringIO):
    def isatty(self):
        return True


def test_supports_strikethrough():
    assert supports_strikethrough(FakeTty(), 'xterm-256color')
    assert not supports_strikethrough(FakeTty(), 'dumb')
    assert not supports_strikethrough(FakeTty(), None)
    assert not supports_strikethrough(io.StringIO(), 'xterm')
    assert not supports_strikethrough(object(), 'xterm')


def test_format_line():
    assert format_line(Note(1, 'buy milk')) == '1 buy milk'
    assert format_line(Note(1, 'buy milk', label='shopping')) == '1 buy milk [shopping]'
    assert format_line(Note(12, 'z' * 60)) == '12 ' + 'z' * 47 + '...'
    # done is never shown as a raw value
    assert format_line(Note(1, 'buy milk', done=True)) == '1 buy milk'
    assert format_line(Note(1, 'buy milk', done=True), decorate=True) == '1 \033[9mbuy milk\033[0m'
    assert format_line(Note(1, 'buy milk'), decorate=True) == '1 buy milk'


def test_format_note():
    note = Note(2, 'z' * 60, body='more detail', label='work', date=datetime(2020, 1, 2, 3, 4, 5), done=True)
    assert format_note(note) == f"""id: 2
title: {'z' * 60}
body: more detail
label: work
date: 2020-01-02 03:04:05"""
    assert format_note(note, decorate=True).splitlines()[1] == f"title: \033[9m{'z' * 60}\033[0m"
    assert format_note(Note(3, 'bare')) == 'id: 3\ntitle: bare'


def test_format_table():
    notes = [Note(1, 'buy milk', label='shopping', date=datetime(2020, 1, 2)),
             Note(2, 'call mom', done=True)]
    assert format_table(notes) == """+----+----------+----------+------------+
| ID | Title    | Label    | Date       |
+----+----------+----------+------------+
|  1 | buy milk | shopping | 2020-01-02 |
|  2 | call mom |          |            |
+----+----------+----------+------------+"""
