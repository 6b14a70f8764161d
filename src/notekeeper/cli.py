"""Command-line interface for notekeeper."""


import argparse
import json
import logging
import sys
from notekeeper import display
from notekeeper.conf import NotekeeperConf
from notekeeper.models import NoteFields
from notekeeper.store import Error, NoteStore


logger = logging.getLogger(__name__)


def _read_line() -> str:
    print('(hit ENTER to finish):')
    sys.stdout.flush()
    return sys.stdin.readline()


def _add(args, store: NoteStore) -> int:
    note = store.create(NoteFields(title=_read_line(), body=args.body, label=args.label))
    print(f'Note {note.id} added.')
    return 0


def _list(args, store: NoteStore) -> int:
    notes = store.list()
    if args.json:
        print(json.dumps([n.as_json() for n in notes]))
    elif not notes:
        print('No notes were found.')
        print("Try the 'help' command for more information.")
    elif args.table:
        print(display.format_table(notes, args.decorate))
    else:
        for note in notes:
            print(display.format_line(note, args.decorate))
    return 0


def _view(args, store: NoteStore) -> int:
    note = store.get(args.id)
    if args.json:
        print(json.dumps(note.as_json()))
    else:
        print(display.format_note(note, args.decorate))
    return 0


def _edit(args, store: NoteStore) -> int:
    fields = store.get(args.id).fields()
    fields.title = _read_line()
    if args.body is not None:
        fields.body = args.body
    if args.label is not None:
        fields.label = args.label
    store.update(args.id, fields)
    print(f'Note {args.id} updated.')
    return 0


def _mark(args, store: NoteStore) -> int:
    store.mark_done(args.id)
    print(f'Note {args.id} marked as completed.')
    return 0


def _delete(args, store: NoteStore) -> int:
    store.delete(args.id)
    print(f'Note {args.id} deleted.')
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='notekeeper',
        description='Simple note taking.',
        epilog='If no command is given, the notes will be listed.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log details of what is happening to stderr.')
    parser.set_defaults(func=_list, json=False, table=False)

    subs = parser.add_subparsers(title='Commands')

    p_add = subs.add_parser('add', help='Add a new note. The text is read from standard input, up to the first '
                                        'newline.')
    p_add.add_argument('-b', '--body', help='Longer text to store with the note.')
    p_add.add_argument('-l', '--label', help='Short category for the note.')
    p_add.set_defaults(func=_add)

    p_list = subs.add_parser('list', help='List all notes. Completed notes are struck through when the terminal '
                                          'supports it.')
    p_list_formats = p_list.add_mutually_exclusive_group()
    p_list_formats.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_list_formats.add_argument('-t', '--table', action='store_true', help='Format output as a table.')
    p_list.set_defaults(func=_list)

    p_view = subs.add_parser('view', help='Show every field of a note.')
    p_view.add_argument('id', type=int, help='Id of the note.')
    p_view.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    p_view.set_defaults(func=_view)

    p_edit = subs.add_parser('edit', help='Replace the text of a note, read from standard input up to the first '
                                          'newline. The body and label are kept unless given.')
    p_edit.add_argument('id', type=int, help='Id of the note.')
    p_edit.add_argument('-b', '--body', help='New body for the note.')
    p_edit.add_argument('-l', '--label', help='New label for the note.')
    p_edit.set_defaults(func=_edit)

    p_mark = subs.add_parser('mark', help='Mark a note as completed.')
    p_mark.add_argument('id', type=int, help='Id of the note.')
    p_mark.set_defaults(func=_mark)

    p_delete = subs.add_parser('delete', help='Permanently delete a note.')
    p_delete.add_argument('id', type=int, help='Id of the note.')
    p_delete.set_defaults(func=_delete)

    p_help = subs.add_parser('help', help='Print this message.')
    p_help.set_defaults(func=None)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    args = parser.parse_args(args)
    if not args.func:
        parser.print_help()
        return 0
    conf = NotekeeperConf.for_environ()
    level = logging.DEBUG if args.verbose else getattr(logging, conf.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    args.decorate = display.supports_strikethrough(sys.stdout, conf.term)
    try:
        with conf.instantiate() as store:
            return args.func(args, store)
    except Error as e:
        logger.debug('Command failed', exc_info=True)
        print(e, file=sys.stderr)
        return 1
