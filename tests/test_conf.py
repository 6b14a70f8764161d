import os
from notekeeper.conf import NotekeeperConf, resolve_path


def test_resolve_path():
    assert resolve_path('/home/me', 'data') == os.sep.join(['/home/me', 'data', 'notes.db'])
    assert resolve_path('/home/me', None) == os.sep.join(['/home/me', '.config', 'notes.db'])
    assert resolve_path('/home/me', 'data', 'other.db') == os.sep.join(['/home/me', 'data', 'other.db'])


def test_resolve_path_without_home():
    # degrades to a path rooted at the separator rather than failing
    assert resolve_path(None, None) == os.sep + os.sep.join(['.config', 'notes.db'])
    assert resolve_path('', 'data') == os.sep + os.sep.join(['data', 'notes.db'])


def test_for_environ():
    conf = NotekeeperConf.for_environ({'HOME': '/home/me', 'XDG_DATA_DIR': 'share', 'LOG_LEVEL': 'DEBUG',
                                       'TERM': 'xterm'})
    assert conf == NotekeeperConf(home='/home/me', data_dir='share', log_level='DEBUG', term='xterm')
    assert conf.db_path() == os.sep.join(['/home/me', 'share', 'notes.db'])


def test_for_environ_defaults():
    conf = NotekeeperConf.for_environ({})
    assert conf == NotekeeperConf()
    assert conf.db_path() == os.sep + os.sep.join(['.config', 'notes.db'])


def test_for_environ_reads_os_environ(monkeypatch):
    monkeypatch.setenv('HOME', '/somewhere')
    monkeypatch.delenv('XDG_DATA_DIR', raising=False)
    assert NotekeeperConf.for_environ().db_path() == os.sep.join(['/somewhere', '.config', 'notes.db'])


def test_instantiate(tmp_path):
    conf = NotekeeperConf(home=str(tmp_path), data_dir='nested/dir')
    with conf.instantiate() as store:
        assert store.list() == []
    assert (tmp_path / 'nested' / 'dir' / 'notes.db').is_file()
