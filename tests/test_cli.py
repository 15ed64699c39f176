import io
from pathlib import Path

import pytest

from lnextract import Token, TokenKind, cli

FIXTURES = Path(__file__).parent / 'fixtures'
CHAPTER = str(FIXTURES / 'chapter.html')


def run(*argv):
    out = io.StringIO()
    code = cli.main(list(argv), stdout=out)
    return code, out.getvalue()


def test_cli_prints_first_match():
    code, out = run('h1', CHAPTER)
    assert code == 0
    assert out == '<h1 class="entry-title">Chapter 3: The Bridge</h1>\n'


def test_cli_all_with_attr_and_text():
    code, out = run('p', CHAPTER, '--all', '--text')
    assert code == 0
    lines = out.splitlines()
    assert lines[0] == 'The rain had not stopped for three days.'
    assert 'Kaito crossed the old bridge & looked back.' in lines


def test_cli_children_of_container():
    code, out = run('div', CHAPTER, '--attr', 'class=wp-block-image', '--children')
    assert code == 0
    assert out.strip().startswith('<figure><img src="https://example.com/bridge.jpg"')


def test_cli_sanitize_profile():
    code, out = run('div', CHAPTER, '--attr', 'class=pre-bar', '--sanitize', 'minimal')
    assert code == 0
    assert '<button' not in out and 'Settings' in out


def test_cli_reads_stdin(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('<ul><li>a</li><li>b</li></ul>'))
    code, out = run('li', '--all')
    assert code == 0
    assert out == '<li>a</li>\n<li>b</li>\n'


def test_cli_no_match_exit_code():
    code, out = run('table', CHAPTER)
    assert code == cli.EXIT_NO_MATCH
    assert out == ''


def test_cli_bad_attr(capsys):
    code, _ = run('div', CHAPTER, '--attr', 'entry-content')
    assert code == cli.EXIT_ERROR
    assert 'KEY=VALUE' in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    code, _ = run('div', str(tmp_path / 'nope.html'))
    assert code == cli.EXIT_ERROR
    assert 'cannot read' in capsys.readouterr().err


def test_cli_encoding_from_environment(tmp_path, monkeypatch):
    page = tmp_path / 'page.html'
    page.write_bytes('<p>café</p>'.encode('latin-1'))
    monkeypatch.setenv('LNEXTRACT_ENCODING', 'latin-1')
    code, out = run('p', str(page))
    assert code == 0
    assert out == '<p>café</p>\n'


def test_cli_strict_on_broken_markup(monkeypatch):
    def broken(fh):
        yield Token(TokenKind.OPEN, '<p>', 'p')
        yield Token(TokenKind.OTHER, 'x', '#text')
        raise ValueError('bad markup')

    monkeypatch.setattr(cli, 'tokenize', broken)
    code, out = run('p', CHAPTER)
    assert code == 0 and out == '<p>x\n'
    code, _ = run('p', CHAPTER, '--strict')
    assert code == cli.EXIT_BROKEN_INPUT


def test_cli_rejects_unknown_profile():
    with pytest.raises(SystemExit):
        run('div', CHAPTER, '--sanitize', 'kindle')


def test_cli_decodes_stdin_with_configured_encoding(monkeypatch):
    stdin = io.TextIOWrapper(io.BytesIO(b'<div>\xff</div>'), encoding='utf-8')
    monkeypatch.setattr('sys.stdin', stdin)
    monkeypatch.setenv('LNEXTRACT_ENCODING', 'latin-1')
    code, out = run('div')
    assert code == 0
    assert out == '<div>ÿ</div>\n'
    assert not stdin.buffer.closed


def test_cli_tag_is_case_insensitive(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('<DIV>x</DIV>'))
    code, out = run('DIV')
    assert code == 0
    assert out == '<DIV>x</DIV>\n'
