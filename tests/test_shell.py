"""
Tests for the interactive shell in vfshell.shell.shell.
"""

import io
import json

import pytest
from unittest.mock import patch

from vfshell.config import get_default_config
from vfshell.exit_codes import CommandError, GENERAL_ERROR, USAGE_ERROR
from vfshell.shell.shell import VFShell, run_shell, split_args
from vfshell.vfs import VirtualFS, build_from_csv


FS_CSV = """path,type,content
/,dir,
/home,dir,
/home/user,dir,
/home/user/notes.txt,file,plain notes
/etc,dir,
/etc/motd,file,d2VsY29tZQo=
/tmp,dir,
"""


@pytest.fixture
def config():
    cfg = get_default_config()
    cfg['shell']['prompt'] = "{cwd}$ "
    return cfg


@pytest.fixture
def shell(config):
    return VFShell(VirtualFS(build_from_csv(FS_CSV)), config)


@pytest.fixture
def script(tmp_path):
    """Write a startup script and return its path."""
    def _write(text):
        path = tmp_path / "start.txt"
        path.write_text(text)
        return str(path)
    return _write


class TestSplitArgs:

    def test_quotes_and_escapes(self):
        assert split_args('a "b c" d\\ e') == ['a', 'b c', 'd e']
        assert split_args("'single quoted'") == ['single quoted']

    def test_empty(self):
        assert split_args('') == []
        assert split_args('   ') == []

    def test_unmatched_quote(self):
        with pytest.raises(CommandError) as exc_info:
            split_args('cat "abc')
        assert str(exc_info.value) == "unmatched quote"
        assert exc_info.value.exit_code == USAGE_ERROR


class TestPrompt:

    def test_prompt_tracks_cwd(self, shell):
        assert shell.prompt == "/$ "
        shell.onecmd("cd /home/user")
        assert shell.prompt == "/home/user$ "

    def test_default_template(self):
        with patch('vfshell.shell.shell.get_user_and_host', return_value=("alice", "box")):
            sh = VFShell(VirtualFS(build_from_csv(FS_CSV)), get_default_config())
        assert sh.prompt == "alice@box:/$ "


class TestNavigationCommands:

    def test_pwd(self, shell, capsys):
        shell.onecmd("pwd")
        assert capsys.readouterr().out == "/\n"

    def test_cd_then_pwd(self, shell, capsys):
        shell.onecmd("cd /home")
        shell.onecmd("cd user")
        shell.onecmd("pwd")
        assert capsys.readouterr().out == "/home/user\n"

    def test_cd_without_path(self, shell, capsys):
        assert shell.onecmd("cd") is False
        assert "cd: path required" in capsys.readouterr().err

    def test_cd_into_file(self, shell, capsys):
        shell.onecmd("cd /etc/motd")
        assert "cd: not a directory: /etc/motd" in capsys.readouterr().err
        assert shell.vfs.pwd() == "/"

    def test_cd_missing(self, shell, capsys):
        shell.onecmd("cd /nowhere")
        assert "no such file or directory: nowhere" in capsys.readouterr().err

    def test_ls_root(self, shell, capsys):
        shell.onecmd("ls")
        assert capsys.readouterr().out == "home/  etc/  tmp/\n"

    def test_ls_subdirectory(self, shell, capsys):
        shell.onecmd("ls /etc")
        assert capsys.readouterr().out == ".  ..  motd\n"

    def test_ls_multiple_paths(self, shell, capsys):
        shell.onecmd("ls /tmp /etc")
        assert capsys.readouterr().out == "/tmp:\n.  ..\n\n/etc:\n.  ..  motd\n"

    def test_ls_json(self, shell, capsys):
        shell.onecmd("ls /etc --json")
        lines = capsys.readouterr().out.strip().split('\n')
        assert [json.loads(line) for line in lines] == [
            {"name": ".", "type": "dir"},
            {"name": "..", "type": "dir"},
            {"name": "motd", "type": "file"},
        ]

    def test_touch_then_ls(self, shell, capsys):
        shell.onecmd("touch /tmp/a /tmp/b")
        shell.onecmd("ls /tmp")
        assert capsys.readouterr().out == ".  ..  a  b\n"

    def test_touch_quoted_name(self, shell, capsys):
        shell.onecmd('touch "/tmp/my file"')
        node, _ = shell.vfs.resolve("/tmp/my file")
        assert node.name == "my file"

    def test_touch_directory(self, shell, capsys):
        shell.onecmd("touch /home")
        assert "is a directory" in capsys.readouterr().err

    @pytest.mark.parametrize("command", ["touch", "cat", "wc"])
    def test_missing_operand(self, shell, capsys, command):
        shell.onecmd(command)
        assert f"{command}: missing file operand" in capsys.readouterr().err

    def test_unmatched_quote_reported(self, shell, capsys):
        shell.onecmd('cat "/etc/motd')
        captured = capsys.readouterr()
        assert "unmatched quote" in captured.err
        assert captured.out == ""


class TestFileCommands:

    def test_cat_base64(self, shell, capsys):
        shell.onecmd("cat /etc/motd")
        assert capsys.readouterr().out == "welcome\n"

    def test_cat_plain_text(self, shell, capsys):
        shell.onecmd("cat /home/user/notes.txt")
        assert capsys.readouterr().out == "plain notes\n"

    def test_cat_directory(self, shell, capsys):
        shell.onecmd("cat /home")
        assert "is a directory" in capsys.readouterr().err

    def test_wc(self, shell, capsys):
        shell.onecmd("wc /etc/motd")
        assert capsys.readouterr().out == "      1       1       8 /etc/motd\n"

    def test_wc_total(self, shell, capsys):
        shell.onecmd("wc /etc/motd /home/user/notes.txt")
        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == "      0       2      11 /home/user/notes.txt"
        assert lines[2] == "      1       3      19 total"

    def test_tree(self, shell, capsys):
        shell.onecmd("tree /home")
        out = capsys.readouterr().out
        assert "home/" in out
        assert "user/" in out
        assert "notes.txt" in out
        assert "motd" not in out


class TestHostCommands:

    @patch('vfshell.shell.shell.run_host_command')
    def test_unknown_word_runs_on_host(self, mock_run, shell):
        shell.onecmd('echo "hello world"')
        mock_run.assert_called_once_with(['echo', 'hello world'])

    @patch('vfshell.shell.shell.run_host_command')
    def test_bang_prefix(self, mock_run, shell):
        shell.onecmd("!ls -la")
        mock_run.assert_called_once_with(['ls', '-la'])

    @pytest.mark.parametrize("line, expected", [
        ("tree-sitter --version", ["tree-sitter", "--version"]),
        ("cd.sh", ["cd.sh"]),
        ("ls-remote origin", ["ls-remote", "origin"]),
        ("pwdx 42", ["pwdx", "42"]),
    ])
    @patch('vfshell.shell.shell.run_host_command')
    def test_names_extending_vfs_commands_run_on_host(self, mock_run, shell, line, expected):
        shell.onecmd(line)
        mock_run.assert_called_once_with(expected)
        assert shell.vfs.pwd() == "/"

    @patch('vfshell.shell.shell.run_host_command')
    def test_exit_prefixed_name_keeps_session(self, mock_run, shell):
        assert not shell.onecmd("exit-status.sh")
        mock_run.assert_called_once_with(["exit-status.sh"])

    @patch('vfshell.shell.shell.run_host_command')
    def test_host_error_reported(self, mock_run, shell, capsys):
        mock_run.side_effect = CommandError("unknown command: nope")
        assert shell.onecmd("nope") is False
        assert "unknown command: nope" in capsys.readouterr().err

    @patch('vfshell.shell.shell.run_host_command')
    def test_interrupt_returns_to_prompt(self, mock_run, shell, capsys):
        mock_run.side_effect = KeyboardInterrupt
        assert not shell.onecmd("sleep 100")
        assert "^C" in capsys.readouterr().out

    def test_bare_bang(self, shell, capsys):
        shell.onecmd("!")
        assert "Usage: !<command>" in capsys.readouterr().err


class TestExit:

    @pytest.mark.parametrize("command", ["exit", "quit", "EOF"])
    def test_exit_commands_stop(self, shell, command):
        assert shell.onecmd(command) is True

    def test_empty_line_does_nothing(self, shell, capsys):
        shell.onecmd("pwd")
        capsys.readouterr()
        assert not shell.onecmd("")
        assert capsys.readouterr().out == ""


class TestScript:

    def test_lines_echoed_with_prompt(self, shell, script, capsys):
        path = script("pwd\ncd /etc\nls\n")
        assert shell.run_script(path) is False

        out = capsys.readouterr().out.splitlines()
        assert out == ["/$ pwd", "/", "/$ cd /etc", "/etc$ ls", ".  ..  motd"]

    def test_exit_stops_script(self, shell, script, capsys):
        path = script("cd /tmp\nexit\ncd /etc\n")
        assert shell.run_script(path) is True
        assert shell.vfs.pwd() == "/tmp"

    def test_blank_lines_skipped_but_counted(self, shell, script, capsys):
        path = script("pwd\n\ncd /nope\npwd\n")
        with pytest.raises(CommandError) as exc_info:
            shell.run_script(path)

        assert str(exc_info.value) == "error on line 3: no such file or directory: nope"
        assert exc_info.value.exit_code == GENERAL_ERROR
        assert capsys.readouterr().out.count("pwd") == 1

    @patch('vfshell.shell.shell.run_host_command')
    def test_host_failure_stops_script(self, mock_run, shell, script):
        mock_run.side_effect = CommandError("false: exited with status 1")
        path = script("false\ntouch /tmp/after\n")
        with pytest.raises(CommandError) as exc_info:
            shell.run_script(path)
        assert "error on line 1: false: exited with status 1" in str(exc_info.value)
        assert shell.vfs.ls("/tmp") == [".", ".."]

    def test_missing_script(self, shell, tmp_path):
        with pytest.raises(CommandError) as exc_info:
            shell.run_script(str(tmp_path / "missing.txt"))
        assert str(exc_info.value).startswith("script:")


class TestRunShell:

    def test_exit_in_script_skips_loop(self, shell, script):
        with patch.object(shell, 'cmdloop') as mock_loop:
            run_shell(shell, script("exit\n"))
        mock_loop.assert_not_called()

    def test_script_then_loop(self, shell, script):
        with patch.object(shell, 'cmdloop') as mock_loop:
            run_shell(shell, script("cd /home\n"))
        mock_loop.assert_called_once()
        assert shell.vfs.pwd() == "/home"

    def test_interactive_input(self, shell, capsys):
        shell.use_rawinput = False
        shell.stdin = io.StringIO("cd /home/user\npwd\ncd /nope\nexit\n")
        shell.intro = ""

        run_shell(shell)

        captured = capsys.readouterr()
        assert "/home/user\n" in captured.out
        assert "no such file or directory: nope" in captured.err
        assert shell.vfs.pwd() == "/home/user"

    def test_interrupt_exits_loop(self, shell, capsys):
        with patch.object(shell, 'cmdloop', side_effect=KeyboardInterrupt):
            run_shell(shell)
        assert "Goodbye" in capsys.readouterr().out
