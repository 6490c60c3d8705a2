"""
Command-line tests. main() is called in-process with stdin/stdout captured.
"""

import io

import pytest

from bftape.cli import EXIT_OK, EXIT_RUNTIME_ERROR, EXIT_USAGE, main

HELLO_A = "++++++++[>++++++++<-]>+."


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


class TestHelp:
    def test_help_exits_zero(self, capsys):
        assert main(["-h"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "usage: bftape" in out
        assert "--stack" in out

    def test_help_ignores_other_flags(self, capsys):
        assert main(["-s", "notanumber", "--help"]) == EXIT_OK
        assert "usage" in capsys.readouterr().out

    def test_no_arguments_prints_usage(self, workdir, capsys):
        assert main([]) == EXIT_OK
        assert "usage" in capsys.readouterr().out


class TestUsageErrors:
    @pytest.mark.parametrize("value", ["0", "-3", "big"])
    def test_bad_stack_size(self, value, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["-s", value, "-c"])
        assert excinfo.value.code == EXIT_USAGE
        assert "Tape size" in capsys.readouterr().err

    def test_oversized_stack(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["-s", "99999999999999999999", "-c"])
        assert excinfo.value.code == EXIT_USAGE
        assert "at most" in capsys.readouterr().err

    def test_unknown_flag(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["--bogus"])
        assert excinfo.value.code == EXIT_USAGE

    def test_bad_config_file(self, workdir, capsys):
        (workdir / "bf.yaml").write_text("colour: blue\n")
        assert main(["--config", "bf.yaml", "-c"]) == EXIT_USAGE
        assert "colour" in capsys.readouterr().err


class TestFileMode:
    def test_run_file_flag(self, workdir, capsys):
        (workdir / "a.bf").write_text(HELLO_A[:10] + "\n" + HELLO_A[10:] + "\n")
        assert main(["-f", "a.bf"]) == EXIT_OK
        assert capsys.readouterr().out == "A"

    def test_bare_path(self, workdir, capsys):
        (workdir / "a.bf").write_text(HELLO_A)
        assert main(["a.bf"]) == EXIT_OK
        assert capsys.readouterr().out == "A"

    def test_file_flag_wins_over_bare_path(self, workdir, capsys):
        (workdir / "a.bf").write_text(HELLO_A)
        assert main(["missing.bf", "--file", "a.bf"]) == EXIT_OK
        assert capsys.readouterr().out == "A"

    def test_high_byte_written_raw(self, workdir, capsysbinary):
        (workdir / "high.bf").write_text("-" * 56 + ".")
        assert main(["high.bf"]) == EXIT_OK
        assert capsysbinary.readouterr().out == b"\xc8"

    def test_missing_file(self, workdir, capsys):
        assert main(["-f", "missing.bf"]) == EXIT_RUNTIME_ERROR
        assert "cannot open file" in capsys.readouterr().err

    def test_malformed_program(self, workdir, capsys):
        (workdir / "bad.bf").write_text("+.]")
        assert main(["bad.bf"]) == EXIT_RUNTIME_ERROR
        captured = capsys.readouterr()
        assert captured.out == "\x01"
        assert "Unmatched ']' at position 2" in captured.err

    def test_input_from_stdin(self, workdir, monkeypatch, capsys):
        (workdir / "echo.bf").write_text(",.")
        _stdin(monkeypatch, "66\n")
        assert main(["echo.bf"]) == EXIT_OK
        assert capsys.readouterr().out == "B"

    def test_bad_input(self, workdir, monkeypatch, capsys):
        (workdir / "echo.bf").write_text(",.")
        _stdin(monkeypatch, "bee\n")
        assert main(["echo.bf"]) == EXIT_RUNTIME_ERROR
        assert "Not an integer" in capsys.readouterr().err

    def test_step_limit(self, workdir, capsys):
        (workdir / "spin.bf").write_text("+[]")
        assert main(["spin.bf", "--step-limit", "50"]) == EXIT_RUNTIME_ERROR
        assert "Step limit" in capsys.readouterr().err

    def test_tape_size_from_environment(self, workdir, monkeypatch, capsys):
        # With 2 cells, '>>' returns to the cell that was incremented
        (workdir / "wrap.bf").write_text("+>>.")
        monkeypatch.setenv("BF_TAPE_SIZE", "2")
        assert main(["wrap.bf"]) == EXIT_OK
        assert capsys.readouterr().out == "\x01"


class TestInteractive:
    def test_runs_each_token(self, workdir, monkeypatch, capsys):
        _stdin(monkeypatch, HELLO_A + "\n")
        assert main(["-c"]) == EXIT_OK
        assert capsys.readouterr().out == ">>> A\n>>> \n"

    def test_input_shares_token_stream(self, workdir, monkeypatch, capsys):
        _stdin(monkeypatch, ",.\n65\n")
        assert main(["--cli"]) == EXIT_OK
        assert capsys.readouterr().out == ">>> A\n>>> \n"

    def test_tape_persists_between_lines(self, workdir, monkeypatch, capsys):
        _stdin(monkeypatch, "+++ .\n")
        assert main(["-c"]) == EXIT_OK
        assert capsys.readouterr().out == ">>> \n>>> \x03\n>>> \n"

    def test_error_then_continue(self, workdir, monkeypatch, capsys):
        _stdin(monkeypatch, "+] .\n")
        assert main(["-c"]) == EXIT_OK
        captured = capsys.readouterr()
        assert "Unmatched ']'" in captured.err
        assert captured.out.endswith(">>> \x01\n>>> \n")

    def test_debug_trace(self, workdir, monkeypatch, capsys):
        _stdin(monkeypatch, "+>\n")
        assert main(["-d", "-s", "2"]) == EXIT_OK
        assert capsys.readouterr().out.splitlines() == [
            ">>> [+] (01)00",
            "[>] 01(00)",
            ">>> ",
        ]

    def test_debug_no_blank_line_between_entries(self, workdir, monkeypatch, capsys):
        _stdin(monkeypatch, "+ nop ]\n")
        assert main(["-d", "-s", "1"]) == EXIT_OK
        captured = capsys.readouterr()
        assert captured.out == ">>> [+] (01)\n>>> \n>>> \n>>> \n"
        assert "Unmatched ']'" in captured.err

    def test_debug_shows_output_in_trace(self, workdir, monkeypatch, capsys):
        _stdin(monkeypatch, ",.\n65\n")
        assert main(["--debug", "--stack", "1"]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == ">>> [,] (41)"
        assert lines[1] == "[.] (41)    A"

    def test_prompt_from_config(self, workdir, monkeypatch, capsys):
        (workdir / "bf.yaml").write_text("prompt: 'bf> '\n")
        _stdin(monkeypatch, "")
        assert main(["--config", "bf.yaml", "-c"]) == EXIT_OK
        assert capsys.readouterr().out == "bf> \n"


class TestLogging:
    def test_module_logger_name(self):
        from bftape import cli
        assert cli.logger.name == "bftape.cli"
