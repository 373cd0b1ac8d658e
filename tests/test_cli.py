import json
import string

import pytest

from secretgen.cli import main


def test_generate_lowercase(entropy_file, capsys):
    code = main(["generate", "-l", "8", "-c", "a-z", "--no-default", "--rndsrc", entropy_file])
    out = capsys.readouterr().out.strip()
    assert code == 0
    assert len(out) == 8
    assert all(c in string.ascii_lowercase for c in out)

def test_generate_copies(entropy_file, capsys):
    code = main(["generate", "--copies", "3", "--rndsrc", entropy_file])
    lines = capsys.readouterr().out.split()
    assert code == 0
    assert len(lines) == 3
    assert all(len(line) == 12 for line in lines)

def test_generate_failure_reports_to_stderr(entropy_file, capsys):
    code = main(["generate", "-l", "10", "-c", "2:ab", "--no-default", "--rndsrc", entropy_file])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "CRITICAL(3)" in captured.err

def test_generate_uses_config(isolated_config, entropy_file, capsys):
    isolated_config.write_text(json.dumps({"length": 5, "rndsrc": entropy_file}))
    assert main(["generate"]) == 0
    assert len(capsys.readouterr().out.strip()) == 5

def test_generate_rejects_bad_length(capsys):
    assert main(["generate", "-l", "0"]) == 2
    assert "length must be > 0" in capsys.readouterr().err

def test_config_set_and_show(isolated_config, capsys):
    assert main(["config", "set", "charlists", "3:#$%", "a-z"]) == 0
    assert main(["config", "set", "no_default", "yes"]) == 0
    saved = json.loads(isolated_config.read_text())
    assert saved["charlists"] == ["3:#$%", "a-z"]
    assert saved["no_default"] is True
    capsys.readouterr()
    assert main(["config", "show"]) == 0
    assert "charlists" in capsys.readouterr().out

def test_config_set_bad_value(capsys):
    assert main(["config", "set", "length", "twelve"]) == 2

def test_unknown_setting_rejected():
    with pytest.raises(SystemExit):
        main(["config", "set", "colour", "blue"])

def test_generate_with_string_length_in_config(isolated_config, entropy_file, capsys):
    isolated_config.write_text(json.dumps({"length": "7", "rndsrc": entropy_file}))
    assert main(["generate"]) == 0
    assert len(capsys.readouterr().out.strip()) == 7

def test_failure_report_printed_once(entropy_file, capsys):
    main(["generate", "-l", "10", "-c", "2:ab", "--no-default", "--rndsrc", entropy_file])
    assert capsys.readouterr().err.count("CRITICAL(3)") == 1
