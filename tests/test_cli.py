import json
from textwrap import dedent

import pytest
import yaml

from cli import main


SOURCE = dedent(
	"""
	#include "util.h"

	static int counter;

	typedef enum { RED = 0, GREEN = 1 } Color;

	/** Adds. */
	int add(int a, int b) { return helper() + a + b; }
	"""
)


@pytest.fixture
def project(tmp_path):
	(tmp_path / "util.h").write_text("static int helper(void) { return 0; }\n")
	src = tmp_path / "main.c"
	src.write_text(SOURCE)
	return tmp_path


def test_no_file_prints_usage(capsys):
	assert main([]) == 0
	assert "usage" in capsys.readouterr().out


def test_help_exits_zero(capsys):
	with pytest.raises(SystemExit) as excinfo:
		main(["--help"])
	assert excinfo.value.code == 0
	assert "--calls" in capsys.readouterr().out


def test_document_to_stdout(project, capsys):
	assert main(["-f", str(project / "main.c"), "-c", "-d"]) == 0
	data = yaml.safe_load(capsys.readouterr().out)
	assert data["name"] == "main.c"
	assert data["functions"]["add"]["calls"] == ["helper"]
	assert data["functions"]["add"]["docs"] == {"raw": "/** Adds. */"}
	assert "helper" not in data["functions"]
	assert data["variables"]["counter"] == {"class": "static", "type": "int"}
	assert data["types"]["Color"]["values"] == {"RED": 0, "GREEN": 1}
	assert data["headers"] == []


def test_all_files_and_includes(project, capsys):
	assert main(["--file", str(project / "main.c"), "--all", "--includes"]) == 0
	data = yaml.safe_load(capsys.readouterr().out)
	assert "helper" in data["functions"]
	assert [h.rsplit("/", 1)[-1] for h in data["headers"]] == ["util.h"]


def test_output_file_json(project):
	out = project / "out" / "nested" / "main.json"
	assert main(["-f", str(project / "main.c"), "-O", str(out), "-F", "json"]) == 0
	data = json.loads(out.read_text())
	assert data["functions"]["add"]["args"][1] == {"name": "b", "type": "int", "size": 4}


def test_options_file(project, capsys):
	opts = project / "compile.opts"
	opts.write_text("-DEXTRA=1 -Werror\n")
	src = project / "extra.c"
	src.write_text("#if EXTRA\nint extra(void) { return 1; }\n#endif\n")
	assert main(["-f", str(src), "-o", str(opts)]) == 0
	assert "extra" in yaml.safe_load(capsys.readouterr().out)["functions"]


def test_missing_options_file(project, capsys):
	code = main(["-f", str(project / "main.c"), "-o", str(project / "missing.opts")])
	assert code == 1
	captured = capsys.readouterr()
	assert "options file" in captured.err
	assert captured.out == ""


def test_unreadable_target(tmp_path, capsys):
	assert main(["-f", str(tmp_path / "missing.c")]) == 1
	captured = capsys.readouterr()
	assert "Could not read file" in captured.err
	assert captured.out == ""


def test_options_file_not_utf8(project, capsys):
	opts = project / "bad.opts"
	opts.write_bytes(b"\xff\xfe-DX\n")
	assert main(["-f", str(project / "main.c"), "-o", str(opts)]) == 1
	assert "options file" in capsys.readouterr().err
