from textwrap import dedent

import pytest

from yamlyze import AnalysisOptions, analyze_file


@pytest.fixture
def write_source(tmp_path):
	def write(code, name="main.c"):
		p = tmp_path / name
		p.parent.mkdir(parents=True, exist_ok=True)
		p.write_text(dedent(code))
		return p

	return write


@pytest.fixture
def analyze_source(write_source):
	def analyze(code, name="main.c", args=None, **flags):
		p = write_source(code, name)
		return analyze_file(str(p), args, AnalysisOptions(**flags))

	return analyze
