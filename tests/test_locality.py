import os

from yamlyze.locality import LocalityFilter, canonical_path


def test_same_file_included(tmp_path):
	target = tmp_path / "main.c"
	target.write_text("")
	f = LocalityFilter(str(target))
	assert f.included(str(target), False)
	assert f.included(os.path.join(str(tmp_path), "sub", "..", "main.c"), False)


def test_other_file_excluded_unless_all_files(tmp_path):
	target = tmp_path / "main.c"
	other = str(tmp_path / "other.h")
	assert not LocalityFilter(str(target)).included(other, False)
	assert LocalityFilter(str(target), all_files=True).included(other, False)


def test_system_headers_and_missing_files_excluded(tmp_path):
	target = str(tmp_path / "main.c")
	for all_files in (False, True):
		f = LocalityFilter(target, all_files=all_files)
		assert not f.included(target, True)
		assert not f.included(None, False)
		assert not f.included("", False)


def test_symlinked_target(tmp_path):
	real = tmp_path / "real.c"
	real.write_text("")
	link = tmp_path / "link.c"
	link.symlink_to(real)
	assert canonical_path(str(link)) == canonical_path(str(real))
	assert LocalityFilter(str(link)).included(str(real), False)


def test_variables_from_other_files(analyze_source, write_source):
	write_source(
		"""
		extern int shared_value;
		""",
		"shared.h",
	)
	code = """
		#include "shared.h"
		int own_value;
		"""
	doc = analyze_source(code)
	assert "shared_value" not in doc.variables
	assert "own_value" in doc.variables

	doc = analyze_source(code, all_files=True)
	assert doc.variables["shared_value"].storage_class == "extern"


def test_system_header_declarations_excluded(analyze_source, write_source, tmp_path):
	write_source(
		"""
		int sys_counter;
		typedef int sys_id;
		int sys_call(void) { return 0; }
		""",
		"sys/sysdecl.h",
	)
	doc = analyze_source(
		"""
		#include <sysdecl.h>
		int user(void) { return sys_call(); }
		""",
		args=["-isystem", str(tmp_path / "sys")],
		all_files=True,
		calls=True,
	)
	assert "sys_counter" not in doc.variables
	assert "sys_id" not in doc.types
	assert "sys_call" not in doc.functions
	assert doc.functions["user"].calls == ["sys_call"]
