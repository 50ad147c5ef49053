import os
import stat

import pytest

from app.core.exceptions import ArchiveExtractionError, UnsafeArchivePathError
from app.services.archive_extractor import unzip


def test_extracts_layout(sample_repo_zip, tmp_path):
    dest = tmp_path / "out" / "unzipped"

    count = unzip(sample_repo_zip, str(dest))

    assert count == 4
    assert (dest / "repo-main" / "README.md").read_bytes() == b"# repo\n"
    assert (dest / "repo-main" / "src" / "main.go").read_bytes() == b"package main\n"
    assert (dest / "repo-main" / "src").is_dir()


def test_creates_missing_parents_for_files(make_zip, tmp_path):
    # Sin entradas de directorio explícitas
    archive = make_zip([("repo-main/a/b/c.txt", b"c")])
    dest = tmp_path / "unzipped"

    unzip(archive, str(dest))

    assert (dest / "repo-main" / "a" / "b" / "c.txt").read_bytes() == b"c"


def test_preserves_mode_bits(make_zip, tmp_path):
    archive = make_zip([
        ("repo-main/", None, 0o750),
        ("repo-main/run.sh", b"#!/bin/sh\n", 0o755),
        ("repo-main/notes.txt", b"n", 0o640),
    ])
    dest = tmp_path / "unzipped"

    unzip(archive, str(dest))

    assert stat.S_IMODE(os.stat(dest / "repo-main" / "run.sh").st_mode) == 0o755
    assert stat.S_IMODE(os.stat(dest / "repo-main" / "notes.txt").st_mode) == 0o640
    assert stat.S_IMODE(os.stat(dest / "repo-main").st_mode) == 0o750


def test_truncates_existing_files(make_zip, tmp_path):
    archive = make_zip([("repo-main/file.txt", b"new")])
    existing = tmp_path / "unzipped" / "repo-main"
    existing.mkdir(parents=True)
    (existing / "file.txt").write_bytes(b"much longer old content")

    unzip(archive, str(tmp_path / "unzipped"))

    assert (existing / "file.txt").read_bytes() == b"new"


def test_rejects_path_traversal(make_zip, tmp_path):
    archive = make_zip([
        ("repo-main/ok.txt", b"ok"),
        ("repo-main/../../evil.txt", b"evil"),
    ])
    dest = tmp_path / "a" / "unzipped"

    with pytest.raises(UnsafeArchivePathError) as exc_info:
        unzip(archive, str(dest))

    assert exc_info.value.entry_name == "repo-main/../../evil.txt"
    assert not (tmp_path / "evil.txt").exists()
    assert not (tmp_path / "a" / "evil.txt").exists()


def test_rejects_absolute_entry(make_zip, tmp_path):
    archive = make_zip([("/tmp/absolute-entry.txt", b"x")])

    with pytest.raises(UnsafeArchivePathError):
        unzip(archive, str(tmp_path / "unzipped"))


def test_invalid_archive(tmp_path):
    not_a_zip = tmp_path / "repo.zip"
    not_a_zip.write_text("<html><body>404: Not Found</body></html>")

    with pytest.raises(ArchiveExtractionError) as exc_info:
        unzip(str(not_a_zip), str(tmp_path / "unzipped"))

    assert exc_info.value.http_status == 500
    assert exc_info.value.message == "Failed to unzip repo"
    assert exc_info.value.details["original_error_type"] == "BadZipFile"


def test_missing_archive(tmp_path):
    with pytest.raises(ArchiveExtractionError):
        unzip(str(tmp_path / "missing.zip"), str(tmp_path / "unzipped"))


def test_write_failure(make_zip, tmp_path):
    # Un archivo ocupa el lugar donde debería crearse un directorio
    archive = make_zip([("repo-main", b"file"), ("repo-main/child.txt", b"c")])

    with pytest.raises(ArchiveExtractionError):
        unzip(archive, str(tmp_path / "unzipped"))
