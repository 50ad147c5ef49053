import shutil
import stat
import zipfile

import pytest


def _write_zip(path, entries):
    """
    entries: lista de (name, content, mode). content None = directorio.
    mode None deja el valor por defecto de zipfile.
    """
    with zipfile.ZipFile(path, "w") as zf:
        for name, content, mode in entries:
            info = zipfile.ZipInfo(name)
            if content is None:
                info.external_attr = ((mode or 0o755) | stat.S_IFDIR) << 16 | 0x10
                zf.writestr(info, b"")
            else:
                info.external_attr = ((mode or 0o644) | stat.S_IFREG) << 16
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, content)
    return str(path)


@pytest.fixture
def make_zip(tmp_path):
    """Factory: make_zip([(name, content, mode), ...], filename="archive.zip") -> ruta."""
    def _make(entries, filename="archive.zip"):
        return _write_zip(tmp_path / filename, [
            entry if len(entry) == 3 else (entry[0], entry[1], None) for entry in entries
        ])
    return _make


@pytest.fixture
def sample_repo_zip(make_zip):
    return make_zip([
        ("repo-main/", None),
        ("repo-main/README.md", b"# repo\n"),
        ("repo-main/src/", None),
        ("repo-main/src/main.go", b"package main\n"),
    ])


@pytest.fixture
def fake_download(monkeypatch):
    """
    Reemplaza la descarga del handler por una copia local del zip indicado.

    Uso:
        calls = fake_download(source_path)
        ...
        calls -> [(url, dest), ...]
    """
    def _install(source_path):
        calls = []

        def _download(url, dest):
            calls.append((url, dest))
            shutil.copyfile(source_path, dest)
            return dest

        monkeypatch.setattr("app.handlers.tree_handler.download_file", _download)
        return calls

    return _install


@pytest.fixture
def forbidden_download(monkeypatch):
    """Falla el test si el handler intenta descargar algo."""
    calls = []

    def _download(url, dest):
        calls.append((url, dest))
        raise AssertionError(f"unexpected download of {url}")

    monkeypatch.setattr("app.handlers.tree_handler.download_file", _download)
    return calls


@pytest.fixture
def scratch_root(tmp_path, monkeypatch):
    """Redirige tempfile a un directorio propio para verificar la limpieza."""
    root = tmp_path / "scratch"
    root.mkdir()
    monkeypatch.setattr("tempfile.tempdir", str(root))
    return root
