"""Integration tests for the portable `File` handle on the real file system.

Each test works inside pytest's ``tmp_path``. Symbolic-link tests are skipped
where the platform refuses to create links.
"""

from __future__ import annotations

import io
import os
import stat
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

from synapps.adapters.filesystem import File, WriteFlag
from synapps.adapters.filesystem import file as file_module
from synapps.domain.errors import AlreadyExistsError, IOFailureError, NotFoundError

# pylint: disable=unused-argument

# ============================================================================
#                              Helpers
# ============================================================================


def make_file(path: Path, content: bytes = b"") -> File:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return File(path)


def path_of(path: Path) -> str:
    return File(path).get_path()


# ============================================================================
#                              Creation / existence / deletion
# ============================================================================


def test_create_exists_delete_cycle(tmp_path: Path):
    file = File(tmp_path / "new.txt")
    assert not file.exists()

    file.create()
    assert file.exists()
    assert file.is_file()
    assert not file.is_directory()
    assert file.get_size() == 0

    assert file.delete() is True
    assert not file.exists()
    assert file.delete() is False


def test_create_rejects_existing_entry(tmp_path: Path):
    file = make_file(tmp_path / "taken.txt")
    with pytest.raises(AlreadyExistsError):
        file.create()


def test_create_in_missing_directory_fails(tmp_path: Path):
    with pytest.raises(IOFailureError) as exc_info:
        File(tmp_path / "missing" / "new.txt").create()
    assert not isinstance(exc_info.value, AlreadyExistsError)


def test_create_directory(tmp_path: Path):
    directory = File(tmp_path / "dir")
    assert directory.create_directory() is True
    assert directory.is_directory()
    assert directory.create_directory() is False


def test_create_directory_over_a_file_fails(tmp_path: Path):
    file = make_file(tmp_path / "plain")
    with pytest.raises(AlreadyExistsError):
        file.create_directory()


def test_create_nested_directory_requires_recursive(tmp_path: Path):
    nested = File(tmp_path / "a" / "b" / "c")
    with pytest.raises(IOFailureError):
        nested.create_directory()
    assert nested.create_directory(recursive=True) is True
    assert nested.is_directory()


def test_delete_non_empty_directory(tmp_path: Path):
    make_file(tmp_path / "tree" / "sub" / "leaf.txt", b"leaf")
    make_file(tmp_path / "tree" / "top.txt", b"top")
    tree = File(tmp_path / "tree")

    with pytest.raises(IOFailureError):
        tree.delete()
    assert tree.exists()

    assert tree.delete(recursive=True) is True
    assert not tree.exists()


# ============================================================================
#                              Content and metadata
# ============================================================================


def test_content_round_trip_and_append(tmp_path: Path):
    file = File(tmp_path / "content.txt")
    assert file.set_content("héllo") == 6
    assert file.set_content(b"!", WriteFlag.APPEND) == 1
    assert file.get_content() == "héllo!".encode("utf-8")
    assert file.get_size() == 7

    file.set_content(b"reset")
    assert file.get_content() == b"reset"


def test_read_copies_to_stream(tmp_path: Path):
    file = make_file(tmp_path / "data.bin", b"\x00\x01payload")
    sink = io.BytesIO()
    assert file.read(sink) == 9
    assert sink.getvalue() == b"\x00\x01payload"


def test_content_errors(tmp_path: Path):
    with pytest.raises(IOFailureError):
        File(tmp_path / "missing").get_content()
    with pytest.raises(IOFailureError):
        File(tmp_path / "missing" / "x").set_content(b"x")
    with pytest.raises(IOFailureError):
        File(tmp_path).get_size()


def test_touch_updates_modification_date(tmp_path: Path):
    file = make_file(tmp_path / "old.txt")
    os.utime(file.get_os_path(), (946684800, 946684800))  # 2000-01-01
    assert file.get_last_modified_date() == datetime(2000, 1, 1, tzinfo=timezone.utc)

    file.touch()
    assert file.get_last_modified_date().year > 2000


def test_touch_does_not_create(tmp_path: Path):
    file = File(tmp_path / "ghost.txt")
    with pytest.raises(NotFoundError):
        file.touch()
    assert not file.exists()


def test_last_modified_date_of_missing_file(tmp_path: Path):
    with pytest.raises(IOFailureError):
        File(tmp_path / "missing").get_last_modified_date()


def test_real_path_resolves_dot_segments(tmp_path: Path):
    make_file(tmp_path / "d" / "f.txt")
    file = File(tmp_path / "d" / ".." / "d" / "f.txt")
    assert file.get_real_path() == path_of(Path(os.path.realpath(tmp_path / "d" / "f.txt")))


def test_real_path_of_missing_file(tmp_path: Path):
    with pytest.raises(NotFoundError):
        File(tmp_path / "missing").get_real_path()


def test_is_writable(tmp_path: Path):
    assert make_file(tmp_path / "w.txt").is_writable()
    assert not File(tmp_path / "missing").is_writable()


@pytest.mark.skipif(sys.platform.startswith("win"), reason="no permission bits")
def test_set_permissions(tmp_path: Path):
    file = make_file(tmp_path / "secret.txt")
    file.set_permissions(0o600)
    assert stat.S_IMODE(os.stat(file.get_os_path()).st_mode) == 0o600


@pytest.mark.skipif(sys.platform.startswith("win"), reason="no permission bits")
def test_set_permissions_is_ignored_for_windows_family(tmp_path: Path, windows_host):
    path = tmp_path / "kept.txt"
    make_file(path)
    path.chmod(0o644)
    File(path, windows_host).set_permissions(0o600)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644


# ============================================================================
#                              Listing
# ============================================================================


def test_list_file_paths(tmp_path: Path):
    make_file(tmp_path / "b.html")
    make_file(tmp_path / "a.txt")
    (tmp_path / "sub").mkdir()
    base = path_of(tmp_path)

    assert File(tmp_path).list_file_paths() == [
        f"{base}/a.txt",
        f"{base}/b.html",
        f"{base}/sub",
    ]
    assert File(tmp_path).list_file_paths(r".*\.txt") == [f"{base}/a.txt"]
    # the pattern must match the whole name
    assert File(tmp_path).list_file_paths("a") == []


@pytest.mark.skipif(sys.platform.startswith("win"), reason="drive roots differ on Windows")
def test_root_directory(linux_host):
    root = File("/", linux_host)
    assert root.get_path() == "/"
    assert root.exists()
    assert root.is_directory()
    paths = root.list_file_paths()
    assert paths
    assert all(path.startswith("/") and not path.startswith("//") for path in paths)


def test_list_file_paths_of_non_directory(tmp_path: Path):
    with pytest.raises(IOFailureError):
        make_file(tmp_path / "f").list_file_paths()
    with pytest.raises(IOFailureError):
        File(tmp_path / "missing").list_file_paths()


# ============================================================================
#                              Copy
# ============================================================================


def test_copy_file(tmp_path: Path):
    source = make_file(tmp_path / "src.txt", b"payload")
    source.copy(tmp_path / "dst.txt")
    assert (tmp_path / "dst.txt").read_bytes() == b"payload"
    assert source.exists()


def test_copy_requires_destination_parent(tmp_path: Path):
    source = make_file(tmp_path / "src.txt")
    with pytest.raises(NotFoundError):
        source.copy(tmp_path / "missing" / "dst.txt")


def test_copy_onto_itself_ignoring_case_is_rejected(tmp_path: Path):
    source = make_file(tmp_path / "Name.txt")
    with pytest.raises(AlreadyExistsError):
        source.copy(tmp_path / "name.TXT")
    with pytest.raises(AlreadyExistsError):
        source.copy(source)


def test_copy_directory_tree(tmp_path: Path):
    make_file(tmp_path / "src" / "top.txt", b"top")
    make_file(tmp_path / "src" / "sub" / "deep" / "leaf.bin", b"\x00leaf")
    (tmp_path / "src" / "empty").mkdir()

    File(tmp_path / "src").copy(tmp_path / "dst")

    assert (tmp_path / "dst" / "top.txt").read_bytes() == b"top"
    assert (tmp_path / "dst" / "sub" / "deep" / "leaf.bin").read_bytes() == b"\x00leaf"
    assert (tmp_path / "dst" / "empty").is_dir()


def test_copy_directory_into_its_own_child(tmp_path: Path):
    make_file(tmp_path / "src" / "top.txt", b"top")
    make_file(tmp_path / "src" / "sub" / "leaf.txt", b"leaf")

    File(tmp_path / "src").copy(tmp_path / "src" / "copy")

    copy = tmp_path / "src" / "copy"
    assert (copy / "top.txt").read_bytes() == b"top"
    assert (copy / "sub" / "leaf.txt").read_bytes() == b"leaf"
    assert not (copy / "copy").exists()


def test_copy_directory_deeper_into_its_own_tree(tmp_path: Path):
    make_file(tmp_path / "src" / "sub" / "leaf.txt", b"leaf")

    File(tmp_path / "src").copy(tmp_path / "src" / "sub" / "inner")

    inner = tmp_path / "src" / "sub" / "inner"
    assert (inner / "sub" / "leaf.txt").read_bytes() == b"leaf"
    assert not (inner / "sub" / "inner").exists()


def test_copy_tree_with_symbolic_links(tmp_path: Path, symlinks_supported):
    make_file(tmp_path / "src" / "file.txt", b"content")
    make_file(tmp_path / "src" / "sub" / "inner.txt", b"inner")
    File(tmp_path / "src" / "link_file").create_symbolic_link(tmp_path / "src" / "file.txt")
    File(tmp_path / "src" / "link_dir").create_symbolic_link(tmp_path / "src" / "sub")

    File(tmp_path / "src").copy(tmp_path / "dst")

    link_file = tmp_path / "dst" / "link_file"
    assert link_file.is_symlink()
    assert link_file.read_bytes() == b"content"

    link_dir = tmp_path / "dst" / "link_dir"
    assert link_dir.is_dir()
    assert not link_dir.is_symlink()
    assert (link_dir / "inner.txt").read_bytes() == b"inner"


# ============================================================================
#                              Rename
# ============================================================================


def test_rename(tmp_path: Path):
    source = make_file(tmp_path / "a.txt", b"a")
    source.rename(tmp_path / "b.txt")
    assert not source.exists()
    assert (tmp_path / "b.txt").read_bytes() == b"a"


def test_rename_onto_existing_entry_is_rejected(tmp_path: Path):
    source = make_file(tmp_path / "a.txt")
    make_file(tmp_path / "b.txt")
    with pytest.raises(AlreadyExistsError):
        source.rename(tmp_path / "b.txt")


def test_rename_changing_case_only(tmp_path: Path):
    make_file(tmp_path / "Name", b"x").rename(tmp_path / "name")
    assert os.listdir(tmp_path) == ["name"]


def test_rename_missing_source_fails(tmp_path: Path):
    with pytest.raises(IOFailureError):
        File(tmp_path / "missing").rename(tmp_path / "other")


# ============================================================================
#                              Symbolic links
# ============================================================================


def test_create_symbolic_link(tmp_path: Path, symlinks_supported):
    target = make_file(tmp_path / "target.txt", b"t")
    link = File(tmp_path / "link")
    link.create_symbolic_link(target)

    assert link.is_symbolic_link()
    assert link.is_file()
    assert link.get_content() == b"t"
    assert link.get_real_path() == target.get_real_path()


def test_create_symbolic_link_errors(tmp_path: Path, symlinks_supported):
    make_file(tmp_path / "existing")
    with pytest.raises(NotFoundError):
        File(tmp_path / "link").create_symbolic_link(tmp_path / "missing")
    with pytest.raises(AlreadyExistsError):
        File(tmp_path / "existing").create_symbolic_link(tmp_path / "existing")


def test_dangling_link_exists_but_has_no_real_path(tmp_path: Path, symlinks_supported):
    target = make_file(tmp_path / "target.txt")
    link = File(tmp_path / "link")
    link.create_symbolic_link(target)
    target.delete()

    assert link.exists()
    assert link.is_symbolic_link()
    assert not link.is_file()
    with pytest.raises(NotFoundError):
        link.get_real_path()
    assert link.delete() is True
    assert not link.exists()


def test_recursive_delete_never_follows_links(tmp_path: Path, symlinks_supported):
    keep = make_file(tmp_path / "outside" / "keep.txt", b"keep")
    make_file(tmp_path / "tree" / "own.txt")
    File(tmp_path / "tree" / "to_outside").create_symbolic_link(tmp_path / "outside")

    assert File(tmp_path / "tree").delete(recursive=True) is True

    assert not (tmp_path / "tree").exists()
    assert keep.get_content() == b"keep"


def test_deleting_a_link_to_a_directory_keeps_the_directory(tmp_path: Path, symlinks_supported):
    make_file(tmp_path / "dir" / "f.txt")
    link = File(tmp_path / "link")
    link.create_symbolic_link(tmp_path / "dir")

    assert link.delete(recursive=True) is True
    assert (tmp_path / "dir" / "f.txt").exists()


# ============================================================================
#                      Windows-family link deletion strategy
# ============================================================================


@pytest.mark.skipif(sys.platform.startswith("win"), reason="simulates the Windows family elsewhere")
def test_windows_family_link_deletion_falls_back(tmp_path, symlinks_supported, windows_host, monkeypatch):
    make_file(tmp_path / "target.txt")
    os.symlink(tmp_path / "target.txt", tmp_path / "link")
    real_unlink = os.unlink
    calls: list[str] = []

    def unlink(path):
        calls.append("unlink")
        raise PermissionError(path)

    def rmdir(path):
        calls.append("rmdir")
        real_unlink(path)

    monkeypatch.setattr(file_module.os, "unlink", unlink)
    monkeypatch.setattr(file_module.os, "rmdir", rmdir)

    assert File(tmp_path / "link", windows_host).delete() is True
    monkeypatch.undo()

    assert calls == ["unlink", "rmdir"]
    assert not os.path.lexists(tmp_path / "link")


@pytest.mark.skipif(sys.platform.startswith("win"), reason="simulates the Windows family elsewhere")
def test_windows_family_link_deletion_failure(tmp_path, symlinks_supported, windows_host, monkeypatch):
    make_file(tmp_path / "target.txt")
    os.symlink(tmp_path / "target.txt", tmp_path / "link")

    def refuse(path):
        raise PermissionError(path)

    monkeypatch.setattr(file_module.os, "unlink", refuse)
    monkeypatch.setattr(file_module.os, "rmdir", refuse)

    with pytest.raises(IOFailureError):
        File(tmp_path / "link", windows_host).delete()
    monkeypatch.undo()
    assert os.path.lexists(tmp_path / "link")


@pytest.mark.skipif(sys.platform.startswith("win"), reason="simulates the Windows family elsewhere")
def test_other_hosts_never_retry_link_deletion(tmp_path, symlinks_supported, linux_host, monkeypatch):
    make_file(tmp_path / "target.txt")
    os.symlink(tmp_path / "target.txt", tmp_path / "link")
    calls: list[str] = []

    def unlink(path):
        calls.append("unlink")
        raise PermissionError(path)

    def rmdir(path):  # pragma: no cover - must not be reached
        calls.append("rmdir")

    monkeypatch.setattr(file_module.os, "unlink", unlink)
    monkeypatch.setattr(file_module.os, "rmdir", rmdir)

    with pytest.raises(IOFailureError):
        File(tmp_path / "link", linux_host).delete()
    monkeypatch.undo()
    assert calls == ["unlink"]


class _LinkStat:
    """`os.lstat` result carrying Windows file attributes."""

    def __init__(self, result: os.stat_result, attributes: int) -> None:
        self._result = result
        self.st_file_attributes = attributes

    def __getattr__(self, name):
        return getattr(self._result, name)


def _flag_links_as_directories(monkeypatch) -> None:
    real_lstat = os.lstat
    monkeypatch.setattr(
        file_module.os,
        "lstat",
        lambda path, *args, **kwargs: _LinkStat(
            real_lstat(path, *args, **kwargs), stat.FILE_ATTRIBUTE_DIRECTORY
        ),
    )


def _recording_primitives(monkeypatch, calls: list[str], failing: str | None = None) -> None:
    real_unlink = os.unlink

    def primitive(name):
        def remove(path):
            calls.append(name)
            if name == failing:
                raise PermissionError(path)
            real_unlink(path)

        return remove

    monkeypatch.setattr(file_module.os, "unlink", primitive("unlink"))
    monkeypatch.setattr(file_module.os, "rmdir", primitive("rmdir"))


@pytest.mark.skipif(sys.platform.startswith("win"), reason="simulates the Windows family elsewhere")
def test_windows_family_removes_directory_links_with_rmdir(
    tmp_path, symlinks_supported, windows_host, monkeypatch
):
    (tmp_path / "target").mkdir()
    os.symlink(tmp_path / "target", tmp_path / "link", target_is_directory=True)
    calls: list[str] = []
    _flag_links_as_directories(monkeypatch)
    _recording_primitives(monkeypatch, calls)

    assert File(tmp_path / "link", windows_host).delete() is True
    monkeypatch.undo()

    assert calls == ["rmdir"]
    assert not os.path.lexists(tmp_path / "link")
    assert (tmp_path / "target").is_dir()


@pytest.mark.skipif(sys.platform.startswith("win"), reason="simulates the Windows family elsewhere")
def test_windows_family_directory_link_falls_back_to_unlink(
    tmp_path, symlinks_supported, windows_host, monkeypatch
):
    (tmp_path / "target").mkdir()
    os.symlink(tmp_path / "target", tmp_path / "link", target_is_directory=True)
    calls: list[str] = []
    _flag_links_as_directories(monkeypatch)
    _recording_primitives(monkeypatch, calls, failing="rmdir")

    assert File(tmp_path / "link", windows_host).delete() is True
    monkeypatch.undo()

    assert calls == ["rmdir", "unlink"]
    assert not os.path.lexists(tmp_path / "link")


@pytest.mark.skipif(sys.platform.startswith("win"), reason="simulates the Windows family elsewhere")
def test_windows_family_removes_dangling_directory_links(
    tmp_path, symlinks_supported, windows_host, monkeypatch
):
    (tmp_path / "target").mkdir()
    os.symlink(tmp_path / "target", tmp_path / "link", target_is_directory=True)
    (tmp_path / "target").rmdir()
    calls: list[str] = []
    _flag_links_as_directories(monkeypatch)
    _recording_primitives(monkeypatch, calls)

    assert File(tmp_path / "link", windows_host).delete() is True
    monkeypatch.undo()

    assert calls == ["rmdir"]
    assert not os.path.lexists(tmp_path / "link")
