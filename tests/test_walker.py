"""Tests for the recursive directory walker."""

from __future__ import annotations

import logging
import os

import pytest

from endpoint_agent import walker
from endpoint_agent.config import DEFAULT_MAX_FILE_BYTES, ScanConfig
from endpoint_agent.errors import RootDirectoryError, UnknownAnnotationError
from endpoint_agent.walker import collect_controller_files, walk_controllers

needs_symlinks = pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")


def test_walk_finds_controllers_in_sorted_order(controller_tree):
    report = walk_controllers(controller_tree)
    assert [f.path for f in report.files] == [
        "src/main/java/com/example/shop/OrderController.java",
        "src/main/java/com/example/user/UserController.java",
    ]
    assert report.file_count == 2
    assert report.endpoint_count == 5
    assert report.warnings == []
    assert report.root == str(controller_tree)


def test_hidden_directory_is_skipped(tmp_path, write_file):
    write_file(".git/refs/OrderController.java", '@GetMapping("/x")\n')
    write_file(".idea/UserController.java", '@GetMapping("/y")\n')
    report = walk_controllers(tmp_path)
    assert report.files == []
    assert report.warnings == []


def test_controller_without_endpoints_still_reported(tmp_path, write_file):
    write_file("EmptyController.java", "public class EmptyController {}\n")
    report = walk_controllers(tmp_path)
    assert [(f.file_name, f.endpoints) for f in report.files] == [("EmptyController.java", [])]


def test_non_controller_files_are_silently_skipped(tmp_path, write_file):
    write_file("OrderService.java", '@GetMapping("/x")\n')
    write_file("OrderController.kt", '@GetMapping("/x")\n')
    report = walk_controllers(tmp_path)
    assert report.files == []
    assert report.warnings == []


def test_missing_root_is_fatal(tmp_path):
    with pytest.raises(RootDirectoryError):
        walk_controllers(tmp_path / "nope")


def test_file_root_is_fatal(write_file):
    p = write_file("OrderController.java", '@GetMapping("/x")\n')
    with pytest.raises(RootDirectoryError) as exc_info:
        walk_controllers(p)
    assert exc_info.value.reason == "not a directory"


def test_scan_is_idempotent(controller_tree):
    assert walk_controllers(controller_tree) == walk_controllers(controller_tree)


def test_oversize_file_is_warned_and_omitted(tmp_path, write_file):
    write_file("a/OrderController.java", '@GetMapping("/x")\n')
    huge = tmp_path / "b" / "HugeController.java"
    huge.parent.mkdir()
    with open(huge, "wb") as fh:
        fh.truncate(DEFAULT_MAX_FILE_BYTES + 1)

    report = walk_controllers(tmp_path)
    assert [f.file_name for f in report.files] == ["OrderController.java"]
    assert len(report.warnings) == 1
    assert report.warnings[0].path == "b/HugeController.java"
    assert "exceeds the buffer limit" in report.warnings[0].reason


def test_unknown_annotation_aborts_strict_walk(controller_tree, write_file):
    write_file("src/main/java/com/example/BadController.java", '@FooMapping("/x")\n')
    with pytest.raises(UnknownAnnotationError) as exc_info:
        walk_controllers(controller_tree)
    assert exc_info.value.name == "@FooMapping"


def test_unknown_annotation_lenient_walk_continues(controller_tree, write_file):
    write_file("src/main/java/com/example/BadController.java", '@FooMapping("/x")\n')
    report = walk_controllers(controller_tree, ScanConfig(strict=False))
    bad = [f for f in report.files if f.file_name == "BadController.java"][0]
    assert bad.endpoints == []
    assert bad.unrecognized[0].name == "@FooMapping"
    assert report.file_count == 3


def test_parallel_scan_matches_sequential(tmp_path, write_file):
    for i in range(12):
        write_file(f"pkg{i % 3}/Api{i:02d}Controller.java", f'@GetMapping("/api/{i}")\n@PostMapping("/api/{i}")\n')
    sequential = walk_controllers(tmp_path, ScanConfig(jobs=1))
    parallel = walk_controllers(tmp_path, ScanConfig(jobs=4))
    assert parallel == sequential
    assert sequential.endpoint_count == 24


def test_unreadable_subdirectory_is_warned(tmp_path, write_file, monkeypatch):
    write_file("locked/OrderController.java", '@GetMapping("/x")\n')
    write_file("open/UserController.java", '@GetMapping("/y")\n')
    real_list_dir = walker._list_dir

    def _list_dir(directory):
        if directory.name == "locked":
            raise PermissionError(13, "Permission denied")
        return real_list_dir(directory)

    monkeypatch.setattr(walker, "_list_dir", _list_dir)
    report = walk_controllers(tmp_path)
    assert [f.file_name for f in report.files] == ["UserController.java"]
    assert report.warnings[0].path == "locked"
    assert "could not read directory" in report.warnings[0].reason


@needs_symlinks
def test_directory_symlink_not_followed_by_default(tmp_path, write_file):
    write_file("shared/OrderController.java", '@GetMapping("/x")\n')
    os.symlink(tmp_path / "shared", tmp_path / "alias", target_is_directory=True)
    report = walk_controllers(tmp_path)
    assert [f.path for f in report.files] == ["shared/OrderController.java"]
    assert [w.path for w in report.warnings] == ["alias"]


@needs_symlinks
def test_follow_symlinks_visits_each_directory_once(tmp_path, write_file):
    write_file("a/OrderController.java", '@GetMapping("/x")\n')
    os.symlink(tmp_path, tmp_path / "a" / "loop", target_is_directory=True)
    report = walk_controllers(tmp_path, ScanConfig(follow_symlinks=True))
    assert [f.path for f in report.files] == ["a/OrderController.java"]
    assert [w.path for w in report.warnings] == ["a/loop"]
    assert "already visited" in report.warnings[0].reason


def test_collect_returns_paths_in_traversal_order(controller_tree):
    items = collect_controller_files(controller_tree)
    assert [p.name for p in items] == ["OrderController.java", "UserController.java"]


@needs_symlinks
def test_file_symlink_not_followed_by_default(tmp_path, write_file):
    outside = write_file("outside/Real.java", '@GetMapping("/leak")\n')
    root = tmp_path / "root"
    root.mkdir()
    os.symlink(outside, root / "LinkController.java")
    report = walk_controllers(root)
    assert report.files == []
    assert [(w.path, w.reason) for w in report.warnings] == [
        ("LinkController.java", "symbolic link to file not followed")
    ]


@needs_symlinks
def test_follow_symlinks_scans_each_file_once(tmp_path, write_file):
    real = write_file("a/OrderController.java", '@GetMapping("/x")\n')
    os.symlink(real, tmp_path / "a" / "AliasController.java")
    report = walk_controllers(tmp_path, ScanConfig(follow_symlinks=True))
    assert [f.path for f in report.files] == ["a/AliasController.java"]
    assert [w.path for w in report.warnings] == ["a/OrderController.java"]
    assert "already visited" in report.warnings[0].reason


def test_skips_are_not_logged_as_warnings(tmp_path, write_file, caplog):
    write_file("SmallController.java", '@GetMapping("/long-enough-path")\n')
    with caplog.at_level(logging.WARNING, logger="endpoint_agent"):
        report = walk_controllers(tmp_path, ScanConfig(max_file_bytes=10))
    assert len(report.warnings) == 1
    assert caplog.records == []
