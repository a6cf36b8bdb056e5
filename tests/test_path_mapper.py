"""Tests for local path to remote key mapping."""

import pytest

from csync.path_mapper import absolute_path, map_path, strip_prefix

CWD = "/Users/alice/Documents"
HOME = "/Users/alice"
PREFIX = "/Users/alice"


def test_empty_path_maps_current_directory():
    assert map_path("", CWD, HOME, PREFIX, "bucket") == "s3://bucket/Documents"


def test_empty_path_same_as_cwd():
    assert map_path("", CWD, HOME, PREFIX, "bucket") == map_path(
        CWD, CWD, HOME, PREFIX, "bucket"
    )


def test_home_relative_path():
    assert map_path("~/Photos", CWD, HOME, PREFIX, "bucket") == "s3://bucket/Photos"


def test_absolute_path_without_prefix_passes_through():
    # Prefix not found: the leading separator survives, giving a double slash
    assert map_path("/etc/hosts", CWD, HOME, PREFIX, "bucket") == "s3://bucket//etc/hosts"


def test_relative_path_joined_to_cwd():
    assert map_path("notes/todo.txt", CWD, HOME, PREFIX, "bucket") == (
        "s3://bucket/Documents/notes/todo.txt"
    )


@pytest.mark.parametrize("local_path", ["file.txt", "a/b/c", "dir/"])
def test_relative_path_without_prefix_match(local_path):
    cwd = "/srv/data"
    assert map_path(local_path, cwd, HOME, PREFIX, "bucket") == (
        "s3://bucket/" + cwd + "/" + local_path
    )


def test_custom_scheme():
    assert map_path("", CWD, HOME, PREFIX, "bucket", scheme="gs") == "gs://bucket/Documents"


def test_prefix_removed_only_once():
    full = "/data/x/data/y"
    assert strip_prefix(full, "/data") == "x/data/y"


def test_prefix_matching_mid_name_is_removed():
    # Unanchored removal: "alice" inside "malice" is stripped too
    assert strip_prefix("/home/malice/docs", "alice") == "/home/m/docs"
    assert map_path("/home/malice/docs", CWD, HOME, "alice", "bucket") == (
        "s3://bucket//home/m/docs"
    )


def test_prefix_equal_to_path_maps_bucket_root():
    assert map_path("", HOME, HOME, PREFIX, "bucket") == "s3://bucket/"


def test_tilde_user_is_not_expanded_to_other_home():
    assert absolute_path("~bob/file", CWD, HOME) == "/Users/alicebob/file"


def test_absolute_path_resolution():
    assert absolute_path("", CWD, HOME) == CWD
    assert absolute_path("~", CWD, HOME) == HOME
    assert absolute_path("/tmp/x", CWD, HOME) == "/tmp/x"
    assert absolute_path("../x", CWD, HOME) == CWD + "/../x"


def test_bucket_with_key_prefix():
    assert map_path("", CWD, HOME, PREFIX, "bucket/laptop") == "s3://bucket/laptop/Documents"
