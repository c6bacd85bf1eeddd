import pytest

from vaultgraph.paths import (
    candidate_file_paths,
    file_path_to_object_id,
    normalize_dir_root,
    object_id_to_file_path,
    relative_vault_path,
)


def test_normalize_dir_root():
    assert normalize_dir_root("/objects/") == "objects/"
    assert normalize_dir_root("objects") == "objects/"
    assert normalize_dir_root("objects//") == "objects/"
    assert normalize_dir_root("") == ""
    assert normalize_dir_root("/") == ""
    assert normalize_dir_root(None) == ""
    assert normalize_dir_root("a\\b") == "a/b/"


def test_file_path_to_object_id_strips_roots():
    assert file_path_to_object_id("objects/people/freya.md", "objects/", "pages/") == "people/freya"
    assert file_path_to_object_id("pages/my-note.md", "objects/", "pages/") == "my-note"
    assert file_path_to_object_id("daily/2025-01-01.md", "objects/", "pages/") == "daily/2025-01-01"
    assert file_path_to_object_id("people/freya.md") == "people/freya"


def test_file_path_to_object_id_normalizes_separators():
    assert file_path_to_object_id("objects\\people\\freya.md", "objects", "pages") == "people/freya"
    assert file_path_to_object_id("./notes//idea.md") == "notes/idea"
    assert file_path_to_object_id("/notes/idea.md") == "notes/idea"


def test_object_id_to_file_path_uses_type_to_pick_root():
    assert object_id_to_file_path("my-note", "page", "objects/", "pages/") == "pages/my-note.md"
    assert object_id_to_file_path("my-note", "", "objects/", "pages/") == "pages/my-note.md"
    assert object_id_to_file_path("people/freya", "person", "objects/", "pages/") == "objects/people/freya.md"
    # No pages root: untyped pages fall back to the objects root.
    assert object_id_to_file_path("my-note", "page", "objects/", "") == "objects/my-note.md"
    assert object_id_to_file_path("my-note", "page") == "my-note.md"


def test_object_id_to_file_path_keeps_rooted_ids():
    assert object_id_to_file_path("objects/people/freya", "person", "objects/", "pages/") == "objects/people/freya.md"
    assert object_id_to_file_path("pages/x", "person", "objects/", "pages/") == "pages/x.md"


@pytest.mark.parametrize("objects_root,pages_root", [("objects/", "pages/"), ("", "pages/"), ("objects/", ""), ("", "")])
@pytest.mark.parametrize("type_name", ["", "page", "person"])
@pytest.mark.parametrize("object_id", ["my-note", "people/freya", "daily/2025-01-01"])
def test_path_id_round_trip(object_id, type_name, objects_root, pages_root):
    path = object_id_to_file_path(object_id, type_name, objects_root, pages_root)
    assert file_path_to_object_id(path, objects_root, pages_root) == object_id


def test_candidate_file_paths_literal_first_and_deduplicated():
    assert candidate_file_paths("people/freya", "objects/", "pages/") == [
        "people/freya.md",
        "objects/people/freya.md",
        "pages/people/freya.md",
    ]
    assert candidate_file_paths("objects/people/freya.md", "objects/", "pages/") == [
        "objects/people/freya.md",
        "pages/objects/people/freya.md",
    ]
    assert candidate_file_paths("note", "same/", "same/") == ["note.md", "same/note.md"]
    assert candidate_file_paths("note") == ["note.md"]


def test_relative_vault_path():
    assert relative_vault_path("/vault/people/freya.md", "/vault") == "people/freya.md"
    assert relative_vault_path("/vault/people/freya.md", "/vault/") == "people/freya.md"
    assert relative_vault_path("people/freya.md", "") == "people/freya.md"
    assert relative_vault_path("/elsewhere/x.md", "/vault") == "/elsewhere/x.md"
