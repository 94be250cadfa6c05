from __future__ import annotations

from codebase_indexer.index.delta import detect_index_delta, snapshot_hashes
from codebase_indexer.index.hashing import hash_content
from codebase_indexer.index.models import ProjectFile


def test_snapshot_skips_folders_and_empty_files() -> None:
    hashes = snapshot_hashes(
        [
            ProjectFile("src", "", kind="folder"),
            ProjectFile("src/empty.ts", ""),
            ProjectFile("src/a.ts", "a"),
        ]
    )
    assert hashes == {"src/a.ts": hash_content("a")}


def test_duplicate_path_keeps_last_content_and_position() -> None:
    hashes = snapshot_hashes(
        [ProjectFile("a.ts", "one"), ProjectFile("b.ts", "b"), ProjectFile("a.ts", "two")]
    )
    assert list(hashes) == ["b.ts", "a.ts"]
    assert hashes["a.ts"] == hash_content("two")


def test_delta_classifies_every_path() -> None:
    previous = {"keep.ts": "1", "edit.ts": "2", "gone.ts": "3"}
    current = {"new.ts": "9", "edit.ts": "8", "keep.ts": "1"}

    delta = detect_index_delta(previous, current)

    assert delta.added == ("new.ts",)
    assert delta.updated == ("edit.ts",)
    assert delta.unchanged == ("keep.ts",)
    assert delta.removed == ("gone.ts",)


def test_delta_against_empty_previous_marks_everything_added() -> None:
    delta = detect_index_delta({}, {"a.ts": "1", "b.ts": "2"})
    assert delta.added == ("a.ts", "b.ts")
    assert delta.updated == delta.unchanged == delta.removed == ()
