from __future__ import annotations

from codebase_indexer.index.hashing import hash_content


def test_hash_matches_known_fnv1a_vectors() -> None:
    assert hash_content("") == "811c9dc5"
    assert hash_content("a") == "e40c292c"
    assert hash_content("foobar") == "bf9cf968"


def test_hash_is_eight_lowercase_hex_digits() -> None:
    for text in ("", "x", "export const a = 1;\n", "ünïcödé ✓"):
        digest = hash_content(text)
        assert len(digest) == 8
        assert digest == digest.lower()
        int(digest, 16)


def test_hash_is_deterministic_and_order_sensitive() -> None:
    assert hash_content("abc") == hash_content("abc")
    assert hash_content("abc") != hash_content("cba")


def test_single_character_substitution_changes_hash() -> None:
    assert hash_content("abc") != hash_content("abd")
