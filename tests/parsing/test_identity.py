from __future__ import annotations

from clipkit.parsing.identity import generate_clipping_id, generate_duplicate_hash


def test_clipping_id_is_stable_and_normalized() -> None:
    first = generate_clipping_id("Dune", "10-12", "highlight", "Fear is the mind-killer.")
    second = generate_clipping_id("  dune ", " 10-12 ", "highlight", "fear is the mind-killer.")

    assert first == second
    assert len(first) == 12
    assert all(char in "0123456789abcdef" for char in first)


def test_clipping_id_depends_on_type_and_location() -> None:
    base = generate_clipping_id("Dune", "10", "highlight", "text")

    assert base != generate_clipping_id("Dune", "10", "note", "text")
    assert base != generate_clipping_id("Dune", "11", "highlight", "text")


def test_duplicate_hash_uses_full_content_while_id_uses_prefix() -> None:
    prefix = "x" * 50
    left = prefix + " ending one"
    right = prefix + " ending two"

    assert generate_clipping_id("Book", "1", "highlight", left) == generate_clipping_id("Book", "1", "highlight", right)
    assert generate_duplicate_hash("Book", "1", left) != generate_duplicate_hash("Book", "1", right)
    assert generate_duplicate_hash("Book", "1", left) == generate_duplicate_hash("BOOK", "1", left.upper())
