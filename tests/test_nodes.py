"""Tests for the node model and scalar classifier."""

from __future__ import annotations

import pytest

from blockconf.nodes import (
    Float,
    Int,
    List,
    Map,
    Nil,
    NodeKind,
    Str,
    TokenList,
    classify,
    destroy,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", Int(42)),
        ("-7", Int(-7)),
        ("+7", Int(7)),
        ("0x1f", Int(31)),
        ("-0X1F", Int(-31)),
        ("010", Int(8)),
        ("-017", Int(-15)),
        ("0", Int(0)),
        ("08", Str("08")),
        ("0b101", Str("0b101")),
        ("0o17", Str("0o17")),
        ("0x", Str("0x")),
        ("9223372036854775807", Int(2**63 - 1)),
        ("-9223372036854775808", Int(-2**63)),
        ("3.14", Float(3.14)),
        ("1.", Float(1.0)),
        (".5", Float(0.5)),
        ("-2.5e3", Float(-2500.0)),
        ("9223372036854775808", Str("9223372036854775808")),
        ("3abc", Str("3abc")),
        ("1e5", Str("1e5")),
        ("1.2.3", Str("1.2.3")),
        ("host.example.com", Str("host.example.com")),
        ("1_000", Str("1_000")),
        (" 12", Str(" 12")),
        ("", Str("")),
        ("localhost", Str("localhost")),
    ],
)
def test_classify(raw: str, expected) -> None:
    result = classify(raw)
    assert type(result) is type(expected)
    assert result == expected


def test_scalar_kinds_never_compare_equal() -> None:
    assert Int(1) != Str("1")
    assert Int(1) != Float(1.0)
    assert Nil() == Nil()
    assert Nil().kind is NodeKind.NIL


def test_token_list_must_not_be_empty() -> None:
    with pytest.raises(ValueError):
        TokenList([])


def test_token_list_behaves_like_a_sequence() -> None:
    tokens = TokenList(["a", "b c", "3"])

    assert tokens.kind is NodeKind.TOKENS
    assert len(tokens) == 3
    assert list(tokens) == ["a", "b c", "3"]
    assert tokens[1] == "b c"
    assert tokens.scalars() == [Str("a"), Str("b c"), Int(3)]


def test_map_overwrite_destroys_the_old_value() -> None:
    old = TokenList(["a"])
    mapping = Map({"x": old})

    mapping["x"] = TokenList(["b"])

    assert mapping["x"] == TokenList(["b"])
    assert old.tokens == []


def test_map_reassigning_the_same_node_keeps_it() -> None:
    node = TokenList(["a"])
    mapping = Map({"x": node})

    mapping["x"] = node

    assert mapping["x"].tokens == ["a"]


def test_map_rejects_non_nodes() -> None:
    with pytest.raises(TypeError):
        Map()["x"] = "plain string"


def test_map_delete_destroys_but_pop_transfers() -> None:
    deleted = Map({"a": TokenList(["1"])})
    popped = TokenList(["2"])
    mapping = Map({"gone": deleted, "kept": popped})

    del mapping["gone"]
    assert len(deleted) == 0

    assert mapping.pop("kept") is popped
    assert popped.tokens == ["2"]
    assert len(mapping) == 0


def test_map_supports_collaborator_operations() -> None:
    mapping = Map()
    mapping["a"] = TokenList(["1"])
    mapping["b"] = Map()

    assert "a" in mapping
    assert "z" not in mapping
    assert mapping.get("z") is None
    assert len(mapping) == 2
    assert sorted(mapping) == ["a", "b"]

    mapping.clear()
    assert len(mapping) == 0


def test_each_visits_every_entry_until_negative() -> None:
    mapping = Map({k: TokenList([k]) for k in "abcd"})
    seen = []

    def collect(key, node):
        seen.append((key, node.tokens[0]))
        return 1

    assert mapping.each(collect) == 0
    assert sorted(seen) == [(k, k) for k in "abcd"]

    visited = []

    def stop_at_second(key, node):
        visited.append(key)
        if len(visited) == 2:
            return -3
        return 0

    assert mapping.each(stop_at_second) == -3
    assert len(visited) == 2


def test_list_front_operations() -> None:
    first, second = Map(), Map({"x": TokenList(["1"])})
    nodes = List([first, second])

    assert nodes.kind is NodeKind.LIST
    assert nodes.peek() is first
    assert nodes.popleft() is first
    assert len(nodes) == 1
    assert nodes.peek() is second

    nodes.popleft()
    with pytest.raises(IndexError):
        nodes.peek()
    with pytest.raises(IndexError):
        nodes.popleft()


def test_list_reverse_and_pop_keep_elements_alive() -> None:
    a = Map({"a": TokenList(["1"])})
    b = Map({"b": TokenList(["2"])})
    nodes = List([a, b])

    nodes.reverse()
    assert list(nodes) == [b, a]
    assert nodes.pop() is a
    assert a["a"].tokens == ["1"]


def test_destroy_releases_the_whole_tree_and_is_idempotent() -> None:
    leaf = TokenList(["v"])
    inner = Map({"leaf": leaf})
    element = Map({"inner": inner})
    items = List([element])
    root = Map({"items": items, "empty": Map()})

    destroy(root)

    assert len(root) == 0
    assert len(items) == 0
    assert len(element) == 0
    assert len(inner) == 0
    assert leaf.tokens == []

    root.destroy()
    Map().destroy()


def test_destroy_handles_very_deep_trees() -> None:
    root = Map()
    node = root
    for _ in range(10_000):
        child = Map()
        node["k"] = child
        node = child

    root.destroy()

    assert len(root) == 0


def test_to_data() -> None:
    root = Map({
        "name": TokenList(["John Smith"]),
        "port": TokenList(["8080"]),
        "server": Map({"ratio": TokenList(["0.5", "x"])}),
        "users": List([Map({"id": TokenList(["1"])}), Map()]),
        "nothing": Nil(),
    })

    assert root.to_data() == {
        "name": ["John Smith"],
        "port": ["8080"],
        "server": {"ratio": ["0.5", "x"]},
        "users": [{"id": ["1"]}, {}],
        "nothing": None,
    }
    assert root.to_data(infer=True) == {
        "name": ["John Smith"],
        "port": [8080],
        "server": {"ratio": [0.5, "x"]},
        "users": [{"id": [1]}, {}],
        "nothing": None,
    }


def test_structural_equality() -> None:
    def build():
        return Map({
            "a": TokenList(["1"]),
            "b": List([Map({"c": TokenList(["2"])})]),
        })

    assert build() == build()
    other = build()
    other["b"][0]["c"] = TokenList(["3"])
    assert build() != other


def test_equality_compares_kinds_and_keys() -> None:
    assert Map({"a": Map()}) != Map({"a": List()})
    assert Map({"a": List([Map()])}) != Map({"a": List([Map(), Map()])})
    assert Map({"a": TokenList(["1"])}) != Map({"a": Int(1)})
    assert Map({"a": Nil()}) != Map({"b": Nil()})
    assert List([Map({"x": Nil()})]) == List([Map({"x": Nil()})])


def test_equality_handles_very_deep_trees() -> None:
    def chain(leaf: str) -> Map:
        root = Map()
        node = root
        for i in range(5000):
            child = Map()
            if i % 2:
                node["k"] = child
            else:
                node["k"] = List([child])
            node = child
        node["leaf"] = TokenList([leaf])
        return root

    a, b, c = chain("x"), chain("x"), chain("y")

    assert a == b
    assert a != c
    for tree in (a, b, c):
        tree.destroy()
