import math

import pytest

from sable.printer import display_string, format_number, profile, profile_args, write_string
from sable.types.datum import copy_datum, eq, equal, is_true, type_name
from sable.types.nil import Nil, NilType, Void, VoidType
from sable.types.pair import Pair, is_circular, is_list, list_items, make_list, split_list
from sable.types.symbol import Symbol


def test_nil_and_void_are_singletons():
    assert NilType() is Nil
    assert VoidType() is Void
    assert Nil is not Void


def test_symbols_compare_by_name():
    assert Symbol("abc") == Symbol("abc")
    assert Symbol("abc") != Symbol("abd")
    assert Symbol("abc") != "abc"
    assert len({Symbol("x"), Symbol("x")}) == 1


@pytest.mark.parametrize("value", [Nil, 0.0, "", Void, Symbol("nil"), True, make_list([False])])
def test_everything_but_false_is_true(value):
    assert is_true(value)


def test_false_is_false():
    assert not is_true(False)


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (1.0, 1.0, True),
        (1.0, 2.0, False),
        ("ab", "ab", True),
        (Symbol("a"), Symbol("a"), True),
        (True, True, True),
        (True, 1.0, False),
        (False, 0.0, False),
        (Nil, Nil, True),
        ("a", Symbol("a"), False),
    ],
)
def test_eq_atoms(a, b, expected):
    assert eq(a, b) is expected


def test_eq_pairs_by_identity():
    cell = Pair(1.0, Nil)
    assert eq(cell, cell)
    assert not eq(cell, Pair(1.0, Nil))


def test_equal_is_structural():
    a = make_list([1.0, make_list(["x", Symbol("y")]), Nil])
    b = make_list([1.0, make_list(["x", Symbol("y")]), Nil])
    assert equal(a, b)
    assert not equal(a, make_list([1.0, make_list(["x", Symbol("z")]), Nil]))
    assert not equal(make_list([1.0]), make_list([1.0, 2.0]))
    assert equal(Pair(1.0, 2.0), Pair(1.0, 2.0))


def test_equal_terminates_on_cycles():
    a = make_list([1.0, 2.0])
    a.cdr.cdr = a
    b = make_list([1.0, 2.0])
    b.cdr.cdr = b
    assert equal(a, b)

    c = make_list([1.0, 3.0])
    c.cdr.cdr = c
    assert not equal(a, c)


def test_equal_handles_long_lists():
    n = 50_000
    assert equal(make_list([1.0] * n), make_list([1.0] * n))


@pytest.mark.parametrize(
    "value,text",
    [
        (3.0, "3"),
        (-0.0, "0"),
        (2.5, "2.5"),
        (-0.125, "-0.125"),
        (1e20, "1e+20"),
        (math.inf, "+inf.0"),
        (-math.inf, "-inf.0"),
        (math.nan, "+nan.0"),
    ],
)
def test_format_number(value, text):
    assert format_number(value) == text


@pytest.mark.parametrize(
    "value,written,displayed",
    [
        (True, "#t", "#t"),
        (False, "#f", "#f"),
        (Nil, "()", "()"),
        (Void, "", ""),
        (Symbol("foo"), "foo", "foo"),
        ('say "hi"\n', '"say \\"hi\\"\\n"', 'say "hi"\n'),
        ("a\\b", '"a\\\\b"', "a\\b"),
        (make_list([1.0, "s", Symbol("q")]), '(1 "s" q)', "(1 s q)"),
        (Pair(1.0, 2.0), "(1 . 2)", "(1 . 2)"),
        (make_list([1.0, 2.0], 3.0), "(1 2 . 3)", "(1 2 . 3)"),
        (make_list([Nil, make_list([Nil])]), "(() (()))", "(() (()))"),
    ],
)
def test_write_and_display(value, written, displayed):
    assert write_string(value) == written
    assert display_string(value) == displayed


def test_print_cyclic_cdr():
    x = make_list([1.0, 2.0])
    x.cdr.cdr = x
    assert write_string(x) == "(1 2 . ...)"


def test_print_cyclic_car():
    x = Pair(Nil, Nil)
    x.car = x
    assert write_string(x) == "(...)"


def test_shared_structure_is_not_a_cycle():
    shared = make_list([1.0])
    assert write_string(make_list([shared, shared])) == "((1) (1))"


def test_profile():
    assert profile(5.0) == '5 of type "number"'
    assert profile("a") == '"a" of type "string"'
    assert profile(make_list([1.0])) == '(1) of type "pair"'
    assert profile_args([]) == "no args"
    assert profile_args([1.0, Nil]) == '1 of type "number", () of type "nil"'


@pytest.mark.parametrize(
    "value,name",
    [
        (1.0, "number"),
        ("s", "string"),
        (True, "boolean"),
        (Symbol("s"), "symbol"),
        (Nil, "nil"),
        (Void, "void"),
        (Pair(1.0, 2.0), "pair"),
    ],
)
def test_type_name(value, name):
    assert type_name(value) == name


def test_copy_datum_makes_fresh_cells():
    original = make_list([1.0, make_list([2.0]), "s"])
    copy = copy_datum(original)
    assert copy is not original
    assert copy.cdr.car is not original.cdr.car
    assert equal(copy, original)
    copy.cdr.car.car = 9.0
    assert original.cdr.car.car == 2.0


def test_copy_datum_preserves_sharing():
    shared = make_list([1.0])
    original = make_list([shared, shared])
    copy = copy_datum(original)
    assert copy.car is copy.cdr.car
    assert copy.car is not shared


def test_copy_datum_preserves_cycles():
    x = make_list([1.0, 2.0])
    x.cdr.cdr = x
    copy = copy_datum(x)
    assert copy is not x
    assert copy.cdr.cdr is copy


def test_copy_datum_returns_atoms_unchanged():
    for atom in (1.0, "s", Symbol("a"), Nil, True):
        assert copy_datum(atom) is atom


def test_list_walkers():
    proper = make_list([1.0, 2.0, 3.0])
    dotted = make_list([1.0, 2.0], 3.0)
    circular = make_list([1.0, 2.0, 3.0])
    circular.cdr.cdr.cdr = circular.cdr

    assert list_items(proper) == [1.0, 2.0, 3.0]
    assert list_items(Nil) == []
    assert list_items(dotted) is None
    assert list_items(circular) is None
    assert split_list(dotted) == ([1.0, 2.0], 3.0)
    assert split_list(circular) is None
    assert is_list(proper) and not is_list(5.0)
    assert is_circular(circular)
    assert not is_circular(proper)
    assert not is_circular(dotted)
