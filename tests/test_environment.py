import pytest

from sable.errors import SableTypeError, UnboundVariable
from sable.types.environment import Environment
from sable.types.macro import Macro
from sable.types.procedure import ANONYMOUS, CompoundProcedure, PrimitiveProcedure
from sable.types.symbol import Symbol


@pytest.fixture
def global_env():
    return Environment()


def test_define_and_lookup(global_env):
    global_env.define(Symbol("x"), 1.0)
    assert global_env.lookup(Symbol("x")) == 1.0
    assert global_env.is_bound(Symbol("x"))
    assert not global_env.is_bound(Symbol("y"))


def test_lookup_unbound_raises(global_env):
    with pytest.raises(UnboundVariable) as excinfo:
        global_env.lookup(Symbol("missing"))
    assert excinfo.value.name == Symbol("missing")
    assert "missing" in str(excinfo.value)


def test_define_requires_symbol(global_env):
    with pytest.raises(SableTypeError):
        global_env.define("x", 1.0)


def test_inner_define_shadows_outer(global_env):
    inner = Environment(outer=global_env)
    global_env.define(Symbol("x"), 1.0)
    inner.define(Symbol("x"), 2.0)
    assert inner.lookup(Symbol("x")) == 2.0
    assert global_env.lookup(Symbol("x")) == 1.0


def test_lookup_walks_outward(global_env):
    global_env.define(Symbol("x"), 1.0)
    inner = Environment(outer=Environment(outer=global_env))
    assert inner.lookup(Symbol("x")) == 1.0
    assert inner.find(Symbol("x")) is global_env
    assert inner.root() is global_env


def test_set_updates_nearest_binding(global_env):
    global_env.define(Symbol("x"), 1.0)
    inner = Environment(outer=global_env)
    inner.set(Symbol("x"), 5.0)
    assert global_env.lookup(Symbol("x")) == 5.0
    assert Symbol("x") not in inner.vars


def test_set_unbound_raises(global_env):
    with pytest.raises(UnboundVariable):
        global_env.set(Symbol("nope"), 1.0)


def test_redefine_replaces_value(global_env):
    global_env.define(Symbol("x"), 1.0)
    global_env.define(Symbol("x"), 2.0)
    assert global_env.lookup(Symbol("x")) == 2.0


def test_update_binds_many(global_env):
    global_env.update({Symbol("a"): 1.0, Symbol("b"): 2.0})
    assert global_env.lookup(Symbol("b")) == 2.0


def test_define_names_anonymous_procedure(global_env):
    proc = CompoundProcedure([], 1.0, global_env)
    assert proc.name == ANONYMOUS
    global_env.define(Symbol("f"), proc)
    assert proc.name == "f"
    global_env.define(Symbol("g"), proc)
    assert proc.name == "f"


def test_set_names_anonymous_procedure(global_env):
    global_env.define(Symbol("h"), 0.0)
    proc = CompoundProcedure([], 1.0, global_env)
    global_env.set(Symbol("h"), proc)
    assert str(proc) == "#<procedure h>"


def test_define_names_macro_and_transformer(global_env):
    macro = Macro(CompoundProcedure([Symbol("form")], 1.0, global_env))
    global_env.define(Symbol("m"), macro)
    assert str(macro) == "#<macro m>"
    assert macro.transformer.name == "m transformer"


def test_register_primitive(global_env):
    primitive = global_env.register("double", lambda env, args: args[0] * 2)
    assert isinstance(primitive, PrimitiveProcedure)
    assert global_env.lookup(Symbol("double")) is primitive
    assert primitive.invoke(global_env, [2.0]) == 4.0
    assert primitive.name == "double"


def test_str_and_repr(global_env):
    global_env.define(Symbol("a"), 1.0)
    inner = Environment(outer=global_env)
    inner.define(Symbol("b"), 2.0)
    assert str(inner) == "{b} -> ..."
    assert repr(inner) == "<Environment chain: {b} -> {a}>"
