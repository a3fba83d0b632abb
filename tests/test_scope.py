from lish.types.scope import Scope


def test_lookup_walks_the_chain():
    root = Scope()
    root.define("a", 1)
    child = root.child()
    child.define("b", 2)
    assert child.lookup("a") == 1
    assert child.lookup("b") == 2
    assert root.lookup("b") is None
    assert "a" in child
    assert "b" not in root


def test_child_shadows_parent():
    root = Scope()
    root.define("a", 1)
    child = root.child()
    child.define("a", 2)
    assert child.lookup("a") == 2
    assert root.lookup("a") == 1


def test_module_scope_is_inherited():
    core = Scope()
    module = Scope.module_scope(core)
    inner = module.child().child()
    assert module.module is module
    assert inner.module is module
    assert core.module is None


def test_delete_stops_at_the_module_scope():
    core = Scope()
    core.define("echo", "lib")
    module = Scope.module_scope(core)
    module.define("x", 1)
    inner = module.child()
    inner.define("x", 2)

    assert inner.delete("x") is True
    assert inner.lookup("x") == 1
    assert inner.delete("x") is True
    assert inner.lookup("x") is None
    assert inner.delete("echo") is False
    assert inner.lookup("echo") == "lib"


def test_names_are_unique_and_innermost_first():
    root = Scope()
    root.update({"a": 1, "b": 2})
    child = root.child()
    child.define("b", 3)
    assert list(child.names()) == ["b", "a"]


def test_scope_repr():
    module = Scope.module_scope(Scope())
    module.define("x", 1)
    assert str(module) == "{x: 1} -> ..."
    assert repr(module) == "<Scope chain: module{x: 1} -> {}>"
