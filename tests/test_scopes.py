"""
Tests for the scope stack used by the semantic analyzer.
"""

import pytest

from mylang.errors import SourceLocation
from mylang.frontend.scopes import ScopeStack
from mylang.frontend.types import TypeTag


class TestScopeStack:
    """Push, pop, declare and lookup."""

    def test_starts_empty(self):
        scopes = ScopeStack()
        assert scopes.depth == 0
        assert scopes.lookup("x") is None

    def test_declare_and_lookup(self):
        scopes = ScopeStack()
        scopes.push()
        assert scopes.declare("x", TypeTag.INT)
        assert scopes.lookup("x") == TypeTag.INT

    def test_redeclare_in_same_scope_keeps_first(self):
        """A second declaration fails and does not overwrite."""
        scopes = ScopeStack()
        scopes.push()
        first = SourceLocation("<test>", 1, 5)
        assert scopes.declare("x", TypeTag.INT, first)
        assert not scopes.declare("x", TypeTag.STRING, SourceLocation("<test>", 2, 5))
        assert scopes.lookup("x") == TypeTag.INT
        assert scopes.local_binding("x").location == first

    def test_shadowing_and_restore(self):
        """Inner bindings shadow outer ones until the scope is popped."""
        scopes = ScopeStack()
        scopes.push()
        scopes.declare("x", TypeTag.INT)

        scopes.push()
        assert scopes.declare("x", TypeTag.STRING)
        assert scopes.lookup("x") == TypeTag.STRING
        scopes.pop()

        assert scopes.lookup("x") == TypeTag.INT

    def test_lookup_reaches_outer_scopes(self):
        scopes = ScopeStack()
        scopes.push()
        scopes.declare("g", TypeTag.FLOAT)
        scopes.push()
        scopes.push()
        assert scopes.lookup("g") == TypeTag.FLOAT
        assert scopes.local_binding("g") is None

    def test_inner_names_vanish_after_pop(self):
        scopes = ScopeStack()
        scopes.push()
        scopes.push()
        scopes.declare("tmp", TypeTag.INT)
        scopes.pop()
        assert scopes.lookup("tmp") is None

    def test_scope_context_manager(self):
        scopes = ScopeStack()
        with scopes.scope():
            assert scopes.depth == 1
            with scopes.scope():
                assert scopes.depth == 2
            assert scopes.depth == 1
        assert scopes.depth == 0

    def test_scope_pops_on_exception(self):
        scopes = ScopeStack()
        with pytest.raises(RuntimeError):
            with scopes.scope():
                raise RuntimeError("boom")
        assert scopes.depth == 0

    def test_pop_empty_raises(self):
        with pytest.raises(IndexError):
            ScopeStack().pop()

    def test_declare_without_scope_raises(self):
        with pytest.raises(IndexError):
            ScopeStack().declare("x", TypeTag.INT)

    def test_visible_names_innermost_first(self):
        scopes = ScopeStack()
        scopes.push()
        scopes.declare("a", TypeTag.INT)
        scopes.declare("b", TypeTag.INT)
        scopes.push()
        scopes.declare("c", TypeTag.INT)
        scopes.declare("a", TypeTag.STRING)
        assert scopes.visible_names() == ["c", "a", "b"]
