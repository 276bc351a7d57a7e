"""
Tests for dependency closure and selection expansion.
"""
import logging

from builder_service.dependency_resolver import (
    dependencies,
    dependency_names,
    resolve_selection,
)
from builder_service.directive_parser import parse
from builder_service.models import Tag
from builder_service.tag_registry import TagRegistry


CYCLIC_SOURCE = """
// UTAGDEF DESC REQUIRED core
// UTAGDEF DESC A alpha
// UTAGDEF DESC B beta
// UTAGDEF REQU A B
// UTAGDEF REQU B A
// UTAGDEF DESC C gamma
"""


class TestDependencies:
    """Test the transitive closure of requirements."""

    def test_includes_self_and_required(self):
        """Test that the root and REQUIRED are both present, once."""
        script = parse(CYCLIC_SOURCE)
        tag_c = script.get_tag("C")

        found = dependencies(tag_c, script.registry)

        assert [tag.name for tag in found] == ["C", "REQUIRED"]

    def test_excludes_self(self):
        """Test that include_self=False drops the root."""
        script = parse(CYCLIC_SOURCE)

        names = dependency_names(script.get_tag("C"), script.registry, include_self=False)

        assert names == ["REQUIRED"]

    def test_cycle_terminates_without_duplicates(self):
        """Test that A <-> B resolves to a finite, duplicate-free list."""
        script = parse(CYCLIC_SOURCE)

        found = dependencies(script.get_tag("A"), script.registry)

        assert [tag.name for tag in found] == ["A", "REQUIRED", "B"]
        assert len(set(map(id, found))) == len(found)

    def test_cycle_back_to_root_still_excludes_root(self):
        """Test that a root required through a cycle is still excluded."""
        script = parse(CYCLIC_SOURCE)

        names = dependency_names(script.get_tag("A"), script.registry, include_self=False)

        assert names == ["REQUIRED", "B"]

    def test_required_tag_resolves_to_itself(self):
        """Test that the sentinel appears exactly once in its own closure."""
        script = parse(CYCLIC_SOURCE)
        required = script.get_tag("REQUIRED")

        assert dependencies(required, script.registry) == [required]
        assert dependencies(required, script.registry, include_self=False) == []

    def test_no_required_tag_defined(self):
        """Test closures when no REQUIRED tag exists."""
        script = parse("// UTAGDEF DESC A alpha")

        assert dependency_names(script.get_tag("A"), script.registry) == ["A"]
        assert dependency_names(script.get_tag("A"), script.registry, include_self=False) == []

    def test_custom_sentinel_name(self):
        """Test that the sentinel name is an explicit parameter."""
        script = parse("// UTAGDEF DESC CORE core\n// UTAGDEF DESC A alpha")

        found = dependencies(script.get_tag("A"), script.registry, required_tag_name="CORE")

        assert [tag.name for tag in found] == ["A", "CORE"]

    def test_transitive_chain_is_breadth_first(self):
        """Test ordering across several levels of requirements."""
        script = parse(
            "// UTAGDEF DESC D delta\n"
            "// UTAGDEF DESC C gamma\n"
            "// UTAGDEF REQU C D\n"
            "// UTAGDEF DESC B beta\n"
            "// UTAGDEF REQU A B\n"
            "// UTAGDEF REQU A C\n"
        )

        assert dependency_names(script.get_tag("A"), script.registry) == ["A", "B", "C", "D"]

    def test_unresolved_name_is_skipped(self, caplog):
        """Test that a dangling requirement name is logged and skipped."""
        registry = TagRegistry()
        tag = registry.get_or_create("A")
        tag.required_tag_names.append("GHOST")

        with caplog.at_level(logging.WARNING):
            found = dependencies(tag, registry)

        assert found == [tag]
        assert 'required tag "GHOST"' in caplog.text

    def test_root_excluded_by_identity_not_name(self):
        """Test that only the exact root object is filtered out."""
        registry = TagRegistry()
        registered = registry.get_or_create("A")
        impostor = Tag(name="A", required_tag_names=["A"])

        found = dependencies(impostor, registry, include_self=False)

        assert len(found) == 1
        assert found[0] is registered

    def test_dangling_requu_not_in_closure(self):
        """Test that a REQU on an undefined tag never reaches the closure."""
        script = parse("// UTAGDEF DESC A alpha\n// UTAGDEF REQU A NOWHERE")

        assert dependency_names(script.get_tag("A"), script.registry) == ["A"]


class TestResolveSelection:
    """Test expanding user selections into included tag names."""

    def test_union_in_selection_order(self):
        """Test that closures merge without duplicates."""
        script = parse(CYCLIC_SOURCE)

        assert resolve_selection(script, ["C", "A"]) == ["C", "REQUIRED", "A", "B"]

    def test_unknown_selection_is_skipped(self, caplog):
        """Test that unknown names are logged and ignored."""
        script = parse(CYCLIC_SOURCE)

        with caplog.at_level(logging.WARNING):
            names = resolve_selection(script, ["NOPE", "C"])

        assert names == ["C", "REQUIRED"]
        assert "NOPE" in caplog.text

    def test_empty_selection(self):
        script = parse(CYCLIC_SOURCE)

        assert resolve_selection(script, []) == []
