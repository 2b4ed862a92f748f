"""Tests for the template compiler: splitting, indexing and stripping."""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from tessera import compile, compile_markup
from tessera.compiler import classify_attribute
from tessera.config import CompileConfig, compile_config_context
from tessera.errors import CompileError
from tessera.markup import parse_fragment
from tessera.nodes import Comment, Element, Fragment, Text
from tessera.parts import PartDescriptor, PartKind
from tessera.renderers.html import render
from tessera.tree import DEFAULT_ADAPTER


def _texts(parent: Element | Fragment) -> list[str]:
    return [child.data for child in parent.children if isinstance(child, Text)]


# =============================================================================
# Text splitting
# =============================================================================


class TestTextSplitting:
    """Placeholders in text become empty, individually indexed nodes."""

    def test_pre_placeholder_post(self) -> None:
        template = compile(Fragment(children=[Text("pre{x}post")]))
        assert _texts(template.content) == ["pre", "", "post"]
        assert dict(template.parts) == {1: (PartDescriptor(PartKind.TEXT, "x"),)}

    def test_lone_placeholder_leaves_one_node(self) -> None:
        template = compile_markup("<p>{x}</p>")
        (p,) = template.content.children
        assert _texts(p) == [""]
        assert dict(template.parts) == {1: (PartDescriptor(PartKind.TEXT, "x"),)}

    def test_adjacent_placeholders(self) -> None:
        template = compile_markup("<p>{a}{b}</p>")
        (p,) = template.content.children
        assert _texts(p) == ["", ""]
        assert template.parts[1][0].expression == "a"
        assert template.parts[2][0].expression == "b"

    def test_several_placeholders_with_text_between(self) -> None:
        template = compile_markup("<p>a{x}b{y}c</p>")
        (p,) = template.content.children
        assert _texts(p) == ["a", "", "b", "", "c"]
        assert sorted(template.parts) == [2, 4]

    def test_expression_source_kept_untrimmed(self) -> None:
        template = compile_markup("<p>{ name }</p>")
        assert template.parts[1][0].expression == " name "

    def test_text_without_placeholders_untouched(self) -> None:
        template = compile_markup("<p>plain</p>")
        assert dict(template.parts) == {}
        assert render(template.content) == "<p>plain</p>"

    def test_indices_continue_after_split(self) -> None:
        """Nodes after a split text keep counting from the last segment."""
        template = compile_markup("<div>x{a}y</div><span title='{t}'></span>")
        # div=0, "x"=1, {a}=2, "y"=3, span=4
        assert sorted(template.parts) == [2, 4]
        assert template.parts[4][0].kind is PartKind.ATTRIBUTE


# =============================================================================
# Attributes
# =============================================================================


class TestAttributeBindings:
    """Bound attributes are classified, registered and stripped."""

    def test_bound_attribute_removed(self) -> None:
        template = compile_markup('<a href="{url}" class="static">x</a>')
        (a,) = template.content.children
        assert a.attributes == {"class": "static"}
        assert template.parts[0] == (PartDescriptor(PartKind.ATTRIBUTE, "url", "href"),)

    def test_prefixes(self) -> None:
        template = compile_markup('<input ?disabled="{off}" .value="{v}" title="{t}">')
        (node,) = template.content.children
        assert node.attributes == {}
        assert template.parts[0] == (
            PartDescriptor(PartKind.BOOLEAN_ATTRIBUTE, "off", "disabled"),
            PartDescriptor(PartKind.PROPERTY, "v", "value"),
            PartDescriptor(PartKind.ATTRIBUTE, "t", "title"),
        )

    def test_static_text_around_attribute_placeholder_dropped(self) -> None:
        template = compile_markup('<div class="btn {tone}"></div>')
        assert template.parts[0] == (PartDescriptor(PartKind.ATTRIBUTE, "tone", "class"),)
        instance = template.create_instance({"tone": "warm"})
        assert instance.render() == '<div class="warm"></div>'

    def test_valueless_attribute_ignored(self) -> None:
        template = compile_markup("<input disabled>")
        assert dict(template.parts) == {}
        assert template.content.children[0].attributes == {"disabled": None}

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("?hidden", (PartKind.BOOLEAN_ATTRIBUTE, "hidden")),
            (".items", (PartKind.PROPERTY, "items")),
            ("data-id", (PartKind.ATTRIBUTE, "data-id")),
            ("?", (PartKind.BOOLEAN_ATTRIBUTE, "")),
        ],
    )
    def test_classify_attribute(self, name: str, expected: tuple[PartKind, str]) -> None:
        assert classify_attribute(name) == expected


# =============================================================================
# Walk rules
# =============================================================================


class TestWalkRules:
    """Only elements and non-empty text nodes are indexed."""

    def test_comments_not_indexed(self) -> None:
        template = compile_markup("<!-- note --><p>{x}</p>")
        assert sorted(template.parts) == [1]
        assert isinstance(template.content.children[0], Comment)

    def test_empty_source_text_removed(self) -> None:
        p = Element("p", {"id": "{i}"})
        template = compile(Fragment(children=[Text(""), p]))
        assert len(template.content.children) == 1
        assert sorted(template.parts) == [0]

    def test_element_root_is_indexed(self) -> None:
        root = Element("div", {"id": "{i}"}, children=[Text("{x}")])
        template = compile(root)
        assert template.parts[0][0].name == "id"
        assert template.parts[1][0].kind is PartKind.TEXT

    def test_nested_elements(self) -> None:
        template = compile_markup("<ul><li>{a}</li><li>{b}</li></ul>")
        # ul=0, li=1, {a}=2, li=3, {b}=4
        assert sorted(template.parts) == [2, 4]

    def test_source_tree_not_mutated(self) -> None:
        source = parse_fragment('<p title="{t}">pre{x}post</p>')
        before = render(source)
        compile(source)
        assert render(source) == before

    def test_non_root_rejected(self) -> None:
        with pytest.raises(CompileError, match="Text"):
            compile(Text("{x}"))

    def test_parts_table_read_only(self) -> None:
        template = compile_markup("<p>{x}</p>")
        with pytest.raises(TypeError):
            template.parts[5] = ()  # type: ignore[index]


# =============================================================================
# Configuration
# =============================================================================


class TestCompileConfig:
    """Delimiters and prefixes follow the active CompileConfig."""

    def test_custom_delimiters(self) -> None:
        with compile_config_context(CompileConfig(open_delimiter="[[", close_delimiter="]]")):
            template = compile_markup("<p>[[x]] {y}</p>")
        instance = template.create_instance({"x": "X", "y": "Y"})
        assert instance.render() == "<p>X {y}</p>"

    def test_custom_prefixes(self) -> None:
        config = CompileConfig(boolean_prefix="bool:", property_prefix="prop:")
        with compile_config_context(config):
            template = compile_markup('<input bool:checked="{c}" prop:value="{v}" ?x="{y}">')
        kinds = [(d.kind, d.name) for d in template.parts[0]]
        assert kinds == [
            (PartKind.BOOLEAN_ATTRIBUTE, "checked"),
            (PartKind.PROPERTY, "value"),
            (PartKind.ATTRIBUTE, "?x"),
        ]

    def test_compiled_template_ignores_later_config(self) -> None:
        template = compile_markup("<p>{x}</p>")
        with compile_config_context(CompileConfig(open_delimiter="<<", close_delimiter=">>")):
            instance = template.create_instance({"x": "still works"})
        assert instance.render() == "<p>still works</p>"


# =============================================================================
# Alignment property
# =============================================================================

_literal = st.text(alphabet="abc xyz", min_size=1, max_size=5)
_key = st.sampled_from(["a", "b", "c", "d"])
_segments = st.lists(
    st.one_of(_literal.map(lambda s: ("lit", s)), _key.map(lambda k: ("key", k))),
    min_size=1,
    max_size=8,
)


class TestIndexAlignment:
    """Compile-time indices always match instantiation-time traversal."""

    @given(segments=_segments, leading=st.booleans())
    @settings(max_examples=150, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_text_parts_bind_to_their_own_segment(
        self, segments: list[tuple[str, str]], leading: bool
    ) -> None:
        body = "".join(s if kind == "lit" else "{" + s + "}" for kind, s in segments)
        prefix = '<b title="{a}"></b>' if leading else ""
        template = compile_markup(f"{prefix}<p>{body}</p>")

        context = {key: f"<{key}>" for key in "abcd"}
        instance = template.create_instance(context)

        p = instance.content.children[-1]
        expected = "".join(s if kind == "lit" else context[s] for kind, s in segments)
        assert p.text_content == expected

        text_parts = [part for part in instance.parts if part.kind is PartKind.TEXT]
        assert len(text_parts) == sum(1 for kind, _ in segments if kind == "key")
        assert all(part.node.parent is p for part in text_parts)

    @given(segments=_segments)
    @settings(max_examples=75, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_walk_length_matches_index_count(self, segments: list[tuple[str, str]]) -> None:
        body = "".join(s if kind == "lit" else "{" + s + "}" for kind, s in segments)
        template = compile_markup(f"<p>{body}</p>")
        clone = DEFAULT_ADAPTER.clone(template.content)
        walked = list(DEFAULT_ADAPTER.walk(clone))
        assert max(template.parts, default=0) < len(walked)
        for index, descriptors in template.parts.items():
            if descriptors[0].kind is PartKind.TEXT:
                assert isinstance(walked[index], Text)
                assert walked[index].data == ""
