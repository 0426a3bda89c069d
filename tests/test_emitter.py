"""
Emitter tests - HTML rendering, attribute order and component substitution
"""

from webflow.lib.emitter import Emitter
from webflow.lib.parser import Parser, Element


def render(source, components=None):
    """Parse source and render it with an optional component cache"""
    return Emitter(components).render(Parser(source).parse().elements)


class TestClosingTags:
    """Test when the closing tag is written"""

    def test_empty_leaf_has_no_closing_tag(self):
        assert render("div:;") == "<div>"

    def test_content_gets_closing_tag(self):
        assert render("div: content:{x};") == "<div>x</div>"

    def test_children_get_closing_tag(self):
        assert render("ul: li:;;") == "<ul><li></ul>"

    def test_empty_content_is_not_content(self):
        assert render("br: content:{};") == "<br>"

    def test_unclosed_element_gets_closing_tag(self):
        """Elements built without a terminating ';' always close"""
        assert Emitter().render([Element(tag_name="p")]) == "<p></p>"


class TestAttributes:
    """Test attribute rendering"""

    def test_style_joined_with_semicolons(self):
        html = render("p: styles:{color: red, margin: 0};")
        assert html == '<p style="color:red;margin:0">'

    def test_dataset_prefixed(self):
        html = render("div: dataset:{id: 7, role: x};")
        assert html == '<div data-id="7" data-role="x">'

    def test_ids_and_classes_space_joined(self):
        html = render("div: ids:{a, b} classes:{c, d};")
        assert html == '<div id="a b" class="c d">'

    def test_props(self):
        html = render("a: props:{href: /, rel: noopener} content:{Home};")
        assert html == '<a href="/" rel="noopener">Home</a>'

    def test_fixed_order_regardless_of_source_order(self):
        source = (
            "div: props:{title: t} classes:{c} ids:{i} "
            "dataset:{k: v} styles:{color: red} content:{x};"
        )
        html = render(source)
        assert html == '<div style="color:red" data-k="v" id="i" class="c" title="t">x</div>'

    def test_quotes_in_values_verbatim(self):
        html = render('img: props:{alt: "a"};')
        assert html == '<img alt=""a"">'

    def test_no_html_escaping(self):
        html = render("p: content:{a < b & c};")
        assert html == "<p>a < b & c</p>"


class TestLayout:
    """Test joining of roots and children"""

    def test_roots_joined_by_newline(self):
        assert render("h1: content:{A}; p: content:{B};") == "<h1>A</h1>\n<p>B</p>"

    def test_children_concatenated(self):
        html = render("ul: li: content:{1}; li: content:{2};;")
        assert html == "<ul><li>1</li><li>2</li></ul>"

    def test_content_before_children(self):
        html = render("p: b: content:{x}; content:{Hello };")
        assert html == "<p>Hello <b>x</b></p>"

    def test_no_roots(self):
        assert Emitter().render([]) == ""


class TestComponentSubstitution:
    """Test macro substitution of components"""

    def test_substitutes_component(self):
        html = render("Foo:;", {"Foo": "<span>hi</span>"})
        assert html == "<span>hi</span>"

    def test_usage_attributes_and_children_discarded(self):
        html = render("Foo: classes:{x} content:{y} b:;;", {"Foo": "<span>hi</span>"})
        assert html == "<span>hi</span>"

    def test_substitutes_nested_usage(self):
        html = render("main: Foo:; p:;;", {"Foo": "<span>hi</span>"})
        assert html == "<main><span>hi</span><p></main>"

    def test_multiline_component_output_inserted_verbatim(self):
        html = render("div: Card:;;", {"Card": "<h2>A</h2>\n<p>B</p>"})
        assert html == "<div><h2>A</h2>\n<p>B</p></div>"

    def test_tag_names_are_case_sensitive(self):
        html = render("foo:;", {"Foo": "<span>hi</span>"})
        assert html == "<foo>"
