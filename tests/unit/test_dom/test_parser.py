"""
Unit tests for dom.parser and dom.nodes modules.
"""
import pytest

from hocrkit.core.exceptions import MalformedTagError
from hocrkit.dom.nodes import HocrTag, HocrText
from hocrkit.dom.parser import create_ast, lex


class TestLex:
    """Tests for the tolerant lexer."""

    @pytest.mark.parametrize("text,expected", [
        ("<a><aa</a>", ["<a>", "<aa", "</a>"]),
        ("<a>aa<</a>", ["<a>", "aa", "<", "</a>"]),
        ("<a>a<a</a>", ["<a>", "a", "<a", "</a>"]),
        ("<a><</a>", ["<a>", "<", "</a>"]),
        ("<a>></a>", ["<a>", ">", "</a>"]),
        ("<a><<</a>", ["<a>", "<", "<", "</a>"]),
        ("<a>><</a>", ["<a>", ">", "<", "</a>"]),
        ("a", ["a"]),
    ])
    def test_malformed_input(self, text, expected):
        """Test truncate-at-next-'<' tolerance on malformed markup."""
        assert lex(text) == expected

    def test_unclosed_final_tag(self):
        """Test an unclosed tag at the end runs to the end of input."""
        assert lex("text<span class='x'") == ["text", "<span class='x'"]

    def test_tokens_reassemble_input(self, sample_hocr):
        """Test no characters are lost or duplicated."""
        assert ''.join(lex(sample_hocr)) == sample_hocr

    def test_empty_input(self):
        """Test empty input yields no tokens."""
        assert lex("") == []


class TestCreateAst:
    """Tests for building the generic element tree."""

    def test_nested_tags(self):
        """Test nesting, text nodes and closing tags."""
        nodes = create_ast("<p>Hello <b>world</b></p>")

        assert len(nodes) == 1
        p = nodes[0]
        assert isinstance(p, HocrTag)
        assert p.name == "p"
        assert p.children[0] == HocrText("Hello ")
        assert p.children[1].name == "b"
        assert p.raw_text == "Hello world"

    def test_comments_and_doctype_dropped(self):
        """Test '<!' tokens are skipped."""
        nodes = create_ast("<!DOCTYPE html><!-- note --><p>x</p>")

        assert [n.name for n in nodes] == ["p"]

    def test_self_closing_tag_has_no_children(self):
        """Test '/>' tags do not swallow following siblings."""
        nodes = create_ast("<div><br/>text</div>")

        div = nodes[0]
        assert div.children[0].name == "br"
        assert div.children[0].children == ()
        assert div.children[1] == HocrText("text")

    def test_unclosed_tag_runs_to_end(self):
        """Test a missing closing tag keeps everything after it as children."""
        nodes = create_ast("<div><p>one<p>two")

        p = nodes[0].children[0]
        assert p.children[0] == HocrText("one")
        assert p.children[1].name == "p"

    def test_stray_closing_tag_at_top_level(self):
        """Test input after an unmatched closing tag is still parsed."""
        nodes = create_ast("</x><p>kept</p>")

        assert [n.name for n in nodes] == ["p"]

    def test_malformed_text_survives(self):
        """Test a truncated tag becomes text instead of failing."""
        nodes = create_ast("<a><aa</a>")

        assert nodes[0].children == (HocrText("<aa"),)

    def test_entities_decoded_in_text(self):
        """Test HTML entities in text nodes are decoded."""
        nodes = create_ast("<p>Tom &amp; Jerry &lt;3</p>")

        assert nodes[0].raw_text == "Tom & Jerry <3"


class TestTagAttributes:
    """Tests for tag scanning."""

    def test_quoted_and_unquoted_values(self):
        """Test single quotes, double quotes and bare values."""
        tag = HocrTag.from_token("<span class='ocr_line' id=\"line_1\" lang=eng>")

        assert tag.name == "span"
        assert tag.css_class == "ocr_line"
        assert tag.id == "line_1"
        assert tag.attributes["lang"] == "eng"

    def test_name_is_lowercased(self):
        """Test tag names are case-insensitive."""
        assert HocrTag.from_token("<SPAN>").name == "span"

    def test_valueless_attribute_maps_to_own_name(self):
        """Test boolean attributes."""
        tag = HocrTag.from_token("<input disabled>")

        assert tag.attributes == {"disabled": "disabled"}

    def test_attributes_are_read_only(self):
        """Test scanned attributes cannot be changed after parsing."""
        tag = HocrTag.from_token("<span class='ocrx_word'>")

        with pytest.raises(TypeError):
            tag.attributes["class"] = "ocr_line"
        assert tag.css_class == "ocrx_word"

    def test_spaces_around_equals(self):
        """Test whitespace around '=' is tolerated."""
        tag = HocrTag.from_token("<div title = 'bbox 1 2 3 4'>")

        assert tag.title == "bbox 1 2 3 4"

    def test_entities_decoded_in_attributes(self):
        """Test entities in attribute values are decoded."""
        tag = HocrTag.from_token("<a title='a &amp; b'>")

        assert tag.title == "a & b"

    def test_last_duplicate_wins(self):
        """Test repeated attribute names keep the last value."""
        tag = HocrTag.from_token("<a id='1' id='2'>")

        assert tag.id == "2"

    def test_self_closing_token(self):
        """Test attributes before '/>' are read."""
        tag = HocrTag.from_token("<meta name='ocr-system' content='tesseract' />")

        assert tag.name == "meta"
        assert tag.attributes["content"] == "tesseract"

    def test_unterminated_quote_raises(self):
        """Test an unterminated quoted value is fatal."""
        with pytest.raises(MalformedTagError) as exc_info:
            create_ast("<span title='bbox 1 2 3 4>x</span>")

        assert "span" in exc_info.value.tag


class TestNodeQueries:
    """Tests for generic tree queries."""

    @pytest.fixture
    def body(self):
        return create_ast("<body><p>Hello</p> <div><b>w</b>orld</div></body>")[0]

    def test_raw_text(self, body):
        """Test raw text concatenates all descendants."""
        assert body.raw_text == "Hello world"

    def test_find_tag(self, body):
        """Test depth-first search by name."""
        assert body.find_tag("p").raw_text == "Hello"
        assert body.find_tag("b").raw_text == "w"
        assert body.find_tag("div").raw_text == "world"
        assert body.find_tag("em") is None
        assert body.find_tag("body") is body

    def test_blank_children(self, body):
        """Test whitespace-only subtrees are blank."""
        assert body.children[1].is_blank()
        assert not body.children[0].is_blank()
        assert HocrTag("span", {}, (HocrText("  \n"),)).is_blank()

    def test_mk_string(self):
        """Test compact rendering used in error messages."""
        tag = HocrTag.from_token("<span id='w1' class='ocrx_word'>", [HocrText("hi"), HocrText("  ")])

        assert tag.mk_string() == "<span w1 ocrx_word>hi</span>"

    def test_nodes_are_hashable(self):
        """Test nodes can be used in sets."""
        nodes = create_ast("<p>a</p><p>a</p>")

        assert len({nodes[0], nodes[1]}) == 1
