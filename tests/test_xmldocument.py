import pytest

from framekit.xmldocument import XMLDocument
from framekit.xmlnodes import (
    XMLComment,
    XMLDeclaration,
    XMLElement,
    XMLText,
    XMLUnknown,
    XMLVisitor,
)
from framekit.xmlutil import Whitespace, XMLError, XMLException


def parsed(text, **kwargs):
    doc = XMLDocument(**kwargs)
    doc.parse(text)
    return doc


def parse_error(text, **kwargs):
    doc = XMLDocument(**kwargs)
    with pytest.raises(XMLException) as info:
        doc.parse(text)
    return doc, info.value


def test_parse_elements_and_attributes():
    doc = parsed('<root a="1" b=\'two\'><child/><child x="3"/></root>')
    root = doc.first_child_element("root")
    assert root.attribute("a") == "1"
    assert root.attribute("b") == "two"
    assert root.int_attribute("a") == 1
    children = [c.attribute("x") for c in root.children()]
    assert children == [None, "3"]


def test_entities_processed():
    doc = parsed('<a t="&lt;&amp;">&#65;&#x42;&gt;</a>')
    a = doc.first_child_element()
    assert a.attribute("t") == "<&"
    assert a.get_text() == "AB>"


def test_entities_left_when_disabled():
    doc = parsed("<a>&lt;x</a>", process_entities=False)
    assert doc.first_child_element().get_text() == "&lt;x"
    assert doc.to_string(compact=True) == "<a>&lt;x</a>"


def test_whitespace_preserve_and_collapse():
    text = "<a>  hello   world  </a>"
    assert parsed(text).first_child_element().get_text() == "  hello   world  "
    collapsed = parsed(text, whitespace_mode=Whitespace.COLLAPSE)
    assert collapsed.first_child_element().get_text() == "hello world"


def test_whitespace_between_elements_dropped():
    doc = parsed("<a>\n  <b/>\n</a>")
    kids = list(doc.first_child_element().children())
    assert len(kids) == 1
    assert isinstance(kids[0], XMLElement) and kids[0].name == "b"


def test_newline_normalization_in_text():
    doc = parsed("<a>x\r\ny\rz</a>")
    assert doc.first_child_element().get_text() == "x\ny\nz"


def test_cdata_comment_unknown_declaration():
    doc = parsed('<?xml version="1.0"?><!DOCTYPE html><!--c--><a><![CDATA[<x>]]></a>')
    kinds = [type(n) for n in doc.children()]
    assert kinds == [XMLDeclaration, XMLUnknown, XMLComment, XMLElement]
    decl, unknown, comment, _ = doc.children()
    assert decl.value == 'xml version="1.0"'
    assert unknown.value == "DOCTYPE html"
    assert comment.value == "c"
    text = doc.first_child_element("a").first_child
    assert isinstance(text, XMLText) and text.cdata and text.value == "<x>"


def test_pretty_output():
    doc = parsed("<a><b>text</b></a>")
    assert doc.to_string() == "<a>\n    <b>text</b>\n</a>\n"
    assert doc.to_string(compact=True) == "<a><b>text</b></a>"


def test_declaration_round_trip():
    source = '<?xml version="1.0"?><a/>'
    out = parsed(source).to_string()
    assert out.startswith('<?xml version="1.0"?>')
    assert parsed(out).to_string() == out


def test_round_trip_is_stable():
    source = '<r k="v &amp; w"><!--note--><i n="1">one</i><i n="2"/><![CDATA[raw]]></r>'
    first = parsed(source).to_string()
    assert parsed(first).to_string() == first
    assert parsed(source).to_string(compact=True) == source


def test_bom_detected_and_written():
    doc = parsed("\ufeff<a/>")
    assert doc.has_bom is True
    assert doc.to_string().startswith("\ufeff")
    assert parsed("<a/>").has_bom is False


def test_bytes_input():
    doc = parsed('<a v="\xe9"/>'.encode("utf-8"))
    assert doc.first_child_element().attribute("v") == "\xe9"


def test_nul_truncates_input():
    doc = parsed("<a/>\0garbage")
    assert [n.name for n in doc.children()] == ["a"]


def test_stray_closing_tag_stops_at_top_level():
    doc = parsed("<a/></b><c/>")
    assert [n.name for n in doc.children()] == ["a"]
    assert doc.error is False


@pytest.mark.parametrize("text", ["", "   \n  ", "\0<a/>"])
def test_empty_document(text):
    _, exc = parse_error(text)
    assert exc.error == XMLError.ERROR_EMPTY_DOCUMENT


@pytest.mark.parametrize(
    "text, error",
    [
        ("<a>", XMLError.ERROR_MISMATCHED_ELEMENT),
        ("<a></b>", XMLError.ERROR_MISMATCHED_ELEMENT),
        ("<a x='1' x='2'/>", XMLError.ERROR_PARSING_ATTRIBUTE),
        ("<a x=1/>", XMLError.ERROR_PARSING_ATTRIBUTE),
        ("<!-- x", XMLError.ERROR_PARSING_COMMENT),
        ("<a><![CDATA[x</a>", XMLError.ERROR_PARSING_CDATA),
        ("<a/>text", XMLError.ERROR_PARSING_TEXT),
        ("<a/><?xml?>", XMLError.ERROR_PARSING_DECLARATION),
        ("<a><b/>", XMLError.ERROR_PARSING),
        ("<a x", XMLError.ERROR_PARSING_ATTRIBUTE),
        ("<a $>", XMLError.ERROR_PARSING_ELEMENT),
        ("<!DOCTYPE", XMLError.ERROR_PARSING_UNKNOWN),
    ],
)
def test_parse_errors(text, error):
    doc, exc = parse_error(text)
    assert exc.error == error
    assert doc.error_id == error
    assert doc.error is True
    assert doc.no_children


def test_mismatch_error_string():
    doc, exc = parse_error("<a>")
    expected = "Error=XML_ERROR_MISMATCHED_ELEMENT ErrorID=16 (0x10) Line number=1: XMLElement name=a"
    assert exc.error_str == expected
    assert doc.error_str == expected
    assert doc.error_name == "XML_ERROR_MISMATCHED_ELEMENT"


def test_error_line_number():
    doc, exc = parse_error("<a>\n<b>\n</c></a>")
    assert exc.error == XMLError.ERROR_MISMATCHED_ELEMENT
    assert exc.line_number == 2
    assert doc.error_line_num == 2


def test_parse_line_numbers_recorded():
    doc = parsed("<a>\n\n<b/>\n</a>")
    b = doc.first_child_element("a").first_child_element("b")
    assert b.parse_line_num == 3


def test_successful_parse_clears_error():
    doc, _ = parse_error("<a>")
    doc.parse("<a/>")
    assert doc.error is False
    assert doc.error_id == XMLError.SUCCESS
    assert doc.error_str == ""


def test_document_has_no_value():
    assert parsed("<a/>").value is None


def test_new_nodes_build_document():
    doc = XMLDocument()
    doc.insert_end_child(doc.new_declaration())
    root = doc.insert_end_child(doc.new_element("root"))
    root.insert_end_child(doc.new_comment("c"))
    root.set_attribute("n", 5)
    again = parsed(doc.to_string())
    decl = again.first_child
    assert decl.value == 'xml version="1.0" encoding="UTF-8"'
    assert again.first_child_element("root").int_attribute("n") == 5
    assert isinstance(again.first_child_element("root").first_child, XMLComment)


def test_new_text_and_unknown_values():
    doc = XMLDocument()
    assert doc.new_text("hi").value == "hi"
    assert doc.new_unknown("DOCTYPE x").value == "DOCTYPE x"
    assert doc.new_text("hi").document is doc


def test_nodes_from_other_document_rejected():
    doc = XMLDocument()
    other = XMLDocument()
    with pytest.raises(ValueError):
        doc.insert_end_child(other.new_element("x"))


def test_deep_copy():
    source = parsed('<a k="v"><b>t</b><!--c--></a>')
    target = parsed("<old/>")
    source.deep_copy(target)
    assert target.to_string() == source.to_string()
    assert target.first_child_element("a").document is target
    assert target.first_child_element("old") is None


def test_deep_copy_to_self_is_noop():
    doc = parsed("<a/>")
    doc.deep_copy(doc)
    assert doc.to_string(compact=True) == "<a/>"


def test_clear():
    doc = parsed("<a/><b/>")
    doc.clear()
    assert doc.no_children
    assert doc.error is False


def test_save_and_load_file(tmp_path):
    path = tmp_path / "doc.xml"
    doc = parsed('<a x="1"><b>text</b></a>')
    doc.save_file(path)
    loaded = XMLDocument()
    loaded.load_file(path)
    assert loaded.to_string() == doc.to_string()


def test_save_compact(tmp_path):
    path = tmp_path / "doc.xml"
    source = "<a><b/></a>"
    parsed(source).save_file(path, compact=True)
    assert path.read_text(encoding="utf-8") == source


def test_load_missing_file(tmp_path):
    doc = XMLDocument()
    with pytest.raises(XMLException) as info:
        doc.load_file(tmp_path / "missing.xml")
    assert info.value.error == XMLError.ERROR_FILE_NOT_FOUND
    assert "filename=" in info.value.error_str


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.xml"
    path.write_bytes(b"")
    doc = XMLDocument()
    with pytest.raises(XMLException) as info:
        doc.load_file(path)
    assert info.value.error == XMLError.ERROR_EMPTY_DOCUMENT


def test_save_to_unopenable_path(tmp_path):
    doc = parsed("<a/>")
    with pytest.raises(XMLException) as info:
        doc.save_file(tmp_path / "no" / "such" / "dir.xml")
    assert info.value.error == XMLError.ERROR_FILE_COULD_NOT_BE_OPENED


def test_print_to_stdout(capsys):
    doc = parsed("<a><b/></a>")
    doc.print()
    assert capsys.readouterr().out == doc.to_string()


class _Counter(XMLVisitor):
    def __init__(self):
        self.events = []

    def visit_enter_document(self, document):
        self.events.append("enter-doc")
        return True

    def visit_exit_document(self, document):
        self.events.append("exit-doc")
        return True

    def visit_enter_element(self, element, attributes):
        self.events.append("enter:" + element.name)
        return True

    def visit_exit_element(self, element):
        self.events.append("exit:" + element.name)
        return True

    def visit_text(self, text):
        self.events.append("text:" + text.value)
        return True


def test_accept_visits_in_order():
    counter = _Counter()
    result = parsed("<a><b>t</b></a>").accept(counter)
    assert result is True
    assert counter.events == [
        "enter-doc",
        "enter:a",
        "enter:b",
        "text:t",
        "exit:b",
        "exit:a",
        "exit-doc",
    ]