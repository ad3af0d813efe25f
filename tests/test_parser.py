"""Tests for TagParser: parsing, lookups, and text extraction."""

import io
import unittest

from tagparser import ParserConfig, ScanWarning, TagParser, TagRecord, messages, parseTags

HTML_CONTENT1 = (
    "<html><head>Heading</head><body><p>para 1</p><p>para 2<form><input name='test' id='myid'>"
    "<input type='checkbox' id='vehicleid' name='vehicle' value='Boat' checked>I have a boat></form></p></body></html>"
)
HTML_CONTENT2 = "<html><head>Heading</head><body><!-- a comment here --></body></html>"

EXPECTED_TAGS = [
    "HTML",
    "HEAD",
    "/HEAD",
    "BODY",
    "P",
    "/P",
    "P",
    "FORM",
    "INPUT",
    "INPUT",
    "/FORM",
    "/P",
    "/BODY",
    "/HTML",
]


class TestBasicParse(unittest.TestCase):
    """The sample document from the module docs."""

    def setUp(self):
        self.tp = TagParser(HTML_CONTENT1).parse()

    def test_tag_count(self):
        assert self.tp.tagCount == 14
        assert len(self.tp) == 14

    def test_tag_names_in_order(self):
        assert [self.tp.tag(i) for i in range(self.tp.tagCount)] == EXPECTED_TAGS
        assert [rec.name for rec in self.tp] == EXPECTED_TAGS

    def test_find_tag(self):
        assert self.tp.findTag("BODY") == 3
        assert self.tp.findTag("XYZ") == -1

    def test_find_tag_is_case_insensitive_by_default(self):
        assert self.tp.findTag("body") == 3
        assert self.tp.findTag("p", 0, 2) == 6

    def test_find_tag_occurrence(self):
        assert self.tp.findTag("INPUT", 0, 2) == 9
        assert self.tp.findTag("P", 0, 3) == -1

    def test_find_tag_from_start(self):
        assert self.tp.findTag("P", 5) == 6
        assert self.tp.findTag("P", 6) == 6
        assert self.tp.findTag("P", 7) == -1

    def test_find_tag_invalid_arguments(self):
        assert self.tp.findTag("P", -1) == -1
        assert self.tp.findTag("P", 14) == -1
        assert self.tp.findTag("P", 0, 0) == -1
        assert self.tp.findTag("P", 0, -3) == -1

    def test_count_tag(self):
        assert self.tp.countTag("P") == 2
        assert self.tp.countTag("/p") == 2
        assert self.tp.countTag("P", 5) == 1
        assert self.tp.countTag("XYZ") == 0

    def test_count_tag_invalid_start(self):
        assert self.tp.countTag("P", -1) == 0
        assert self.tp.countTag("P", 99) == 0

    def test_tag_out_of_range(self):
        assert self.tp.tag(-1) == ""
        assert self.tp.tag(14) == ""

    def test_raw_attribute_text(self):
        inputNdx = self.tp.findTag("INPUT")
        assert inputNdx == 8
        assert self.tp.rawAttributeText(inputNdx) == "name='test' id='myid'"

    def test_raw_attribute_text_empty(self):
        assert self.tp.rawAttributeText(0) == ""
        assert self.tp.rawAttributeText(-1) == ""
        assert self.tp.rawAttributeText(100) == ""

    def test_tag_info(self):
        rec = self.tp.tagInfo(0)
        assert rec == TagRecord(name="HTML", attrStart=5, attrEnd=5, elementStart=0, elementEnd=5)
        assert self.tp.tagInfo(14) is None
        assert self.tp.tagInfo(-1) is None

    def test_records_is_read_only_view(self):
        records = self.tp.records
        assert isinstance(records, tuple)
        assert len(records) == 14
        assert records[3].name == "BODY"


class TestTextExtraction(unittest.TestCase):
    def setUp(self):
        self.tp = TagParser(HTML_CONTENT1).parse()

    def test_text_after(self):
        assert self.tp.textAfter(1) == "Heading"
        assert self.tp.textAfter(4) == "para 1"
        assert self.tp.textAfter(6) == "para 2"
        assert self.tp.textAfter(0) == ""

    def test_text_after_keeps_stray_end_delimiters(self):
        assert self.tp.textAfter(9) == "I have a boat>"

    def test_text_after_last_tag_runs_to_end(self):
        tp = TagParser("<p>para</p>trailing text").parse()
        assert tp.textAfter(1) == "trailing text"
        assert self.tp.textAfter(13) == ""

    def test_text_after_last_tag_keeps_later_start_delimiters(self):
        tp = TagParser("<a>x<b").parse()
        assert tp.tagCount == 1
        assert tp.textAfter(0) == "x<b"
        tp = TagParser("<p>1 < 2 <").parse()
        assert tp.textAfter(0) == "1 < 2 <"

    def test_text_between_last_pair(self):
        tp = TagParser("<a>x<b>y < z").parse()
        assert tp.textBetween(0, 1) == "x"
        assert tp.textAfter(1) == "y < z"

    def test_text_after_invalid(self):
        assert self.tp.textAfter(-1) == ""
        assert self.tp.textAfter(14) == ""

    def test_text_before(self):
        assert self.tp.textBefore(2) == "Heading"
        assert self.tp.textBefore(5) == "para 1"
        assert self.tp.textBefore(7) == "para 2"
        assert self.tp.textBefore(1) == ""

    def test_text_before_stops_at_stray_end_delimiter(self):
        assert self.tp.textBefore(10) == ""

    def test_text_before_first_tag(self):
        tp = TagParser("leading<p>").parse()
        assert tp.textBefore(0) == "leading"
        assert self.tp.textBefore(0) == ""

    def test_text_before_invalid(self):
        assert self.tp.textBefore(-1) == ""
        assert self.tp.textBefore(14) == ""

    def test_text_between_adjacent(self):
        assert self.tp.textBetween(4, 5) == self.tp.textAfter(4) == "para 1"

    def test_text_between_includes_intervening_markup(self):
        assert self.tp.textBetween(4, 6) == "para 1</p>"
        assert self.tp.textBetween(1, 3) == "Heading</head>"

    def test_text_between_invalid(self):
        assert self.tp.textBetween(5, 4) == ""
        assert self.tp.textBetween(4, 4) == ""
        assert self.tp.textBetween(-1, 3) == ""
        assert self.tp.textBetween(0, 14) == ""


class TestComments(unittest.TestCase):
    def test_comment_is_just_another_tag(self):
        tp = TagParser(HTML_CONTENT2).parse()
        assert tp.tagCount == 7
        assert tp.tag(4) == "!--"
        assert tp.rawAttributeText(4) == "a comment here --"


class TestAttributes(unittest.TestCase):
    def test_checkbox_input(self):
        tp = TagParser(HTML_CONTENT1).parse()
        inputNdx = tp.findTag("INPUT", 0, 2)
        assert inputNdx == 9
        pairs = list(tp.parseAttributes(inputNdx))
        assert len(pairs) == 5
        assert pairs[0] == ("TYPE", "checkbox")
        assert pairs[3] == ("VALUE", "Boat")
        assert pairs[4] == ("CHECKED", "")

    def test_quoted_value_keeps_spaces(self):
        tp = TagParser('<p class =  "dummy1 dummy2" id=test>').parse()
        assert tp.tagCount == 1
        assert tp.tag(0) == "P"
        assert list(tp.parseAttributes(0)) == [("CLASS", "dummy1 dummy2"), ("ID", "test")]

    def test_xml_prolog_and_svg(self):
        content = (
            '<?xml version="1.0" encoding="UTF-8"?><svg class="__svgcsssuper" viewBox="0 0 128 104" '
            'preserveAspectRatio="xMinYMin meet" version="1.0" xmlns="http://www.w3.org/2000/svg" '
            'xmlns:cc="http://creativecommons.org/ns#" xmlns:dc="http://purl.org/dc/elements/1.1/" '
            'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"></svg>'
        )
        tp = TagParser(content, ParserConfig(caseSensitiveTags=True, caseSensitiveAttributes=True)).parse()
        assert tp.tag(0) == "?xml"
        svgNdx = tp.findTag("svg")
        assert svgNdx == 1
        pairs = list(tp.parseAttributes(svgNdx))
        assert len(pairs) == 8
        assert pairs[0] == ("class", "__svgcsssuper")
        assert pairs[1] == ("viewBox", "0 0 128 104")
        assert pairs[7] == ("xmlns:rdf", "http://www.w3.org/1999/02/22-rdf-syntax-ns#")

    def test_line_break_between_tagname_and_attributes(self):
        content = (
            '<?xml version="1.0" encoding="UTF-8" standalone="no"?><svg\n'
            'id="svg99" version="1.1" viewBox="0 0 448 512"></svg>'
        )
        tp = TagParser(content, ParserConfig(caseSensitiveTags=True, caseSensitiveAttributes=True)).parse()
        svgNdx = tp.findTag("svg")
        assert svgNdx == 1
        assert tp.tag(svgNdx) == "svg"
        pairs = list(tp.parseAttributes(svgNdx))
        assert len(pairs) == 3
        assert pairs[0] == ("id", "svg99")

    def test_element_offsets(self):
        prolog = '<?xml version="1.0"?>\n'
        content = prolog + '<svg width="10"><path d="M0 0"/></svg>'
        tp = TagParser(content, ParserConfig(caseSensitiveTags=True)).parse()
        svg = tp.tagInfo(tp.findTag("svg"))
        assert svg.elementStart == len(prolog)
        assert content[svg.elementEnd] == ">"
        assert content[svg.elementStart : svg.elementEnd + 1] == '<svg width="10">'
        path = tp.tagInfo(tp.findTag("path"))
        assert tp.rawAttributeText(tp.findTag("path")) == 'd="M0 0"/'
        assert content[path.elementStart : path.elementEnd + 1] == '<path d="M0 0"/>'

    def test_each_call_starts_over(self):
        tp = TagParser(HTML_CONTENT1).parse()
        first = tp.parseAttributes(9)
        assert next(first) == ("TYPE", "checkbox")
        second = tp.parseAttributes(9)
        assert next(second) == ("TYPE", "checkbox")
        assert next(first) == ("ID", "vehicleid")

    def test_invalid_index_has_no_attributes(self):
        tp = TagParser(HTML_CONTENT1).parse()
        assert list(tp.parseAttributes(-1)) == []
        assert list(tp.parseAttributes(14)) == []
        assert list(tp.parseAttributes(0)) == []


class TestCaseSensitivity(unittest.TestCase):
    def test_case_sensitive_tags(self):
        tp = TagParser("<Div></div>", ParserConfig(caseSensitiveTags=True)).parse()
        assert tp.tag(0) == "Div"
        assert tp.tag(1) == "/div"
        assert tp.findTag("div") == -1
        assert tp.findTag("Div") == 0
        assert tp.countTag("DIV") == 0

    def test_case_insensitive_tags(self):
        tp = TagParser("<Div></div>").parse()
        assert tp.tag(0) == "DIV"
        assert tp.findTag("div") == 0
        assert tp.countTag("Div") == 1

    def test_attribute_case_is_independent_of_tag_case(self):
        tp = TagParser("<Input Type=Text>", ParserConfig(caseSensitiveTags=True)).parse()
        assert tp.tag(0) == "Input"
        assert list(tp.parseAttributes(0)) == [("TYPE", "Text")]

    def test_values_are_never_folded(self):
        tp = TagParser("<input type=CheckBox>", ParserConfig(caseSensitiveAttributes=True)).parse()
        assert list(tp.parseAttributes(0)) == [("type", "CheckBox")]

    def test_config_accessors(self):
        config = ParserConfig(caseSensitiveTags=True, tagStartChar="[", tagEndChar="]")
        tp = TagParser(config=config)
        assert tp.caseSensitiveTags is True
        assert tp.caseSensitiveAttributes is False
        assert tp.tagStartChar == "["
        assert tp.tagEndChar == "]"
        with self.assertRaises(AttributeError):
            tp.tagStartChar = "<"


class TestLifecycle(unittest.TestCase):
    def test_no_records_before_parse(self):
        tp = TagParser(HTML_CONTENT1)
        assert tp.tagCount == 0
        assert tp.findTag("HTML") == -1

    def test_empty_content(self):
        tp = TagParser("").parse()
        assert tp.tagCount == 0
        assert tp.textAfter(0) == ""

    def test_reparse_is_deterministic(self):
        tp = TagParser(HTML_CONTENT1).parse()
        first = tp.records
        tp.parse()
        assert tp.records == first
        assert TagParser(HTML_CONTENT1).parse().records == first

    def test_reparse_after_content_change(self):
        tp = TagParser(HTML_CONTENT1).parse()
        tp.content = "<a href=x>link</a>"
        tp.parse()
        assert tp.tagCount == 2
        assert tp.tag(0) == "A"
        assert tp.textAfter(0) == "link"

    def test_content_must_be_str(self):
        with self.assertRaises(TypeError):
            TagParser(b"<p>")
        tp = TagParser()
        with self.assertRaises(TypeError):
            tp.content = None

    def test_parse_tags_helper(self):
        tp = parseTags("<b>bold</b>")
        assert isinstance(tp, TagParser)
        assert tp.tagCount == 2

    def test_context_shows_up_in_warnings(self):
        tp = TagParser("<p>\n<div", context="page.html").parse()
        assert tp.warnings == (
            ScanWarning(text="Tag <div wasn't closed before the end of the content.", lineNum="2:1 of page.html"),
        )

    def test_parse_never_prints_or_exits(self):
        fh = io.StringIO()
        with messages.withMessageState(fh, printMode="plain", dieOn="warning", dieWhen="early"):
            tp = TagParser("<a title='x>").parse()
        assert tp.tagCount == 0
        assert len(tp.warnings) == 1
        assert fh.getvalue() == ""

    def test_reparse_clears_warnings(self):
        tp = TagParser("<p>x<div").parse()
        assert len(tp.warnings) == 1
        tp.content = "<p>x</p>"
        assert tp.parse().warnings == ()


class TestProperties(unittest.TestCase):
    SOURCES = [
        HTML_CONTENT1,
        HTML_CONTENT2,
        '<a title="x > y">1</a><b class=\'p>q\'>2</b>',
        "text only",
        "<>< ><p>x<br/>y</p>",
    ]

    def test_monotonic_offsets(self):
        for source in self.SOURCES:
            records = TagParser(source).parse().records
            for rec in records:
                assert rec.elementStart < rec.attrStart <= rec.attrEnd == rec.elementEnd
                assert source[rec.elementStart] == "<"
                assert source[rec.elementEnd] == ">"
            for before, after in zip(records, records[1:]):
                assert after.elementStart > before.elementEnd

    def test_raw_attribute_text_is_in_place(self):
        for source in self.SOURCES:
            tp = TagParser(source).parse()
            for i, rec in enumerate(tp):
                assert tp.rawAttributeText(i) == source[rec.attrStart : rec.attrEnd]

    def test_count_matches_find(self):
        for source in self.SOURCES:
            tp = TagParser(source).parse()
            for name in {rec.name for rec in tp}:
                found = [i for i in range(tp.tagCount) if tp.findTag(name, i, 1) == i]
                assert tp.countTag(name) == len(found)


if __name__ == "__main__":
    unittest.main()
