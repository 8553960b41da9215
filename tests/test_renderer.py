"""Tests for the plain-text renderer."""

from __future__ import annotations

import pytest

from gopherweb.errors import RenderError
from gopherweb.web.renderer import render_text


class TestParagraphs:
    def test_paragraphs_separated_by_one_blank_line(self) -> None:
        assert render_text("<p>One</p><p>Two</p>") == ["One", "", "Two"]

    def test_no_leading_or_trailing_blank_lines(self) -> None:
        assert render_text("<div><p>Only</p></div>") == ["Only"]

    def test_whitespace_collapsed(self) -> None:
        assert render_text("<p>a\n    b\t c</p>") == ["a b c"]

    def test_inline_elements_join_without_extra_space(self) -> None:
        assert render_text("<p><b>bold</b>text <i>it</i></p>") == ["boldtext it"]

    def test_line_break(self) -> None:
        assert render_text("<p>a<br>b</p>") == ["a", "b"]

    def test_double_line_break_leaves_blank_line(self) -> None:
        assert render_text("<p>a<br><br>b</p>") == ["a", "", "b"]

    def test_bare_text(self) -> None:
        assert render_text("just text") == ["just text"]

    def test_empty_document(self) -> None:
        assert render_text("") == []


class TestSkippedContent:
    def test_head_and_title_skipped(self) -> None:
        html = "<html><head><title>T</title></head><body><p>x</p></body></html>"
        assert render_text(html) == ["x"]

    def test_style_and_noscript_skipped(self) -> None:
        html = "<style>p { color: red }</style><noscript>enable js</noscript><p>x</p>"
        assert render_text(html) == ["x"]

    def test_comments_and_doctype_skipped(self) -> None:
        assert render_text("<!DOCTYPE html><p>a<!-- c -->b</p>") == ["ab"]


class TestStructure:
    def test_headings_underlined(self) -> None:
        html = "<h1>Title</h1><h2>Sub</h2><h3>Minor</h3><p>Body</p>"
        assert render_text(html) == [
            "Title", "=====", "", "Sub", "---", "", "Minor", "", "Body",
        ]

    def test_unordered_list(self) -> None:
        assert render_text("<ul><li>One</li><li>Two</li></ul>") == ["* One", "* Two"]

    def test_ordered_list(self) -> None:
        assert render_text("<ol><li>A</li><li>B</li></ol>") == ["1. A", "2. B"]

    def test_nested_list(self) -> None:
        html = "<ul><li>A<ul><li>B</li></ul></li><li>C</li></ul>"
        assert render_text(html) == ["* A", "  * B", "* C"]

    def test_list_separated_from_paragraph(self) -> None:
        html = "<p>Intro</p><ul><li>One</li></ul><p>Outro</p>"
        assert render_text(html) == ["Intro", "", "* One", "", "Outro"]

    def test_blockquote(self) -> None:
        assert render_text("<blockquote><p>Quote</p></blockquote>") == ["> Quote"]

    def test_preformatted_kept_verbatim(self) -> None:
        html = "<pre>\n  code  here\n\tx</pre>"
        assert render_text(html) == ["  code  here", "        x"]

    def test_horizontal_rule_uses_width(self) -> None:
        html = "<p>a</p><hr><p>b</p>"
        assert render_text(html, width=10) == ["a", "", "-" * 10, "", "b"]

    def test_table_rendered_fixed_width(self) -> None:
        html = (
            "<table>"
            "<tr><th>Name</th><th>Qty</th></tr>"
            "<tr><td>Apple</td><td>3</td></tr>"
            "</table>"
        )
        assert render_text(html) == [
            "+-------+-----+",
            "| Name  | Qty |",
            "+-------+-----+",
            "| Apple | 3   |",
            "+-------+-----+",
        ]

    def test_ragged_table_rows_padded(self) -> None:
        html = "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td></tr></table>"
        assert render_text(html) == [
            "+---+---+",
            "| a | b |",
            "| c |   |",
            "+---+---+",
        ]


class TestLinkTokens:
    def test_token_copied_verbatim(self) -> None:
        html = "<p>See [About](https://x.test/about) now</p>"
        assert render_text(html) == ["See [About](https://x.test/about) now"]

    def test_token_in_table_cell(self) -> None:
        html = "<table><tr><td>[A](https://x.test/a)</td></tr></table>"
        assert "| [A](https://x.test/a) |" in render_text(html)

    def test_token_in_list_item(self) -> None:
        html = "<ul><li>[A](https://x.test/a)</li></ul>"
        assert render_text(html) == ["* [A](https://x.test/a)"]


class TestFailure:
    def test_too_deeply_nested_document_raises_render_error(self) -> None:
        html = "<span>" * 5000 + "deep" + "</span>" * 5000
        with pytest.raises(RenderError, match="error converting html to text"):
            render_text(html)
