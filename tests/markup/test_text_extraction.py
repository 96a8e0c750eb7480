from __future__ import annotations

from pdftranslator.markup import extract_fragments, fragments_to_text, parse_markup, text_to_fragments

_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>Converted document</title>
  <style>.t { font-size: 12px; }</style>
</head>
<body>
  <div class="pf">
    <div class="t">Hello <span>brave</span> world</div>
    <!-- page break -->
    <script>var pages = 1;</script>
    <div class="t">  Second line  </div>
    <noscript>Enable scripts</noscript>
  </div>
</body>
</html>
"""


def test_fragments_follow_document_order_and_skip_hidden_text() -> None:
    fragments = extract_fragments(parse_markup(_PAGE))

    assert fragments == ["Hello", "brave", "world", "Second line"]


def test_extraction_is_idempotent() -> None:
    tree = parse_markup(_PAGE)

    assert extract_fragments(tree) == extract_fragments(tree)


def test_style_and_script_only_body_yields_nothing() -> None:
    tree = parse_markup("<html><body><style>p {}</style><script>x()</script>  \n </body></html>")

    assert extract_fragments(tree) == []


def test_fragment_text_round_trip_flattens_line_breaks() -> None:
    text = fragments_to_text(["one", "two\r\nlines", "three"])

    assert text == "one\ntwo lines\nthree\n"
    assert text_to_fragments(text) == ["one", "two lines", "three"]
    assert text_to_fragments("\n  a \n\n b\n") == ["a", "b"]
