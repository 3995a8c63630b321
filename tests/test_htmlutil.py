import io

import pytest

from fineprint.htmlutil import extract_text


@pytest.mark.parametrize(
    "html, expected",
    [
        ("<html><body><p>Hello world</p></body></html>", "Hello world"),
        (
            "<html><body><p>First paragraph</p><p>Second paragraph</p></body></html>",
            "First paragraph Second paragraph",
        ),
        (
            "<html><body><div><p>Nested <strong>text</strong></p></div></body></html>",
            "Nested text",
        ),
        ("<html><body><h1>Title</h1><p>Content</p></body></html>", "Title Content"),
    ],
    ids=["simple", "multiple_paragraphs", "nested", "headings"],
)
def test_basic_html(html, expected):
    assert extract_text(html) == expected


@pytest.mark.parametrize(
    "html, expected",
    [
        ("", ""),
        ("<html><body><p>unclosed paragraph</body></html>", "unclosed paragraph"),
        ("<html><head><title>No body</title></head></html>", ""),
        ("<html><body></body></html>", ""),
        (r"<html><body>   \n\t  </body></html>", r"\n\t"),
        ("<body><p>Direct body</p></body>", "Direct body"),
    ],
    ids=["empty", "malformed", "no_body_tag", "empty_body", "whitespace", "no_html_tag"],
)
def test_edge_cases(html, expected):
    assert extract_text(html) == expected


DEEPLY_NESTED = """<html><body>
\t\t\t\t<div class="container">
\t\t\t\t\t<header>
\t\t\t\t\t\t<h1>Main Title</h1>
\t\t\t\t\t\t<nav><a href="#">Link</a></nav>
\t\t\t\t\t</header>
\t\t\t\t\t<main>
\t\t\t\t\t\t<article>
\t\t\t\t\t\t\t<h2>Article Title</h2>
\t\t\t\t\t\t\t<p>First paragraph with <em>emphasis</em> and <strong>bold</strong>.</p>
\t\t\t\t\t\t\t<ul>
\t\t\t\t\t\t\t\t<li>Item one</li>
\t\t\t\t\t\t\t\t<li>Item two</li>
\t\t\t\t\t\t\t</ul>
\t\t\t\t\t\t</article>
\t\t\t\t\t</main>
\t\t\t\t</div>
\t\t\t</body></html>"""

TABLE = """<html><body>
\t\t\t\t<table>
\t\t\t\t\t<thead>
\t\t\t\t\t\t<tr><th>Header 1</th><th>Header 2</th></tr>
\t\t\t\t\t</thead>
\t\t\t\t\t<tbody>
\t\t\t\t\t\t<tr><td>Cell 1</td><td>Cell 2</td></tr>
\t\t\t\t\t\t<tr><td>Cell 3</td><td>Cell 4</td></tr>
\t\t\t\t\t</tbody>
\t\t\t\t</table>
\t\t\t</body></html>"""

FORM = """<html><body>
\t\t\t\t<form>
\t\t\t\t\t<label>Name:</label>
\t\t\t\t\t<input type="text" placeholder="Enter name">
\t\t\t\t\t<button>Submit</button>
\t\t\t\t</form>
\t\t\t</body></html>"""


@pytest.mark.parametrize(
    "html, expected",
    [
        (
            DEEPLY_NESTED,
            "Main Title Link Article Title First paragraph with emphasis and bold . "
            "Item one Item two",
        ),
        (TABLE, "Header 1 Header 2 Cell 1 Cell 2 Cell 3 Cell 4"),
        (FORM, "Name: Submit"),
    ],
    ids=["deeply_nested", "table", "form"],
)
def test_complex_html(html, expected):
    assert extract_text(html) == expected


@pytest.mark.parametrize(
    "html, expected",
    [
        (
            "<html><body><p>Text    with     multiple   spaces</p></body></html>",
            "Text    with     multiple   spaces",
        ),
        (
            r"<html><body><p>Text\n\twith\n\tnewlines\tand\ttabs</p></body></html>",
            r"Text\n\twith\n\tnewlines\tand\ttabs",
        ),
        (
            "<html><body><p>   Leading and trailing   </p></body></html>",
            "Leading and trailing",
        ),
        (
            "<html><body>\n\t\t\t\t<p>First</p>\n\t\t\t\t<p>Second</p>\n"
            "\t\t\t\t<p>Third</p>\n\t\t\t</body></html>",
            "First Second Third",
        ),
        (
            "<html><body><p>Word one</p> <p>Word two</p></body></html>",
            "Word one Word two",
        ),
    ],
    ids=["multiple_spaces", "escaped_newlines", "trim", "between_elements", "single_spaces"],
)
def test_whitespace_handling(html, expected):
    assert extract_text(html) == expected


@pytest.mark.parametrize(
    "html, expected",
    [
        (
            "<html><body>\n<p>Before script</p>\n<script>console.log('hello');</script>\n"
            "<p>After script</p>\n</body></html>",
            "Before script console.log('hello'); After script",
        ),
        (
            "<html><body>\n<p>Before style</p>\n<style>body { color: red; }</style>\n"
            "<p>After style</p>\n</body></html>",
            "Before style body { color: red; } After style",
        ),
        (
            "<html><body>\n<p>Before comment</p>\n<!-- This is a comment -->\n"
            "<p>After comment</p>\n</body></html>",
            "Before comment After comment",
        ),
        (
            "<html>\n<head>\n<title>Page Title</title>\n"
            '<meta name="description" content="Page description">\n</head>\n'
            "<body>\n<p>Body content</p>\n</body>\n</html>",
            "Body content",
        ),
        (
            "<html><body>\n<p>Content</p>\n<script>var x = 1;</script>\n"
            "<style>.class { margin: 0; }</style>\n<noscript>No JavaScript</noscript>\n"
            "<p>More content</p>\n</body></html>",
            "Content var x = 1; .class { margin: 0; } No JavaScript More content",
        ),
    ],
    ids=["script", "style", "comment", "head_ignored", "mixed"],
)
def test_special_elements(html, expected):
    assert extract_text(html) == expected


REAL_WORLD = """<!DOCTYPE html>
<html lang="en">
<head>
\t<meta charset="UTF-8">
\t<title>Terms of Service</title>
\t<style>
\t\tbody { font-family: Arial, sans-serif; }
\t\t.section { margin: 20px 0; }
\t</style>
</head>
<body>
\t<header>
\t\t<h1>Terms of Service</h1>
\t\t<nav>
\t\t\t<a href="#section1">Section 1</a>
\t\t\t<a href="#section2">Section 2</a>
\t\t</nav>
\t</header>
\t
\t<main>
\t\t<section id="section1" class="section">
\t\t\t<h2>1. Acceptance of Terms</h2>
\t\t\t<p>By using our service, you agree to these terms.</p>
\t\t\t<ul>
\t\t\t\t<li>You must be 18 years or older</li>
\t\t\t\t<li>You must provide accurate information</li>
\t\t\t</ul>
\t\t</section>
\t\t
\t\t<section id="section2" class="section">
\t\t\t<h2>2. Privacy Policy</h2>
\t\t\t<p>We respect your privacy and handle data according to our <a href="/privacy">Privacy Policy</a>.</p>
\t\t</section>
\t</main>
\t
\t<footer>
\t\t<p>Last updated 2024 by Example Company.</p>
\t</footer>
\t
\t<script>
\t\tconsole.log('Terms loaded');
\t</script>
</body>
</html>"""

REAL_WORLD_TEXT = (
    "Terms of Service Section 1 Section 2 1. Acceptance of Terms By using our service, "
    "you agree to these terms. You must be 18 years or older You must provide accurate "
    "information 2. Privacy Policy We respect your privacy and handle data according to "
    "our Privacy Policy . Last updated 2024 by Example Company. "
    "console.log('Terms loaded');"
)


def test_real_world_example():
    assert extract_text(REAL_WORLD) == REAL_WORLD_TEXT


def test_accepts_file_like_text():
    assert extract_text(io.StringIO("<p>From a stream</p>")) == "From a stream"


def test_accepts_bytes():
    html = "<html><body><p>caf\u00e9</p></body></html>".encode("utf-8")
    assert extract_text(html) == "caf\u00e9"