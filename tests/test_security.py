"""
Sanitization boundary tests

URL, class and content sanitization plus the escaping helpers.
"""

import pytest

from menuwalk.config import appsettings
from menuwalk.lib.security import (
    url_sanitize,
    url_clean,
    relativeUrl_is,
    cssClass_sanitize,
    classList_sanitize,
    htmlContent_sanitize,
    text_strip,
    html_escape,
    attribute_escape,
    javascript_escape,
    itemId_sanitize,
    depth_sanitize,
)


URL_SAMPLES = [
    "",
    "   ",
    "/about",
    "  /about  ",
    "#",
    "https://example.com/a b",
    "https://example.com/path?q=1#frag",
    "http:///nohost",
    "//evil.example.com/x",
    "javascript:alert(1)",
    "JaVaScRiPt:alert(1)",
    "java\tscript:alert(1)",
    "data:text/html;base64,AAAA",
    "mailto:someone@example.com",
    "tel:+15551234",
    "ftp://files.example.com",
    "/search?q=<script>",
    "/café",
    "/" + "a" * 2100,
]


class TestUrlSanitize:
    """URL sanitization outcomes"""

    def test_relative_paths_pass(self):
        """Relative paths pass through trimmed"""
        assert url_sanitize("/about") == "/about"
        assert url_sanitize("  /about  ") == "/about"
        assert url_sanitize("#") == "#"

    def test_empty_and_none_become_placeholder(self):
        """Empty, blank and None give the placeholder"""
        assert url_sanitize("") == appsettings.placeholder_url
        assert url_sanitize("   ") == appsettings.placeholder_url
        assert url_sanitize(None) == appsettings.placeholder_url

    def test_script_schemes_rejected(self):
        """Script and data schemes are rejected regardless of case"""
        assert url_sanitize("javascript:alert(1)") == "#"
        assert url_sanitize("JaVaScRiPt:alert(1)") == "#"
        assert url_sanitize("vbscript:msgbox(1)") == "#"
        assert url_sanitize("data:text/html;base64,AAAA") == "#"

    def test_control_characters_cannot_hide_scheme(self):
        """Browsers ignore tabs inside schemes, so they are removed before the scheme check"""
        assert url_sanitize("java\tscript:alert(1)") == "#"
        assert url_sanitize("java\nscript:alert(1)") == "#"

    def test_allowed_protocols(self):
        """Only allow-listed schemes pass; the list can be widened"""
        assert url_sanitize("mailto:someone@example.com") == "mailto:someone@example.com"
        assert url_sanitize("tel:+15551234") == "tel:+15551234"
        assert url_sanitize("ftp://files.example.com") == "#"
        assert url_sanitize("ftp://files.example.com", allowed_protocols=["ftp"]) == "ftp://files.example.com"

    def test_http_requires_host(self):
        """http(s) URLs need a host"""
        assert url_sanitize("https://example.com/x") == "https://example.com/x"
        assert url_sanitize("http:///nohost") == "#"

    def test_protocol_relative_rejected(self):
        """Protocol-relative URLs are rejected"""
        assert url_sanitize("//evil.example.com/x") == "#"

    def test_spaces_encoded(self):
        """Spaces are percent-encoded"""
        assert url_sanitize("https://example.com/a b") == "https://example.com/a%20b"

    def test_disallowed_characters_dropped(self):
        """Characters outside the URL alphabet are dropped"""
        assert url_sanitize("/search?q=<script>", strict=False) == "/search?q=script"
        assert url_sanitize('/a"b') == "/ab"

    def test_non_ascii_kept(self):
        """Non-ASCII letters are kept"""
        assert url_sanitize("/café") == "/café"

    def test_too_long_rejected(self):
        """URLs over the length ceiling are rejected"""
        assert url_sanitize("/" + "a" * (appsettings.url_max_length + 1)) == "#"

    def test_strict_mode_blocks_markers(self):
        """Strict mode rejects markup, handlers and entities"""
        assert url_sanitize("/search?q=<script>", strict=True) == "#"
        assert url_sanitize("/a?onclick=1", strict=True) == "#"
        assert url_sanitize("/a?onclick=1", strict=False) == "/a?onclick=1"
        assert url_sanitize("/a?x=&#106;", strict=True) == "#"

    def test_non_string_input(self):
        """Non-string input is converted first"""
        assert url_sanitize(42) == "42"

    @pytest.mark.parametrize("url", URL_SAMPLES)
    def test_idempotent(self, url):
        """Sanitizing a sanitized URL changes nothing"""
        once = url_sanitize(url)
        assert url_sanitize(once) == once

    @pytest.mark.parametrize("url", URL_SAMPLES)
    def test_never_empty(self, url):
        """The result is never an empty string"""
        assert url_sanitize(url) != ""


class TestUrlHelpers:
    """url_clean and relativeUrl_is"""

    def test_clean_is_idempotent(self):
        """Cleaning twice equals cleaning once"""
        raw = " https://example.com/a b\x00<c> "
        assert url_clean(url_clean(raw)) == url_clean(raw)

    def test_relative_detection(self):
        """Scheme-less, non-protocol-relative URLs are relative"""
        assert relativeUrl_is("/x")
        assert relativeUrl_is("page.html")
        assert not relativeUrl_is("https://example.com")
        assert not relativeUrl_is("//example.com")


class TestClassSanitize:
    """CSS class sanitization"""

    def test_strips_and_deduplicates(self):
        """Invalid characters are stripped and repeats dropped"""
        assert cssClass_sanitize("a b<c> a") == "a bc"

    def test_percent_octets_removed(self):
        """Percent-encoded octets are removed"""
        assert cssClass_sanitize("%3Cscript%3E") == "script"
        assert cssClass_sanitize("foo%20bar") == "foobar"

    def test_list_input(self):
        """Lists are sanitized item by item, skipping blanks"""
        assert classList_sanitize(["x", None, "", "y x"]) == ["x", "y"]

    def test_empty(self):
        """None, empty lists and all-invalid input give an empty string"""
        assert cssClass_sanitize(None) == ""
        assert cssClass_sanitize([]) == ""
        assert cssClass_sanitize("<>") == ""

    def test_truncated_before_split(self):
        """Class strings are cut to the length ceiling"""
        result = cssClass_sanitize("a" * 300)
        assert len(result) == appsettings.class_max_length

    def test_output_alphabet(self):
        """Output holds only letters, digits, underscores, hyphens and spaces"""
        result = cssClass_sanitize("ok! we'll \"see\" {x} _under-score")
        assert all(ch.isalnum() or ch in "_- " for ch in result)


class TestContentSanitize:
    """Inline HTML allow-list"""

    def test_script_removed_with_content(self):
        """Scripts are removed along with their content"""
        assert htmlContent_sanitize("<script>x</script><em>y</em>") == "<em>y</em>"

    def test_link_href_sanitized_and_handlers_dropped(self):
        """Link hrefs are sanitized and event handlers dropped"""
        result = htmlContent_sanitize('<a href="javascript:alert(1)" onclick="x()">go</a>')
        assert result == '<a href="#">go</a>'

    def test_links_disallowed(self):
        """Links are unwrapped when not allowed"""
        assert htmlContent_sanitize('<a href="/x">go</a>', allow_links=False) == "go"

    def test_unknown_tags_unwrapped(self):
        """Tags outside the allow-list are unwrapped"""
        assert htmlContent_sanitize("<div><strong>hi</strong></div>") == "<strong>hi</strong>"

    def test_class_attribute_sanitized(self):
        """class attributes go through the class sanitizer"""
        assert htmlContent_sanitize('<span class="ok bad!">t</span>') == '<span class="ok bad">t</span>'

    def test_comments_removed(self):
        """HTML comments are removed"""
        assert htmlContent_sanitize("a<!-- secret -->b") == "ab"

    def test_empty(self):
        """None and empty input give an empty string"""
        assert htmlContent_sanitize(None) == ""
        assert htmlContent_sanitize("") == ""


class TestEscaping:
    """Escaping and scalar sanitizers"""

    def test_text_strip(self):
        """Markup is removed and entities decoded"""
        assert text_strip("<b>Tom &amp; Jerry</b>") == "Tom & Jerry"
        assert text_strip("  plain  ") == "plain"
        assert text_strip("<style>p{}</style>Hi") == "Hi"
        assert text_strip(None) == ""

    def test_html_escape(self):
        """Text is HTML-escaped including quotes"""
        assert html_escape('Tom & "J"') == "Tom &amp; &quot;J&quot;"
        assert html_escape(None) == ""

    def test_attribute_escape(self):
        """Attribute values are trimmed and escaped"""
        assert attribute_escape(" <x> ") == "&lt;x&gt;"

    def test_javascript_escape(self):
        """Values become JavaScript literals"""
        assert javascript_escape('a"b') == '"a\\"b"'
        assert javascript_escape(None) == "null"

    def test_item_id(self):
        """Ids parse to non-negative integers or 0"""
        assert itemId_sanitize("42") == 42
        assert itemId_sanitize(-5) == 5
        assert itemId_sanitize("x") == 0
        assert itemId_sanitize(None) == 0

    def test_depth(self):
        """Depths are clamped to 0..10"""
        assert depth_sanitize(3) == 3
        assert depth_sanitize(99) == 10
        assert depth_sanitize(-1) == 0
        assert depth_sanitize("bad") == 0
