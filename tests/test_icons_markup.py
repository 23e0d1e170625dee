"""
Icon markup and element builder tests
"""

from menuwalk.lib.icons import icon_render, iconType_detect, svg_get, svgNames_list
from menuwalk.lib.markup import attributes_build, classes_join, element_build, attributes_merge


class TestIconTypes:
    """Icon reference classification"""

    def test_detect(self):
        """References are classified by prefix and extension"""
        assert iconType_detect("fa-home") == "fontawesome"
        assert iconType_detect("fas fa-home") == "fontawesome"
        assert iconType_detect("svg-chevron-down") == "svg"
        assert iconType_detect("/icons/logo.svg") == "svg"
        assert iconType_detect("/icons/logo.png") == "image"
        assert iconType_detect("&#9733;") == "unicode"
        assert iconType_detect("material-home") == "custom"


class TestIconRender:
    """Markup per icon type"""

    def test_fontawesome(self):
        """Font Awesome tokens render as <i> with the base prefix"""
        assert icon_render("fa-home") == '<i class="fa fa-home" aria-hidden="true"></i>'
        assert icon_render("fa-home", "menu-icon") == '<i class="fa fa-home menu-icon" aria-hidden="true"></i>'

    def test_inline_svg(self):
        """Known svg- names render inline with the extra class"""
        markup = icon_render("svg-chevron-down", "caret")
        assert markup.startswith('<svg class="caret"')
        assert 'aria-hidden="true"' in markup

    def test_svg_file(self):
        """SVG file paths render as <img>"""
        assert icon_render("/icons/logo.svg").startswith('<img src="/icons/logo.svg"')

    def test_image(self):
        """Images render with their URL and an empty alt"""
        markup = icon_render("/img/home.png")
        assert 'src="/img/home.png"' in markup
        assert 'alt=""' in markup

    def test_image_with_bad_url(self):
        """Images with unsafe URLs render nothing"""
        assert icon_render("javascript:alert(1).png") == ""

    def test_unicode(self):
        """Entities render inside a hidden span"""
        assert icon_render("&#9733;") == '<span class="menu-icon-unicode" aria-hidden="true">&#9733;</span>'

    def test_custom(self):
        """Custom class tokens render as <i>; invalid ones render nothing"""
        assert icon_render("material-home") == '<i class="material-home" aria-hidden="true"></i>'
        assert icon_render('bad"><script>') == ""

    def test_fallback(self):
        """The fallback icon is used only when given"""
        assert icon_render(None, fallback="fa-circle") == '<i class="fa fa-circle" aria-hidden="true"></i>'
        assert icon_render(None) == ""

    def test_svg_names(self):
        """Predefined SVG names are listed; unknown names give nothing"""
        assert "chevron-down" in svgNames_list()
        assert svg_get("no-such-icon") == ""


class TestMarkup:
    """Attribute and element builders"""

    def test_attributes(self):
        """True renders bare, False and None are dropped, empty strings only for alt"""
        assert attributes_build({"id": "a", "x-cloak": True, "title": ""}) == ' id="a" x-cloak'
        assert attributes_build({"hidden": False, "data": None}) == ""
        assert attributes_build({"alt": ""}) == ' alt=""'

    def test_attribute_values_escaped(self):
        """Attribute values are HTML-escaped"""
        assert attributes_build({"title": 'say "hi" <b>'}) == ' title="say &quot;hi&quot; &lt;b&gt;"'

    def test_list_values(self):
        """List values are joined and deduplicated"""
        assert attributes_build({"class": ["a", "", "b", "a"]}) == ' class="a b"'

    def test_classes_join(self):
        """Class fragments are joined without blanks or repeats"""
        assert classes_join("a b", "", None, ["b", "c"]) == "a b c"

    def test_element(self):
        """element_build() wraps content in the tag"""
        assert element_build("span", "x", {"class": "c"}) == '<span class="c">x</span>'

    def test_merge(self):
        """Merging appends classes and overrides other attributes"""
        merged = attributes_merge({"class": "a", "id": "x"}, {"class": "b", "id": "y"})
        assert merged == {"class": "a b", "id": "y"}
