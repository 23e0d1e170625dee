"""
RenderOptions tests

Closed key-set validation, typed accessors and derived values.
"""

import pytest

from menuwalk.models.options import RenderOptions, OptionsError
from menuwalk.lib.strategies import DropdownStrategy, MobileAccordionStrategy


DEFAULTS = {
    "max_depth": 2,
    "menu_class": "nav",
    "show_indicators": True,
    "classes": ["a", "b"],
    "fallback_icon": None,
}


class TestValidation:
    """Unknown keys and invalid values fail at construction"""

    def test_unknown_key_raises(self):
        """A misspelt key is reported by name"""
        with pytest.raises(OptionsError) as excinfo:
            RenderOptions(DEFAULTS, {"max_dpeth": 3})
        assert "max_dpeth" in str(excinfo.value)

    def test_options_error_is_value_error(self):
        """OptionsError is a ValueError"""
        with pytest.raises(ValueError):
            RenderOptions(DEFAULTS, {"nope": 1})

    def test_non_integer_for_integer_key(self):
        """A non-numeric value for an integer key is rejected"""
        with pytest.raises(OptionsError):
            RenderOptions(DEFAULTS, {"max_depth": "deep"})

    def test_integer_string_accepted(self):
        """Numeric strings are accepted for integer keys"""
        assert RenderOptions(DEFAULTS, {"max_depth": "4"}).int_get("max_depth") == 4

    def test_invalid_accordion_mode(self):
        """An unknown accordion mode is rejected"""
        with pytest.raises(OptionsError):
            MobileAccordionStrategy.options_make({"accordion_mode": "sometimes"})

    def test_strategy_defaults_are_closed(self):
        """A strategy rejects keys from another strategy"""
        with pytest.raises(OptionsError):
            DropdownStrategy.options_make({"accordion_mode": "classic"})


class TestAccessors:
    """Typed reads over merged values"""

    def test_defaults_and_overrides(self):
        """Overrides replace defaults, the rest keep their defaults"""
        options = RenderOptions(DEFAULTS, {"menu_class": "main"})
        assert options.str_get("menu_class") == "main"
        assert options.int_get("max_depth") == 2

    def test_bool_get(self):
        """String booleans are parsed; missing keys use the default"""
        options = RenderOptions(DEFAULTS, {"show_indicators": "false"})
        assert options.bool_get("show_indicators") is False
        assert options.bool_get("missing", True) is True

    def test_css_class_get_joins_lists(self):
        """List class values are joined with spaces"""
        options = RenderOptions(DEFAULTS)
        assert options.cssClass_get("classes") == "a b"
        assert options.cssClass_get("menu_class") == "nav"

    def test_list_get(self):
        """Scalars become one-item lists and None an empty list"""
        options = RenderOptions(DEFAULTS, {"menu_class": "x"})
        assert options.list_get("classes") == ["a", "b"]
        assert options.list_get("menu_class") == ["x"]
        assert options.list_get("fallback_icon") == []

    def test_has(self):
        """has() is false for None values; membership tests the key set"""
        options = RenderOptions(DEFAULTS)
        assert options.has("menu_class")
        assert not options.has("fallback_icon")
        assert "fallback_icon" in options

    def test_asdict_is_a_copy(self):
        """Mutating asdict() output leaves the options unchanged"""
        options = RenderOptions(DEFAULTS)
        values = options.asdict()
        values["menu_class"] = "changed"
        assert options.str_get("menu_class") == "nav"


class TestDerived:
    """Customizations, layering and fingerprints"""

    def test_customizations(self):
        """Only values differing from the defaults are customizations"""
        options = RenderOptions(DEFAULTS, {"max_depth": 3, "menu_class": "nav"})
        assert options.customizations_get() == {"max_depth": 3}

    def test_options_with(self):
        """Layering returns new options and leaves the original alone"""
        options = RenderOptions(DEFAULTS, {"max_depth": 3})
        layered = options.options_with({"menu_class": "x"})
        assert layered.int_get("max_depth") == 3
        assert layered.str_get("menu_class") == "x"
        assert options.str_get("menu_class") == "nav"

    def test_fingerprint_stable_and_sensitive(self):
        """Equal values share a fingerprint, different values do not"""
        first = RenderOptions(DEFAULTS, {"max_depth": 3}).fingerprint_get()
        second = RenderOptions(DEFAULTS, {"max_depth": 3}).fingerprint_get()
        third = RenderOptions(DEFAULTS, {"max_depth": 4}).fingerprint_get()
        assert first == second
        assert first != third
