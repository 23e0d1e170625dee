"""
Render option resolution

RenderOptions merges caller overrides onto a fixed defaults map. The key-set
is closed: an override for a key the defaults do not define is a
configuration error raised at construction time.
"""

import hashlib
import json
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

ACCORDION_MODES = ("classic", "independent", "exclusive")


class OptionsError(ValueError):
    """Raised for unknown option keys or invalid option values"""
    pass


def _bool_parse(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class RenderOptions:
    """
    Validated, read-only option set for one render call.

    Args:
        defaults: Complete key-set with default values
        overrides: Caller values; every key must exist in ``defaults``
        name: Label used in error messages (e.g. "'mobile' strategy option")

    Raises:
        OptionsError: on unknown keys, a non-integer value for an integer
            option, or an unknown accordion_mode

    Example:
        >>> options = RenderOptions({'max_depth': 2, 'menu_class': 'nav'}, {'max_depth': 3})
        >>> options.int_get('max_depth')
        3
        >>> RenderOptions({'max_depth': 2}, {'max_dpeth': 3})
        Traceback (most recent call last):
        ...
        menuwalk.models.options.OptionsError: Unknown option key(s): max_dpeth ...
    """

    def __init__(
        self,
        defaults: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
        name: str = "option",
    ) -> None:
        overrides = dict(overrides or {})
        unknown = sorted(key for key in overrides if key not in defaults)
        if unknown:
            raise OptionsError(
                f"Unknown {name} key(s): {', '.join(unknown)}. "
                f"Valid keys: {', '.join(sorted(defaults))}"
            )

        merged = {**defaults, **overrides}
        self._name = name
        self._defaults = MappingProxyType(dict(defaults))
        self._overrides = MappingProxyType(overrides)
        self._values = MappingProxyType(merged)
        self._cssClasses: Dict[str, str] = {}
        self._fingerprint: Optional[str] = None

        self._validate()

    def _validate(self) -> None:
        for key, default in self._defaults.items():
            value = self._values[key]
            if isinstance(default, int) and not isinstance(default, bool):
                try:
                    int(value)
                except (TypeError, ValueError):
                    raise OptionsError(f"{self._name} '{key}' must be an integer, got {value!r}")

        if "accordion_mode" in self._values and self._values["accordion_mode"] not in ACCORDION_MODES:
            raise OptionsError(
                f"{self._name} 'accordion_mode' must be one of {', '.join(ACCORDION_MODES)}, "
                f"got {self._values['accordion_mode']!r}"
            )

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"RenderOptions({dict(self._values)!r})"

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def has(self, key: str) -> bool:
        """True when ``key`` is defined and not None"""
        return self._values.get(key) is not None

    def bool_get(self, key: str, default: bool = False) -> bool:
        if key not in self._values:
            return default
        return _bool_parse(self._values[key])

    def int_get(self, key: str, default: int = 0) -> int:
        try:
            return int(self._values.get(key, default))
        except (TypeError, ValueError):
            return default

    def str_get(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        return default if value is None else str(value)

    def list_get(self, key: str, default: Optional[List[Any]] = None) -> List[Any]:
        value = self._values.get(key)
        if value is None:
            return list(default or [])
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value] if value != "" else []

    def cssClass_get(self, key: str, default: str = "") -> str:
        """
        Class string for ``key``: lists are space-joined, strings trimmed.

        Configured classes are trusted configuration and are not run through
        the class sanitizer; attribute escaping still applies on output.
        """
        if key not in self._cssClasses:
            value = self._values.get(key, default)
            if isinstance(value, (list, tuple)):
                result = " ".join(str(v).strip() for v in value if v and str(v).strip())
            else:
                result = str(value or "").strip()
            self._cssClasses[key] = result
        return self._cssClasses[key]

    def options_with(self, overrides: Mapping[str, Any]) -> "RenderOptions":
        """New RenderOptions over the same defaults with ``overrides`` layered on top"""
        return RenderOptions(self._defaults, {**self._overrides, **dict(overrides)}, self._name)

    def customizations_get(self) -> Dict[str, Any]:
        """Options whose value differs from the default"""
        return {k: v for k, v in self._values.items() if self._defaults.get(k) != v}

    def fingerprint_get(self) -> str:
        """Stable digest of the resolved values (used in fragment cache keys)"""
        if self._fingerprint is None:
            payload = json.dumps(dict(self._values), sort_keys=True, default=str)
            self._fingerprint = hashlib.md5(payload.encode("utf-8")).hexdigest()
        return self._fingerprint

    def asdict(self) -> Dict[str, Any]:
        return dict(self._values)
