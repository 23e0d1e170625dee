"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MENUWALK_ prefix (e.g., MENUWALK_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MENUWALK_ prefix.

    Examples:
        MENUWALK_STRICT_MODE=true
        MENUWALK_URL_MAX_LENGTH=1024
        MENUWALK_ICON_PREFIX=fa
    """

    model_config = SettingsConfigDict(
        env_prefix="MENUWALK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Sanitization configuration
    url_max_length: int = Field(
        default=2000,
        description="URLs longer than this are replaced by the placeholder URL",
    )

    class_max_length: int = Field(
        default=200,
        description="CSS class strings are truncated to this length before sanitization",
    )

    content_max_length: int = Field(
        default=5000,
        description="HTML content (descriptions) is truncated to this length before sanitization",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: additionally block script markers and event-handler patterns in URLs",
    )

    allowed_protocols: List[str] = Field(
        default=["http", "https", "mailto", "tel"],
        description="URL schemes accepted by the URL sanitizer",
    )

    placeholder_url: str = Field(
        default="#",
        description="Safe URL substituted for empty or rejected links",
    )

    url_cache_size: int = Field(
        default=2048,
        description="Number of distinct URLs memoized by the URL sanitizer",
    )

    # Node construction
    icon_prefix: str = Field(
        default="fa",
        description="Base framework class prepended to icon tokens",
    )

    icon_marker: str = Field(
        default="fa-",
        description="Substring identifying an icon token in tooltips and classes",
    )

    has_children_class: str = Field(
        default="menu-item-has-children",
        description="Marker class identifying nodes that own a submenu",
    )

    root_parent_id: int = Field(
        default=0,
        description="Parent id carried by top-level nodes (tree root sentinel)",
    )

    # Rendering
    default_variant: str = Field(
        default="dropdown",
        description="Variant rendered by the CLI when --variant is not given",
    )

    debug_mode: bool = Field(
        default=False,
        description="Emit HTML comments with render statistics after each menu",
    )

    def iconClass_make(self, token: str) -> str:
        """
        Prefix an icon token with the base framework class.

        Args:
            token: Icon token such as 'fa-home'

        Returns:
            Token carrying the base class (e.g., 'fa fa-home')

        Example:
            >>> settings = AppSettings()
            >>> settings.iconClass_make('fa-home')
            'fa fa-home'
        """
        return f"{self.icon_prefix} {token}"

    def protocols_get(self) -> tuple:
        """Allowed protocols as a normalized, hashable tuple"""
        return tuple(p.strip().lower() for p in self.allowed_protocols if p.strip())


# Singleton instance - import this in your code
appsettings = AppSettings()
