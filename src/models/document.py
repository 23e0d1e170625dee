"""
Menu document schema

A menu document (YAML or JSON) assigns item lists to locations and may
carry per-variant options:

    locations:
      primary:
        - ID: 1
          title: Home
          url: /
        - ID: 2
          title: Shop
          url: /shop
          children:
            - {ID: 3, title: Shoes, url: /shop/shoes}
    options:
      mobile:
        options: {menu_id: main-mobile}
        extra_options: {accordion_mode: exclusive}

Items may be nested with ``children`` or given flat with
``menu_item_parent``; both forms can be mixed.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MenuItemModel(BaseModel):
    """One item in host shape (field names follow the host's menu items)"""

    model_config = ConfigDict(extra="ignore")

    ID: int = Field(default=0, ge=0, description="Item id, unique within the document")
    title: str = Field(default="", description="Label; may contain markup")
    url: str = Field(default="", description="Link target")
    classes: List[str] = Field(default_factory=list, description="CSS classes")
    target: str = Field(default="", description="Link target window")
    xfn: str = Field(default="", description="Link relationship")
    attr_title: str = Field(default="", description="Tooltip or icon token")
    description: str = Field(default="", description="Inline HTML description")
    menu_item_parent: int = Field(default=0, ge=0, description="Parent item id (0 = top level)")
    current: bool = False
    current_item_ancestor: bool = False
    current_item_parent: bool = False
    children: List["MenuItemModel"] = Field(default_factory=list)

    @field_validator("classes", mode="before")
    @classmethod
    def classes_split(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        return value

    @field_validator("title", "url", "target", "xfn", "attr_title", "description", mode="before")
    @classmethod
    def text_coerce(cls, value: Any) -> Any:
        return "" if value is None else str(value)


MenuItemModel.model_rebuild()


class VariantOptionsModel(BaseModel):
    """Options stored in a document for one variant"""

    model_config = ConfigDict(extra="forbid")

    options: Dict[str, Any] = Field(default_factory=dict)
    extra_options: Dict[str, Any] = Field(default_factory=dict)


class MenuDocumentModel(BaseModel):
    """Top-level menu document"""

    model_config = ConfigDict(extra="ignore")

    locations: Dict[str, List[MenuItemModel]] = Field(default_factory=dict)
    options: Dict[str, VariantOptionsModel] = Field(default_factory=dict)
