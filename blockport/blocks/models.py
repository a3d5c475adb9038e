"""Input models: parsed content blocks and rendered element snapshots."""

import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from blockport.common.models import Box

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class ContentBlock(BaseModel):
    """One block recovered from comment-delimited markup."""

    namespace: str = "core"
    name: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    raw_inner_content: str = ""
    children: list["ContentBlock"] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("attributes", mode="before")
    def attributes_always_dict(cls, v: Any) -> dict[str, Any]:
        # null, arrays and scalars all mean "no attributes"
        return v if isinstance(v, dict) else {}

    @property
    def full_name(self) -> str:
        return f"{self.namespace}/{self.name}"

    @property
    def is_empty(self) -> bool:
        return not self.raw_inner_content.strip() and not self.attributes and not self.children


def _kebab(key: str) -> str:
    if key.startswith("--") or "-" in key:
        return key.lower()
    return _CAMEL_RE.sub("-", key).lower()


class ElementSnapshot(BaseModel):
    """A rendered element as seen by a browser: tag, text, geometry and computed style."""

    tag: str
    text: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)
    box: Box = Field(default_factory=Box, validation_alias=AliasChoices("box", "position"))
    style: dict[str, str] = Field(default_factory=dict, validation_alias=AliasChoices("style", "styles"))
    visible: bool = Field(default=True, validation_alias=AliasChoices("visible", "isVisible"))

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("tag", mode="before")
    def lower_tag(cls, v: str) -> str:
        return str(v).lower()

    @field_validator("text", mode="before")
    def text_or_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("attributes", mode="before")
    def stringify_attributes(cls, v: Any) -> dict[str, str]:
        if not isinstance(v, dict):
            return {}
        return {str(k): "" if val is None else str(val) for k, val in v.items()}

    @field_validator("style", mode="before")
    def kebab_style_keys(cls, v: Any) -> dict[str, str]:
        if not isinstance(v, dict):
            return {}
        return {_kebab(str(k)): "" if val is None else str(val) for k, val in v.items()}

    @property
    def classes(self) -> list[str]:
        return self.attributes.get("class", "").split()


class PageCapture(BaseModel):
    """What a capture of a live page yields: its HTML and its element snapshots."""

    url: str
    title: str = ""
    html: str = ""
    elements: list[ElementSnapshot] = Field(default_factory=list)
