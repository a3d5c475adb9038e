"""Parser settings."""

from pydantic import BaseModel, Field, field_validator

from blockport.common.utils.config import get_config


class ParseOptions(BaseModel):
    """Options for block markup parsing."""

    max_depth: int = Field(default_factory=lambda: get_config().max_depth, ge=1)
    block_types: frozenset[str] | None = None  # allow-list, `name` or `ns/name`
    skip_empty: bool = False  # drop leaf blocks with no content and no attributes

    @field_validator("block_types", mode="before")
    def normalize_block_types(cls, v: object) -> frozenset[str] | None:
        if v is None:
            return None
        if isinstance(v, str):
            v = v.split(",")
        return frozenset(str(item).strip().lower() for item in v if str(item).strip())  # type: ignore[union-attr]

    def allows(self, namespace: str, name: str) -> bool:
        if self.block_types is None:
            return True
        return name in self.block_types or f"{namespace}/{name}" in self.block_types
