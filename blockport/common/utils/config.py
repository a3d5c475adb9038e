"""
Load configuration from `config.toml`.
"""

from pathlib import Path
from pydantic import BaseModel, field_validator

THIS_DIR = Path(__file__).parent.resolve()

CONFIG_FILE_PATH = THIS_DIR / "config.toml"

ALIGNMENTS = ("left", "center", "right", "justify")


class Config(BaseModel):
    max_depth: int
    row_tolerance_px: int
    reading_order_y_tolerance: int
    max_elements: int
    default_alignment: str
    skip_tags: list[str]
    button_class_hints: list[str]
    capture_timeout_ms: int

    @field_validator("max_depth", "max_elements", mode="before")
    def at_least_one(cls, value: int) -> int:
        if int(value) < 1:
            raise ValueError("Value must be at least 1.")
        return value

    @field_validator("row_tolerance_px", "reading_order_y_tolerance", "capture_timeout_ms", mode="before")
    def not_negative(cls, value: int) -> int:
        if int(value) < 0:
            raise ValueError("Value must not be negative.")
        return value

    @field_validator("default_alignment", mode="before")
    def known_alignment(cls, value: str) -> str:
        value = str(value).lower()
        if value not in ALIGNMENTS:
            raise ValueError(f"Alignment must be one of {', '.join(ALIGNMENTS)}.")
        return value

    @field_validator("skip_tags", "button_class_hints", mode="before")
    def lowercase_items(cls, v: list[str]) -> list[str]:
        return [str(item).lower() for item in v]


def load_config(path: Path = CONFIG_FILE_PATH) -> Config:
    import tomli

    with open(path, "rb") as f:
        data = tomli.load(f)

    config_data = {k.lower(): v for k, v in data.items()}
    return Config(**config_data)


config = load_config()


def set_config(new_config: Config) -> None:
    global config
    config = new_config


def get_config() -> Config:
    """Return the active config (reads the module global at call time)."""
    return config


__all__ = ["config", "get_config", "set_config", "load_config", "Config"]

if __name__ == "__main__":
    print(config)
