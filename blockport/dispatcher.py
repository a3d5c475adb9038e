"""Route a conversion request to the right builder and never let it raise."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict

from blockport.blocks.models import ContentBlock, ElementSnapshot
from blockport.common.errors import InvalidInputError, UnknownBuilderError
from blockport.common.utils.logger import get_logger
from blockport.converters import CONVERTERS, BuilderConverter, SnapshotInput, TreeInput
from blockport.converters.base import OutputFormat, OutputMetadata

logger = get_logger(__name__)


class BuilderInfo(BaseModel):
    name: str
    display_name: str
    output_format: OutputFormat
    description: str

    model_config = ConfigDict(frozen=True)


class ExportResult(BaseModel):
    builder: str
    success: bool
    error: str | None = None
    format: OutputFormat | None = None
    content: str | dict[str, Any] | None = None
    metadata: OutputMetadata | None = None

    model_config = ConfigDict(frozen=True)


# first match wins: specific fingerprints before the generic ones they overlap with
FINGERPRINTS: list[tuple[str, re.Pattern[str]]] = [
    ("crocoblock", re.compile(r"jet-engine|jet-listing", re.IGNORECASE)),
    ("elementor", re.compile(r"data-elementor-type|elementor-section|elementor-widget", re.IGNORECASE)),
    ("bricks", re.compile(r"data-brx-element|brxe-", re.IGNORECASE)),
    ("divi", re.compile(r"et_pb_", re.IGNORECASE)),
    ("beaver-builder", re.compile(r"fl-builder|fl-row|fl-module", re.IGNORECASE)),
    ("oxygen", re.compile(r"\bct-section|\boxy-", re.IGNORECASE)),
    ("kadence", re.compile(r"wp-block-kadence|kb-row-layout|wp:kadence/", re.IGNORECASE)),
    ("optimizepress", re.compile(r"\bop-row|optimizepress|\bop3-", re.IGNORECASE)),
    ("brizy", re.compile(r"class=\"[^\"]*\bbrz-|class='[^']*\bbrz-", re.IGNORECASE)),
    ("gutenberg", re.compile(r"wp-block-|<!--\s+wp:", re.IGNORECASE)),
]


def normalize_name(name: str) -> str:
    """Lower-case and drop separators: "Beaver_Builder" and "beaver-builder" are the same builder."""
    return re.sub(r"[\s_-]+", "", name.strip().lower())


class ConversionDispatcher:
    """Registry of converters keyed by normalized name and alias."""

    def __init__(self, converters: list[type[BuilderConverter]] | None = None):
        self._converters: dict[str, BuilderConverter] = {}
        self._lookup: dict[str, str] = {}
        for converter_cls in converters or CONVERTERS:
            self.register(converter_cls())

    def register(self, converter: BuilderConverter) -> None:
        self._converters[converter.name] = converter
        for key in (converter.name, *converter.aliases):
            self._lookup[normalize_name(key)] = converter.name

    def resolve(self, builder_name: str) -> BuilderConverter:
        name = self._lookup.get(normalize_name(builder_name or ""))
        if name is None:
            available = ", ".join(self.get_available_builders())
            raise UnknownBuilderError(f"Unknown builder '{builder_name}'. Available builders: {available}")
        return self._converters[name]

    def export(
        self,
        builder_name: str,
        *,
        blocks: list[ContentBlock] | None = None,
        snapshot: list[ElementSnapshot] | None = None,
    ) -> ExportResult:
        """Convert one input to one builder; failures come back as `success=False`."""
        try:
            converter = self.resolve(builder_name)
            if (blocks is None) == (snapshot is None):
                raise InvalidInputError("Provide exactly one of blocks or snapshot")

            data = TreeInput(blocks=blocks) if blocks is not None else SnapshotInput(elements=snapshot or [])
            output = converter.convert(data)
        except Exception as e:
            logger.error("Export to %s failed: %s", builder_name, e)
            return ExportResult(builder=builder_name, success=False, error=str(e))

        logger.info(
            "Exported to %s: %d widgets in %d sections (%s, %.1fms)",
            converter.name,
            output.metadata.widget_count,
            output.metadata.section_count,
            output.metadata.conversion_method.value,
            output.metadata.build_time_ms,
        )
        return ExportResult(
            builder=builder_name,
            success=True,
            format=output.format,
            content=output.content,
            metadata=output.metadata,
        )

    def export_to_multiple(
        self,
        builder_names: list[str],
        *,
        blocks: list[ContentBlock] | None = None,
        snapshot: list[ElementSnapshot] | None = None,
    ) -> dict[str, ExportResult]:
        """Export the same input to several builders independently."""
        return {name: self.export(name, blocks=blocks, snapshot=snapshot) for name in builder_names}

    def detect_builder_from_markup(self, html: str | None) -> str | None:
        """Name of the builder that produced this HTML, judged by its fingerprints."""
        if not html:
            return None
        for name, pattern in FINGERPRINTS:
            if pattern.search(html):
                logger.debug("Detected builder %s", name)
                return name
        return None

    def get_available_builders(self) -> list[str]:
        return list(self._converters)

    def get_builder_info(self, builder_name: str) -> BuilderInfo | None:
        try:
            converter = self.resolve(builder_name)
        except UnknownBuilderError:
            return None
        return BuilderInfo(
            name=converter.name,
            display_name=converter.display_name,
            output_format=converter.output_format,
            description=converter.description,
        )


dispatcher = ConversionDispatcher()

export = dispatcher.export
export_to_multiple = dispatcher.export_to_multiple
detect_builder_from_markup = dispatcher.detect_builder_from_markup
get_available_builders = dispatcher.get_available_builders
get_builder_info = dispatcher.get_builder_info
