"""Builder converters and their registry."""

from blockport.converters.base import (
    BuilderConverter,
    BuilderOutput,
    ConversionContext,
    ConversionInput,
    ConversionMethod,
    IdSequence,
    OutputFormat,
    OutputMetadata,
    SnapshotInput,
    TreeInput,
)
from blockport.converters.beaver_builder import BeaverBuilderConverter
from blockport.converters.bricks import BricksConverter
from blockport.converters.brizy import BrizyConverter
from blockport.converters.crocoblock import CrocoblockConverter
from blockport.converters.divi import DiviConverter
from blockport.converters.elementor import ElementorConverter
from blockport.converters.gutenberg import GutenbergConverter
from blockport.converters.kadence import KadenceConverter
from blockport.converters.optimizepress import OptimizePressConverter
from blockport.converters.oxygen import OxygenConverter
from blockport.converters.plugin_free import PluginFreeConverter

# registry order is the order builders are listed in
CONVERTERS: list[type[BuilderConverter]] = [
    ElementorConverter,
    GutenbergConverter,
    DiviConverter,
    BeaverBuilderConverter,
    BricksConverter,
    OxygenConverter,
    KadenceConverter,
    BrizyConverter,
    PluginFreeConverter,
    OptimizePressConverter,
    CrocoblockConverter,
]

__all__ = [
    "CONVERTERS",
    "BuilderConverter",
    "BuilderOutput",
    "ConversionContext",
    "ConversionInput",
    "ConversionMethod",
    "IdSequence",
    "OutputFormat",
    "OutputMetadata",
    "SnapshotInput",
    "TreeInput",
    "BeaverBuilderConverter",
    "BricksConverter",
    "BrizyConverter",
    "CrocoblockConverter",
    "DiviConverter",
    "ElementorConverter",
    "GutenbergConverter",
    "KadenceConverter",
    "OptimizePressConverter",
    "OxygenConverter",
    "PluginFreeConverter",
]
