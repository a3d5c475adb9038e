from blockport.common.models.base import BBox, Box, Spacing
from blockport.common.models.settings import ParseOptions

__all__ = ["BBox", "Box", "Spacing", "ParseOptions"]
