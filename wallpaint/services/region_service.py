from __future__ import annotations
import logging
import os
from dotenv import load_dotenv

from ..models.pixel_buffer import PixelBuffer
from ..models.region import Region
from ..repositories.region_repository import RegionRepository

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


class RegionService:
    """
    Wall detection from a single clicked pixel.

    *   Reads the buffer, never writes or keeps it.
    *   Returns the bounding box of the 4-connected pixels whose Manhattan
        RGB distance to the seed color is below `threshold`. Concave walls
        therefore include whatever else falls inside their box.
    """
    def __init__(self, repo: RegionRepository | None = None):
        self.repo = repo or RegionRepository()
        self.WALL_THRESHOLD = int(os.getenv("WALL_THRESHOLD", "50"))

    def detect(self, buffer: PixelBuffer, seed_x: int, seed_y: int,
               threshold: int | None = None) -> Region:
        """
        Args:
            buffer (PixelBuffer): Image to segment.
            seed_x, seed_y: Clicked pixel, already in buffer coordinates.
            threshold: Similarity cut-off; defaults to WALL_THRESHOLD.

        Returns:
            Region: Inclusive bounding box of the detected wall.
        """
        buffer.check_bounds(seed_x, seed_y)
        if threshold is None:
            threshold = self.WALL_THRESHOLD

        region = self.repo.flood_fill(buffer.pixels, seed_x, seed_y, threshold)
        logger.info(f"Wall at seed ({seed_x}, {seed_y}) thr={threshold}: {region.as_dict()}")
        return region
