import logging
from typing import Tuple
import cv2
import numpy as np

from ..models.region import Region

logger = logging.getLogger(__name__)


class RegionRepository:
    """
    Raw flood-fill over an (H, W, C) uint8 raster.

    • No bounds validation here; the service checks the seed first.
    • Two strategies that must agree on every input:
        - flood_fill: explicit-stack DFS with a visited mask
        - connected_component: OpenCV labelling of the similarity mask
    """

    @staticmethod
    def similarity_mask(rgb: np.ndarray, base: Tuple[int, int, int], threshold: int) -> np.ndarray:
        """
        Returns bool mask (H, W): Manhattan RGB distance to `base` < threshold.
        """
        diff = np.abs(rgb[..., :3].astype(np.int16) - np.array(base, dtype=np.int16))
        return diff.sum(axis=-1) < threshold

    def flood_fill(self, pixels: np.ndarray, seed_x: int, seed_y: int, threshold: int) -> Region:
        height, width = pixels.shape[:2]
        base = tuple(int(v) for v in pixels[seed_y, seed_x, :3])
        similar = self.similarity_mask(pixels, base, threshold)

        # a pixel is marked when pushed, so the stack never exceeds W*H entries
        visited = np.zeros((height, width), dtype=bool)
        visited[seed_y, seed_x] = True
        stack = [(seed_x, seed_y)]

        left = right = seed_x
        top = bottom = seed_y
        expanded = 0

        while stack:
            cx, cy = stack.pop()
            if not similar[cy, cx]:
                continue
            expanded += 1

            left = min(left, cx)
            top = min(top, cy)
            right = max(right, cx)
            bottom = max(bottom, cy)

            for nx, ny in ((cx - 1, cy), (cx, cy - 1), (cx + 1, cy), (cx, cy + 1)):
                if 0 <= nx < width and 0 <= ny < height and not visited[ny, nx]:
                    visited[ny, nx] = True
                    stack.append((nx, ny))

        logger.debug(f"Flood fill expanded {expanded} of {width * height} pixels")
        return Region(left=left, top=top, right=right, bottom=bottom)

    def connected_component(self, pixels: np.ndarray, seed_x: int, seed_y: int, threshold: int) -> Region:
        base = tuple(int(v) for v in pixels[seed_y, seed_x, :3])
        similar = self.similarity_mask(pixels, base, threshold).astype(np.uint8)

        if not similar[seed_y, seed_x]:
            # threshold <= 0: even the seed fails, region stays the seed point
            return Region.point(seed_x, seed_y)

        _, labels, stats, _ = cv2.connectedComponentsWithStats(similar, connectivity=4)
        label = labels[seed_y, seed_x]

        left = int(stats[label, cv2.CC_STAT_LEFT])
        top = int(stats[label, cv2.CC_STAT_TOP])
        right = left + int(stats[label, cv2.CC_STAT_WIDTH]) - 1
        bottom = top + int(stats[label, cv2.CC_STAT_HEIGHT]) - 1
        return Region(left=left, top=top, right=right, bottom=bottom)
