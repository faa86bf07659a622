"""
Target rendering: scoring rings, shot markers and MPI.
"""
import cv2
import numpy as np
from typing import Iterable, Optional, Tuple
import logging

from shotscore.core import COORDINATE_SPACE, TARGET_CENTER, Point, RingRadii, Shot, StatsResult
from .geometry import calculate_zone_score

logger = logging.getLogger(__name__)


class TargetVisualizer:
    """
    Renders the scoring target and shots with OpenCV.

    Shot coordinates are in the 400 space and are scaled to the output
    image size.
    """

    # BGR color scheme
    COLORS = {
        "background": (245, 245, 245),
        "green": (94, 197, 34),
        "orange": (22, 115, 249),
        "blue": (246, 130, 59),
        "visual": (40, 40, 40),
        "bullseye": (0, 0, 255),  # Red
        "shot": (30, 30, 30),
        "mpi": (246, 92, 139),  # Purple
        "text": (255, 255, 255),  # White
    }

    def __init__(
            self,
            ring_radii: RingRadii,
            bullseye: Optional[Point] = None,
            size: int = 400
    ):
        """
        Initialize visualizer.

        Args:
            ring_radii: Rings to draw
            bullseye: Reference point (default: target center)
            size: Output image width/height in pixels
        """
        self.ring_radii = ring_radii
        self.bullseye = bullseye or TARGET_CENTER
        self.size = size
        self.scale = size / COORDINATE_SPACE

    def _to_image(self, point) -> Tuple[int, int]:
        return (int(round(point.x * self.scale)), int(round(point.y * self.scale)))

    def _radius(self, radius: float) -> int:
        return max(1, int(round(radius * self.scale)))

    def blank_canvas(self) -> np.ndarray:
        """Create an empty background image."""
        canvas = np.zeros((self.size, self.size, 3), dtype=np.uint8)
        canvas[:] = self.COLORS["background"]
        return canvas

    def draw_target(
            self,
            image: Optional[np.ndarray] = None,
            draw_visual_rings: bool = True
    ) -> np.ndarray:
        """
        Draw scoring rings and the bullseye crosshair.

        Args:
            image: Image to draw on (None = blank canvas)
            draw_visual_rings: Draw the display-only rings

        Returns:
            New image with target drawn
        """
        result = self.blank_canvas() if image is None else image.copy()
        center = self._to_image(self.bullseye)

        if draw_visual_rings:
            for radius in self.ring_radii.visual_rings:
                cv2.circle(result, center, self._radius(radius), self.COLORS["visual"], 1)

        cv2.circle(result, center, self._radius(self.ring_radii.green_radius), self.COLORS["green"], 2)
        cv2.circle(result, center, self._radius(self.ring_radii.orange_radius), self.COLORS["orange"], 2)
        cv2.circle(result, center, self._radius(self.ring_radii.blue_radius), self.COLORS["blue"], 2)

        # Crosshair
        crosshair_len = 10
        cv2.line(
            result,
            (center[0] - crosshair_len, center[1]),
            (center[0] + crosshair_len, center[1]),
            self.COLORS["bullseye"],
            1
        )
        cv2.line(
            result,
            (center[0], center[1] - crosshair_len),
            (center[0], center[1] + crosshair_len),
            self.COLORS["bullseye"],
            1
        )

        return result

    def draw_shot(
            self,
            image: np.ndarray,
            shot: Shot,
            show_score: bool = True
    ) -> np.ndarray:
        """
        Draw a single shot marker.

        Args:
            image: Input image
            shot: Shot to draw
            show_score: Label the marker with its zone score

        Returns:
            New image with the marker
        """
        result = image.copy()
        pos = self._to_image(shot)

        if shot.is_bullseye:
            cv2.drawMarker(result, pos, self.COLORS["bullseye"], cv2.MARKER_CROSS, 14, 2)
            return result

        cv2.circle(result, pos, 4, self.COLORS["shot"], -1)
        cv2.circle(result, pos, 6, self.COLORS["text"], 1)

        if show_score:
            score = shot.score
            if score is None:
                score = calculate_zone_score(shot, self.bullseye, self.ring_radii)
            cv2.putText(
                result,
                str(score),
                (pos[0] + 8, pos[1] - 8),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.4,
                self.COLORS["shot"],
                1
            )

        return result

    def draw_shots(
            self,
            image: np.ndarray,
            shots: Iterable[Shot],
            show_scores: bool = True
    ) -> np.ndarray:
        """Draw every shot in order."""
        result = image.copy()
        for shot in shots:
            result = self.draw_shot(result, shot, show_score=show_scores)
        return result

    def draw_mpi(self, image: np.ndarray, mpi: Point) -> np.ndarray:
        """
        Draw the mean point of impact.

        Args:
            image: Input image
            mpi: MPI in the 400 space (not centered coordinates)
        """
        result = image.copy()
        cv2.drawMarker(result, self._to_image(mpi), self.COLORS["mpi"], cv2.MARKER_TILTED_CROSS, 16, 2)
        return result

    def draw_info_panel(
            self,
            image: np.ndarray,
            info_dict: dict,
            position: Tuple[int, int] = (10, 20)
    ) -> np.ndarray:
        """
        Draw info panel with text overlay.

        Args:
            image: Input image
            info_dict: Dictionary with info to display
            position: Top-left position (x, y)

        Returns:
            Image with info panel
        """
        result = image.copy()
        if not info_dict:
            return result

        x, y = position
        line_height = 16

        max_text_width = max(len(f"{k}: {v}") for k, v in info_dict.items())
        cv2.rectangle(
            result,
            (x - 5, y - 14),
            (x + max_text_width * 7 + 10, y + len(info_dict) * line_height),
            (0, 0, 0),
            -1
        )

        for i, (key, value) in enumerate(info_dict.items()):
            cv2.putText(
                result,
                f"{key}: {value}",
                (x, y + i * line_height),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.4,
                self.COLORS["text"],
                1
            )

        return result

    def render(
            self,
            shots: Iterable[Shot],
            stats: Optional[StatsResult] = None,
            mpi: Optional[Point] = None
    ) -> np.ndarray:
        """
        Compose target, shots, MPI and a stats panel into one image.

        Args:
            shots: Shots to draw (bullseye markers included)
            stats: Stats for the info panel
            mpi: MPI in the 400 space; derived from ``stats`` when omitted

        Returns:
            Rendered BGR image
        """
        image = self.draw_target()
        image = self.draw_shots(image, shots)

        if mpi is None and stats is not None and stats.mpi_coords is not None:
            mpi = Point.from_centered(stats.mpi_coords.x, stats.mpi_coords.y)
        if mpi is not None:
            image = self.draw_mpi(image, mpi)

        if stats is not None:
            image = self.draw_info_panel(image, {
                "Shots": stats.shot_count,
                "Score": f"{stats.total_score}/{stats.max_possible_score}",
                "Accuracy": f"{stats.accuracy:.1f}%",
                "MPI": f"{stats.mpi:.1f} mm",
                "Group": f"{stats.group_size:.1f} mm",
            })

        logger.debug(f"Rendered target at {self.size}px")
        return image

    def save(self, path, image: np.ndarray) -> bool:
        """Write an image to disk; returns False if OpenCV could not encode it."""
        ok = cv2.imwrite(str(path), image)
        if not ok:
            logger.warning(f"Failed to write image: {path}")
        return ok
