# visualization.py
"""
Handles the visualization of the bouncing balls using Pygame.
"""
import logging
from typing import Dict, Any, Iterable, Optional, Tuple

import numpy as np
import pygame

from particle import Particle, Bounds
from constants import (
    BACKGROUND_COLOR, DEFAULT_TITLE, DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT,
    FPS, GLOW_ALPHA, GLOW_RADIUS_RATIO
)

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None):
#     - Inputs: The "visualization" section of config.json ("width",
#       "height", "title").
#     - Side Effects: Initializes Pygame and creates a resizable window.
#
#   - current_bounds(self) -> Bounds:
#     - Outputs: World bounds of the window as it is right now. The origin is
#       the window center and y points up.
#
#   - draw(self, particles: Iterable[Particle]) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Handles Pygame events, renders every particle as a
#       translucent glow plus an opaque core, flips the display.


def world_to_screen(position, bounds: Bounds) -> Tuple[int, int]:
    """Maps a world point (y up, centered origin) to integer pixel coordinates."""
    x = position[0] - bounds.left
    y = bounds.top - position[1]
    return int(round(x)), int(round(y))


def to_rgb255(rgb) -> Tuple[int, int, int]:
    """Converts a [0, 1] float color to 0-255 ints, clipping out-of-range channels."""
    r, g, b = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0) * 255
    return int(round(r)), int(round(g)), int(round(b))


class Visualizer:
    """
    Renders the particles into a resizable window.
    """
    def __init__(self, vis_params: Optional[Dict[str, Any]] = None):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params if vis_params is not None else {}
        width = vis_params.get('width', DEFAULT_WINDOW_WIDTH)
        height = vis_params.get('height', DEFAULT_WINDOW_HEIGHT)

        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(vis_params.get('title', DEFAULT_TITLE))
        self.clock = pygame.time.Clock()

        self.glow_alpha = int(round(GLOW_ALPHA * 255))
        self.glow_surface = pygame.Surface((width, height), pygame.SRCALPHA)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def current_bounds(self) -> Bounds:
        width, height = self.screen.get_size()
        return Bounds.centered(width, height)

    def _handle_resize(self):
        # pygame 2 resizes the display surface itself; only the glow layer
        # has to follow, sized from the real surface rather than the event.
        self.screen = pygame.display.get_surface()
        width, height = self.screen.get_size()
        self.glow_surface = pygame.Surface((width, height), pygame.SRCALPHA)
        logging.info(f"Window resized to {width}x{height}.")

    def draw(self, particles: Iterable[Particle]) -> bool:
        """
        Draws all particles and handles events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False
            if event.type == pygame.VIDEORESIZE:
                self._handle_resize()

        bounds = self.current_bounds()
        self.screen.fill(BACKGROUND_COLOR)
        self.glow_surface.fill((0, 0, 0, 0))

        cores = []
        for p in particles:
            center = world_to_screen(p.position, bounds)
            color = to_rgb255(p.color.rgb)

            # 1. Glow layer, composited in one blit below the cores
            pygame.draw.circle(
                self.glow_surface,
                (*color, self.glow_alpha),
                center,
                int(round(p.radius * GLOW_RADIUS_RATIO))
            )
            cores.append((color, center, int(round(p.radius))))

        self.screen.blit(self.glow_surface, (0, 0))

        # 2. Core disks at full opacity
        for color, center, radius in cores:
            pygame.draw.circle(self.screen, color, center, radius)

        pygame.display.flip()
        self.clock.tick(FPS)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
