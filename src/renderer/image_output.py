# renderer/image_output.py
import logging
import os
import numpy as np
from PIL import Image
from renderer.tone_mapping import to_uint8

logger = logging.getLogger(__name__)

def save_image(image: np.ndarray, path: str):
    """
    Writes a height x width x 3 float image (top row first) to path. The
    format follows the file extension.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    Image.fromarray(to_uint8(image)).save(path)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)

def show_image(image: np.ndarray, title: str = "Ray Tracer", scale: int = 1):
    """
    Opens a window showing image until it is closed or Escape is pressed.
    """
    import pygame

    pygame.init()
    try:
        height, width = image.shape[0], image.shape[1]
        screen = pygame.display.set_mode((width * scale, height * scale))
        pygame.display.set_caption(title)
        # surfarray is indexed [x, y]
        surface = pygame.surfarray.make_surface(np.transpose(to_uint8(image), (1, 0, 2)))
        if scale != 1:
            surface = pygame.transform.scale(surface, (width * scale, height * scale))
        screen.blit(surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
