import cv2
import numpy as np
from tqdm import tqdm

# Configuration
IMAGE_WIDTH = 28
IMAGE_HEIGHT = 28
BLOCK_RADIUS = 2

def generate_image(center_x, center_y, radius, width=IMAGE_WIDTH, height=IMAGE_HEIGHT):
    """Rasterise a filled square block centred at (center_x, center_y)

    Returns a flat, read-only float32 vector in row-major order. Pixels of the
    block that fall outside the canvas are skipped.
    """
    canvas = np.zeros((height, width), dtype=np.float32)
    # Filled rectangle, both corners inclusive; cv2 clips to the canvas
    cv2.rectangle(canvas,
                  (center_x - radius, center_y - radius),
                  (center_x + radius, center_y + radius),
                  1.0, -1)

    image = canvas.reshape(-1)
    image.flags.writeable = False
    return image

def generate_dataset(width=IMAGE_WIDTH, height=IMAGE_HEIGHT, radius=BLOCK_RADIUS, progress=False):
    """One image per canvas pixel, labelled (x, y) = (column, row)"""
    images = []
    labels = []
    for row in tqdm(range(height), disable=not progress):
        for col in range(width):
            images.append(generate_image(col, row, radius, width, height))
            labels.append((col, row))
    return images, labels

if __name__ == "__main__":
    images, labels = generate_dataset(progress=True)
    print(f"Generated {len(images)} images of {IMAGE_WIDTH}x{IMAGE_HEIGHT}")
