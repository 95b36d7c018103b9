"""
Named colors, using the CSS basic color keyword values.
"""
from .core.pixel import Pixel

BLACK = Pixel(0, 0, 0)
WHITE = Pixel(255, 255, 255)
RED = Pixel(255, 0, 0)
LIME = Pixel(0, 255, 0)
BLUE = Pixel(0, 0, 255)

YELLOW = Pixel(255, 255, 0)
CYAN = Pixel(0, 255, 255)
AQUA = CYAN
MAGENTA = Pixel(255, 0, 255)
FUCHSIA = MAGENTA
SILVER = Pixel(192, 192, 192)
GRAY = Pixel(128, 128, 128)
MAROON = Pixel(128, 0, 0)
OLIVE = Pixel(128, 128, 0)
GREEN = Pixel(0, 128, 0)
PURPLE = Pixel(128, 0, 128)
TEAL = Pixel(0, 128, 128)
NAVY = Pixel(0, 0, 128)
