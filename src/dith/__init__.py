"""dith -- Braille dithering for the terminal.

Renders a live camera feed or a still image as Unicode Braille text.
Each glyph covers a 2x4 block of source pixels; a family of
interchangeable converters decides which of the eight dots are lit.
"""

__version__ = "0.1.0"
