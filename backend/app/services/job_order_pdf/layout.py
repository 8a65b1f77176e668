"""Page geometry shared by the job order composers.

Units are PDF points, origin at the bottom-left corner.
"""

from reportlab.lib.colors import Color

# A4
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
PAGE_SIZE = (PAGE_WIDTH, PAGE_HEIGHT)
MARGIN = 30
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
COLUMN_WIDTH = CONTENT_WIDTH / 2

# Font sizes
S_TEXT = 8
S_BOLD = 8
S_HEADER = 10
S_SMALL = 7
S_LABEL = 6
LINE_SPACING = 1.2

# Checkbox
CB_W = 12
CB_H = 8
TICK_INSET_X = 3
TICK_INSET_Y = 2

STROKE_WIDTH = 0.5
TICK_WIDTH = 0.8
BLACK = Color(0, 0, 0)
SECTION_SHADE = Color(0.9, 0.9, 0.9)
TABLE_HEADER_SHADE = Color(0.85, 0.85, 0.85)

SECTION_HEADER_H = 16
SIGNATURE_BLOCK_H = 70
