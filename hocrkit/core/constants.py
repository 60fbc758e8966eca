"""
Constants and configuration values for hOCR interpretation.
"""

# Title attribute geometry: "bbox LEFT TOP RIGHT BOTTOM[; other properties]"
BBOX_PATTERN = r'bbox\s+(-?\d+)\s+(-?\d+)\s+(-?\d+)\s+(-?\d+)'

# Coordinates used for the unbounded plane and semiplanes
PLANE_MIN = -(2 ** 31)
PLANE_MAX = 2 ** 31 - 1

# Position of the "leftish" point, as a fraction of the width
LEFTISH_NUMERATOR = 1
LEFTISH_DENOMINATOR = 5

# hOCR vocabulary, one entry per hierarchy rank
BODY_TAG = 'body'
PAGE_TAG = 'div'
AREA_TAG = 'div'
PARAGRAPH_TAG = 'p'
LINE_TAG = 'span'
LINE_CLASSES = ('ocr_line',)
WORD_TAG = 'span'
WORD_CLASSES = ('ocrx_word', 'ocr_word')
BOLD_TAGS = ('b', 'strong')
ITALIC_TAGS = ('i', 'em')

# Latin-1 Supplement and Latin Extended-A (U+00C0..U+017F) folded to ASCII
ASCII_FOLD_START = 0xC0
ASCII_FOLD_TABLE = (
    "AAAAAAACEEEEIIII"
    "DNOOOOOxOUUUUYTs"
    "aaaaaaaceeeeiiii"
    "dnooooo/ouuuuyty"
    "AaAaAaCcCcCcCcDd"
    "DdEeEeEeEeEeGgGg"
    "GgGgHhHhIiIiIiIi"
    "IiJjJjKkkLlLlLlL"
    "lLlNnNnNnnNnOoOo"
    "OoOoRrRrRrSsSsSs"
    "SsTtTtTtUuUuUuUu"
    "UuUuWwYyYZzZzZzs"
)

# Characters OCR engines commonly confuse with each other
CONFUSABLE_CLASSES = (
    'lI1',
    '0Oo',
    ',.',
    '-–',
    '„“”"',
)

# Characters that may be dropped on either side of a fuzzy comparison
NEGLIGIBLE_CHARACTERS = ' \'‚,‘’'

# Strings made only of low punctuation or only of high punctuation
SMALLER_PATTERN = '^([,‚„._ ]*|["\'‘“”’^ ]*)$'

# Words with text this long or shorter are treated as possible OCR noise
OCR_ARTIFACT_MAX_LENGTH = 1

# Tiny print cleanup
TINY_PRINT_MIN_WORDS = 10
TINY_PRINT_HEIGHT_DIVISOR = 6

# Column boundary estimation
COLUMN_MIN_CUT_TOLERANCE = 2

# Proximity bias for best-line queries
PROXIMITY_SCORE_OFFSET = 0.1
PROXIMITY_PAGE_HEIGHT_FRACTION = 10.0
PROXIMITY_BELOW_FACTOR = 2.0
