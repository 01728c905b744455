"""Fixed NNA layer set and code formatting constants.

The layer set is part of the NNA naming scheme itself, not of any taxonomy
document, so it lives here rather than in the packaged data.
"""

from typing import Dict, Tuple

# (code, display name, numeric code)
LAYERS: Tuple[Tuple[str, str, int], ...] = (
    ("G", "Songs", 1),
    ("S", "Stars", 2),
    ("L", "Looks", 3),
    ("M", "Moves", 4),
    ("W", "Worlds", 5),
    ("B", "Branded", 6),
    ("P", "Personalize", 7),
    ("T", "Training_Data", 8),
    ("C", "Composites", 9),
    ("R", "Rights", 10),
)

LAYER_NUMERIC_CODES: Dict[str, int] = {code: num for code, _, num in LAYERS}
LAYER_ALPHA_CODES: Dict[int, str] = {num: code for code, _, num in LAYERS}

# Layer numeric codes start at 1, so 0 never collides with a real layer
UNKNOWN_LAYER_CODE = 0

DEFAULT_CODE = "001"
CODE_WIDTH = 3
SEPARATOR = "."
