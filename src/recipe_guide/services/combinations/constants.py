"""Constants for combination resolution."""

from __future__ import annotations

import sys
from typing import Final


# Id of the single combination produced when no group is selected
DEFAULT_COMBINATION_ID: Final[str] = "default"

# Combination ids are "groupId:optionId" pairs joined by this separator
COMBINATION_ID_SEPARATOR: Final[str] = "|"
PAIR_SEPARATOR: Final[str] = ":"

# Prefixed to separator characters that occur inside a group or option id
ID_ESCAPE: Final[str] = "\\"

# Display name of the entry an option-less group contributes in lenient mode
PLACEHOLDER_DISPLAY_NAME: Final[str] = "(none)"

# Options without a display order sort after every ordered option
UNORDERED_POSITION: Final[int] = sys.maxsize

# Separator used when naming a recipe after its combination
RECIPE_NAME_SEPARATOR: Final[str] = " "
