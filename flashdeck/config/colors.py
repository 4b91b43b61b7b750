"""Card palette and theme colors."""

import re


class Colors:
    """Theme colors."""

    PRIMARY = "#FF6B35"
    SECONDARY = "#1A659E"
    ACCENT = "#004E89"
    BACKGROUND = "#F7F7F7"
    TEXT = "#2D2D2D"
    WHITE = "#FFFFFF"
    LIGHT_ORANGE = "#FFE1D6"
    LIGHT_BLACK = "#4A4A4A"
    LIGHT_GRAY = "#E0E0E0"
    ERROR = "#FF3B30"


# Colors offered by the card color picker
CARD_PALETTE = [
    "#FFFFFF",
    "#FFE5B4",
    "#E5E5EA",
    "#90EE90",
    "#ADD8E6",
    "#FFB6C1",
    "#DDA0DD",
    "#F0E68C",
]

HEX_COLOR_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def is_light_color(color: str) -> bool:
    """
    Decide whether a card face needs dark text.

    Uses perceived luminance (ITU-R BT.601 weights). Values that are not
    hex colors are treated as light.

    Args:
        color: Hex color such as "#1A659E" or "#fff"

    Returns:
        True if the color is light
    """
    match = HEX_COLOR_PATTERN.match(str(color).strip())
    if not match:
        return True

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return luminance > 0.5
