"""Default patterns and constants for item string decoding."""
import re

# Number of tooltip lines to scan for the item level text (line 1 is the item name)
TOOLTIP_MAXLINE_LEVEL = 5

# Localized item level format as rendered on the tooltip (enUS)
ITEM_LEVEL_FORMAT = "Item Level %d"

# Items below this level never carry an upgrade adjustment
UPGRADE_MIN_ITEM_LEVEL = 450

# Extraction pattern for the exact item string, including all its properties
ITEMSTRING_PATTERN = re.compile(r"(item:[^|]+)")

# Catches every hyperlink family (spell:, currency:, achievement:, ...)
HYPERLINK_PATTERN = re.compile(r"(?:\|H|\b)([A-Za-z]\w*:[^|]+)")

# Field and segment separators of the wire format
FIELD_SEPARATOR = ":"
