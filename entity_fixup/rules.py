"""
Static decoding rules.

Everything the fixup pass treats as configuration lives here as constants;
callers override the target directory by argument only.
"""

from types import MappingProxyType

# Named entity spellings and their replacements, applied in this order.
ENTITY_TABLE = MappingProxyType({
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&apos;": "'",
    "&#39;": "'",
    "&#x26;": "&",
})

NUMERIC_ENTITY_PATTERN = r"&#(?:([0-9]+)|[xX]([0-9a-fA-F]+));"

# Substituted for numeric references outside Unicode or in the surrogate range.
FALLBACK_CHAR = "�"

JSON_SUFFIX = ".json"
DEFAULT_MANIFEST_DIR = "manifests"
SOURCE_ENCODING = "utf-8"
JSON_INDENT = 2

LOG_TAG = "[entity-fixup]"
