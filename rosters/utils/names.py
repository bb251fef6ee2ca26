import re


def normalize_group_name(name):
    """
    Normalize a group name for registry matching.
    Lower-cases, drops parenthetical suffixes like "(JV)" and collapses whitespace.
    "Varsity  (JV)" -> "varsity"
    """
    if not name:
        return ""
    normalized = name.lower()
    normalized = re.sub(r"\([^)]*\)", " ", normalized)
    normalized = re.sub(r"\s+", " ", normalized).strip()
    return normalized
