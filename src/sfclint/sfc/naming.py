"""Component name derivation from a file's base name."""

import re
from pathlib import PurePath

_SEGMENT_SPLIT = re.compile(r"[-_]")


def component_name(filename: str) -> str:
    """Derive the PascalCase component name from a file name.

    The base name is cut at its first dot, split on ``-``/``_``, and each
    segment is title-cased. All-uppercase segments longer than one
    character count as one word (``API`` -> ``Api``).

    Args:
        filename: File path or base name

    Returns:
        Component name, e.g. ``UserProfileCard``

    Examples:
        >>> component_name("src/components/user-profile-card.vue")
        'UserProfileCard'
        >>> component_name("API_client.ts")
        'ApiClient'
    """
    base = PurePath(filename.replace("\\", "/")).name.split(".", 1)[0]
    words = []
    for part in _SEGMENT_SPLIT.split(base):
        if not part:
            continue
        if part.isupper() and len(part) > 1:
            words.append(part[0] + part[1:].lower())
        else:
            words.append(part[0].upper() + part[1:])
    return "".join(words)


def props_type_name(name: str) -> str:
    return f"{name}Props"


def emits_type_name(name: str) -> str:
    return f"{name}Emits"
