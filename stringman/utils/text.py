"""Field name conversion helpers."""

from functools import lru_cache

__all__ = ("FIELD_NAME_CONVERTERS", "convert_field_name", "pascalize")


@lru_cache(maxsize=256)
def pascalize(string: str) -> str:
    """Convert a snake_case attribute name to the PascalCase used by placeholders.

    ``track_id`` becomes ``TrackId`` and ``svc_192_yn`` becomes ``Svc192Yn``.
    The first character and every character following an underscore are
    upper-cased and kept, even when that character is itself an underscore,
    so ``_a`` stays ``_a`` and ``track__id`` becomes ``Track_id``. Other
    underscores are dropped and the remaining characters are left untouched.

    Args:
        string: The string to convert.

    Returns:
        The converted string.
    """
    chars = []
    need_upper = True
    for char in string:
        if need_upper:
            chars.append(char.upper())
            need_upper = False
        elif char == "_":
            need_upper = True
        else:
            chars.append(char)
    return "".join(chars)


def _identity(string: str) -> str:
    return string


FIELD_NAME_CONVERTERS = {"camel": pascalize, "none": _identity}


def convert_field_name(name: str, style: str = "camel") -> str:
    """Convert an attribute name using a named convention.

    Args:
        name: Attribute name.
        style: One of the keys of :data:`FIELD_NAME_CONVERTERS`.

    Raises:
        ValueError: If the style is unknown.

    Returns:
        The placeholder name.
    """
    try:
        converter = FIELD_NAME_CONVERTERS[style]
    except KeyError:
        msg = f"Unknown field name style: {style!r}"
        raise ValueError(msg) from None
    return converter(name)
