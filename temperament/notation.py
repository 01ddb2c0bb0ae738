"""Display helpers for note names and cent deviations.

Note names may embed ``{tag}`` markers (``"C{sharp}"``) so that documents
can stay plain ASCII. The resolver treats names as opaque strings; these
helpers are only for presenting them.
"""

import re

from . import config

_TAG_PATTERN = re.compile(r"\{([a-z-]+)\}")


def prettify_note_name(name: str) -> str:
    """Replace ``{tag}`` markers in a note name with display symbols.

    Unknown tags are left as they are.

    Examples:
        >>> prettify_note_name("C{sharp}")
        'C♯'
        >>> prettify_note_name("E{flat}{flat}")
        'E♭♭'
    """
    return _TAG_PATTERN.sub(
        lambda match: config.NOTE_NAME_SYMBOLS.get(match.group(1), match.group(0)),
        name,
    )


def format_cents(cents: float) -> str:
    """Format a deviation in cents with an explicit sign, e.g. ``+12.3¢``."""
    # Avoid displaying "-0.0¢" for deviations that round to zero
    if round(cents, 1) == 0:
        cents = 0.0
    return f"{cents:+.1f}¢"
