"""
scoring/trait_naming.py — Legacy trait name derivation

Older preference questions were imported without an explicit trait label on
their options; the trait was written into the option text instead, e.g.
"I plan everything ahead (Organized)". derive_trait_name() recovers it.

Precedence:
    1. First non-empty parenthetical annotation, trimmed
       "Lead the meeting (Leadership)"  -> "Leadership"
    2. Otherwise the first two words of the text
       "Team player always"             -> "Team player"
    3. Otherwise "" (nothing usable; the caller treats it as unresolved)

The function never raises.
"""

import re
from typing import Optional, Tuple

_PARENTHETICAL_RX = re.compile(r"\(([^()]*)\)")


def derive_trait_name(text: Optional[str]) -> str:
    if not isinstance(text, str):
        return ""
    for match in _PARENTHETICAL_RX.finditer(text):
        label = " ".join(match.group(1).split())
        if label:
            return label
    return " ".join(text.split()[:2])


def resolve_trait_label(explicit: Optional[str], text: Optional[str]) -> Tuple[str, bool]:
    """
    Return (trait name, derived) for an option.

    ``derived`` is True when the name came from the option text.
    """
    if isinstance(explicit, str) and explicit.strip():
        return " ".join(explicit.split()), False
    return derive_trait_name(text), True
