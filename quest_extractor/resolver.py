"""
Resolve item-requirement variables declared in setupRequirements() to their
display text, following `x = y.highlighted()` style aliases.
"""

import re
from typing import Dict, Optional

from .java_source import member_body, read_string

ALIAS_MODIFIERS = ("highlighted", "alsoCheckBank")

DIRECT_RE = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)\s*=\s*new\s+ItemRequirement\s*\(\s*\"")
ALIAS_RE = re.compile(
    r"\b([A-Za-z_][A-Za-z0-9_]*)\s*=\s*([A-Za-z_][A-Za-z0-9_]*)\s*\.(?:"
    + "|".join(ALIAS_MODIFIERS)
    + r")\s*\(\s*\)"
)


class AliasGraph:
    """Variable name -> display text, or variable name -> aliased base variable."""

    def __init__(self, displays: Optional[Dict[str, str]] = None, aliases: Optional[Dict[str, str]] = None):
        self.displays: Dict[str, str] = dict(displays or {})
        self.aliases: Dict[str, str] = dict(aliases or {})

    @classmethod
    def from_source(cls, source: str) -> "AliasGraph":
        body = member_body(source, "setupRequirements")
        displays = {m.group(1): read_string(body, m.end() - 1) for m in DIRECT_RE.finditer(body)}
        aliases = {m.group(1): m.group(2) for m in ALIAS_RE.finditer(body)}
        return cls(displays, aliases)

    def resolve(self, name: str) -> Optional[str]:
        """
        Display text for name, following aliases until a direct mapping is hit.

        Returns None when the chain ends without one, or loops back on itself.
        """
        seen = set()
        current: Optional[str] = name
        while current is not None and current not in seen:
            seen.add(current)
            display = self.displays.get(current)
            if display:
                return display
            current = self.aliases.get(current)
        return None

    def resolved_names(self) -> Dict[str, str]:
        """Every declared variable that resolves, with its display text."""
        table = {}
        for name in list(self.displays) + list(self.aliases):
            display = self.resolve(name)
            if display:
                table[name] = display
        return table
