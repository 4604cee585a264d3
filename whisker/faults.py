"""
Whisker faults (schema warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for schema diagnostics.
- SchemaWarning: base warning type carrying message + options that knows how to
  render itself in a friendly, lowercased and actionable way.
- trigger(): central entry point to surface a fault.

Parsing itself never faults: unknown flags pass through and unparseable numbers
stay strings. Faults here only describe suspicious flag *declarations*, which are
legal but probably not what the author meant (e.g. one alias claimed by two flags).
Declaration errors that cannot be interpreted at all raise TypeError/ValueError
directly from the schema sanitizers.

Integration
- The schema collects nothing; it calls trigger(fault, **ctx) as soon as the
  problem is detected, which forwards to warnings.warn().
- Hosts can restyle the rich rendering through a __styles__ mapping in __main__
  and relabel codes through a __codes__ mapping in __main__.
"""
import copy
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used by the schema layer (stable identifiers).

    grouping
    - aliases (2111x)
      • ALIAS_COLLISION: one alias declared by two different flags (last one wins).
      • ALIAS_SHADOWING: an alias spelled like another flag's own name (the alias wins).
    """
    ALIAS_COLLISION = 21111
    ALIAS_SHADOWING = 21112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SchemaWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble(
            "[ ",
            text(self.options["code"].normalize(), "code"),
            " | ",
            text(self.options["title"].title(), "warning-title"),
            " ]"
        )
        message = text(self.message, "warning-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class AliasCollisionWarning(SchemaWarning): ...
class AliasShadowingWarning(SchemaWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see SchemaWarning).
    - options are merged into the fault via __replace__(**options) before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "SchemaWarning",
    "AliasCollisionWarning",
    "AliasShadowingWarning",
    "trigger",
)
