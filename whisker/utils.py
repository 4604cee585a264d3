"""
Whisker utilities (internal helpers, carefully exposed)

Scope
- Core building blocks used across the package for consistent semantics.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the schema/tokenizer/normalizer/cli layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated getters for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) with defensive copies.

- camelcase(text) / decamelize(text) / keyify(name)
  • The string transform pair between CLI spellings ("--foo-bar") and result keys ("fooBar").

- isnumeric(text) / tonumber(text)
  • Numeric literal detection and best-effort conversion (never raises).

- trim_newlines(text) / redent(text, count)
  • Help text shaping: trim surrounding newlines, strip common indentation, re-indent.

Quick examples
    >>> camelcase("foo-bar-baz")
    'fooBarBaz'
    >>> decamelize("camelCaseOption")
    'camel-case-option'
    >>> tonumber("0x10"), tonumber("1.5"), tonumber("cat")
    (16, 1.5, 'cat')
"""
import builtins
import functools
import re
import textwrap
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value (e.g. boolean_default=None),
    but the API needs a way to distinguish “not provided” from “provided as None”.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "", False or [] are preserved as-is; only the
    sentinel itself is replaced.
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - @rename(name)
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values so callers cannot mutate backing state.

    - Sequence (non-string) → new list
    - Mapping → new dict (keys preserved, values processed)
    - Set → new set
    - Unset → None
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return coalesce(object)


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute "_{name}".

    Containers are returned as fresh copies (see _immortalize) and the Unset
    sentinel is surfaced as None.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def camelcase(text, /):
    """
    Convert a dash/underscore/dot/space separated spelling into camelCase.

    Rules
    - Existing camel humps are kept: "camelCaseOption" stays "camelCaseOption".
    - Every separator run is dropped and the following character is upper-cased:
      "foo-bar-baz" → "fooBarBaz", "foo__bar" → "fooBar".
    - Leading separators are dropped; the first word is lower-cased:
      "--Foo-Bar" → "fooBar".
    - A single character is lower-cased (callers that need to keep single-character
      keys verbatim go through keyify()).
    """
    if not isinstance(text, str):
        raise TypeError("camelcase() argument must be a string")

    text = text.strip()
    if len(text) == 1:
        return text.lower()
    if re.fullmatch(r"[a-z0-9]+", text):
        return text

    if text != text.lower():
        # Split humps so they survive the lower-casing below: "XMLHttpRequest" → "XML-Http-Request"
        text = re.sub(r"([a-z\d])([A-Z])", r"\1-\2", text)
        text = re.sub(r"([A-Z])([A-Z][a-z])", r"\1-\2", text)

    text = re.sub(r"^[_.\- ]+", "", text).lower()
    return re.sub(r"[_.\- ]+(\w|$)", lambda match: match[1].upper(), text)


@functools.cache
def decamelize(text, separator="-", /):
    """
    Convert camelCase into a separated lower-case spelling: "camelCaseOption" → "camel-case-option".

    Acronym runs are kept together: "parseXMLInput" → "parse-xml-input".
    """
    if not isinstance(text, str):
        raise TypeError("decamelize() argument must be a string")
    if not isinstance(separator, str):
        raise TypeError("decamelize() separator must be a string")

    text = re.sub(r"([a-z\d])([A-Z])", r"\1%s\2" % separator, text)
    text = re.sub(r"([A-Z]+)([A-Z][a-z\d]+)", r"\1%s\2" % separator, text)
    return text.lower()


def keyify(name, /):
    """
    Result-mapping key for a CLI name.

    Single word-characters ("F", "u") and the separator key "--" are kept verbatim;
    everything else is camel-cased.
    """
    if name == "--" or re.fullmatch(r"\w", name):
        return name
    return camelcase(name)


_NUMBER = re.compile(r"0x[0-9a-f]+|[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[-+]?\d+)?", re.IGNORECASE)


def isnumeric(text, /):
    """
    Tell whether a string is a numeric literal (decimal, float, exponent or 0x-hex).
    """
    return isinstance(text, str) and _NUMBER.fullmatch(text) is not None


def tonumber(text, /):
    """
    Best-effort numeric conversion.

    - "0x1f" → 31, "42" → 42, "-3" → -3, "1.5" → 1.5, "1e3" → 1000.0
    - anything that is not a numeric literal is returned unchanged (never raises).
    """
    if not isnumeric(text):
        return text
    if text[:2].lower() == "0x":
        return int(text, 16)
    if re.fullmatch(r"[-+]?\d+", text):
        return int(text)
    return float(text)


def trim_newlines(text, /):
    """
    Remove leading and trailing line breaks, keeping inner ones and other whitespace.
    """
    return text.strip("\r\n")


def redent(text, count=0, /):
    """
    Strip the common indentation of all non-blank lines, then indent each
    non-blank line by `count` spaces. Blank lines are left empty.
    """
    if not isinstance(count, int) or count < 0:
        raise ValueError("redent() count must be a non-negative integer")
    return textwrap.indent(textwrap.dedent(text), " " * count)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "camelcase",
    "decamelize",
    "keyify",
    "isnumeric",
    "tonumber",
    "trim_newlines",
    "redent",
)
