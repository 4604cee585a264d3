r"""
Whisker flag schema: declaration, validation and canonicalization.

Overview
- FlagSpec: one declared flag, normalized once from any accepted shape.
  • short form:  {"foo": "boolean"}
  • full form:   {"foo": {"type": "boolean", "alias": "f", "default": True}}
  • ready spec:  {"foo": FlagSpec("foo", type="boolean", alias="f")}
- Schema: the canonicalized schema. It derives, for every flag:
  • option: the hyphenated CLI spelling ("camelCaseOption" → "camel-case-option"),
  • key:    the camelCase result key ("camel-case-option" → "camelCaseOption"),
  • names:  every CLI spelling that reaches the flag (option, declared name, aliases),
  • keys:   every result key the resolved value is published under (key + aliases).
  and a lookup from CLI spelling to FlagSpec used by the tokenizer and normalizer.

Metadata (sanitized on construction)
- type: "string" | "boolean" | "number" (default "string").
- alias: Unset | str | Iterable[str]; each alias must be a non-empty string.
- default: any value; Unset means "not declared" (None is a legal default).

Validation highlights
- Names and aliases must be strings (TypeError) and non-empty after trimming (ValueError).
- Unknown types raise ValueError with the accepted spellings.
- The special schema entry "--": True enables separator capture; it is not a flag.

Quick example:
    >>> schema = Schema({"unicorn": {"alias": "u"}, "rainbow": "boolean"})
    >>> schema.resolve("u").key
    'unicorn'
    >>> schema.resolve("rainbow").type
    'boolean'
"""
import functools
import operator
from collections.abc import Iterable, Mapping

from .faults import *
from .utils import *

TYPES = ("string", "boolean", "number")


def _sanitize_metadata(metadata, /):
    """
    Internal: normalize and validate the metadata of a single flag declaration.

    Responsibilities
    - name: required, non-empty string after trimming (a leading '--' or '-' is
      tolerated and removed, so "--foo" and "foo" declare the same flag).
    - type: Unset or one of TYPES; defaults to "string".
    - alias: Unset, a string or an iterable of strings; normalized into a tuple
      (declaration order kept, duplicates dropped, leading dashes removed).

    Raises
    - TypeError: non-string name/type/alias.
    - ValueError: empty name/alias, unknown type.

    Notes
    - This function mutates the provided metadata dict in place.
    - default is never validated: any value (including None) is a legal default.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError("flag names must be strings")
    elif not (name := name.strip().lstrip("-")):
        raise ValueError("flag names cannot be empty")
    metadata["name"] = name

    if not isinstance(type := metadata["type"], str | Unset):
        raise TypeError(f"flag {name!r} 'type' must be a string")
    elif (type := coalesce(type, "string").strip().lower()) not in TYPES:
        raise ValueError(f"flag {name!r} 'type' must be one of {', '.join(map(repr, TYPES))}")
    metadata["type"] = type

    aliases = metadata["alias"]
    if aliases is Unset:
        aliases = ()
    elif isinstance(aliases, str):
        aliases = (aliases,)
    elif not isinstance(aliases, Iterable):
        raise TypeError(f"flag {name!r} 'alias' must be a string or an iterable of strings")

    names = []
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError(f"flag {name!r} aliases must be strings")
        elif not (alias := alias.strip().lstrip("-")):
            raise ValueError(f"flag {name!r} aliases cannot be empty-strings")
        if alias not in names:
            names.append(alias)
    metadata["alias"] = tuple(names)


class FlagSpec:
    """
    A single, normalized flag declaration.

    Attributes (read-only)
    - name: the canonical name exactly as declared (dashes trimmed).
    - type: "string" | "boolean" | "number".
    - aliases: declared aliases, in declaration order.
    - default: the declared default (None when not declared; see `defaulted`).
    - defaulted: whether a default was declared at all.
    - option: hyphenated CLI spelling of the name.
    - key: camelCase result key (single characters kept verbatim).
    - names: all CLI spellings reaching this flag.
    - keys: all result keys the value is published under.
    """
    __introspectable__ = ("name", "type", "aliases", "default")
    __slots__ = ("_name", "_type", "_aliases", "_default")

    name = mirror("name")
    type = mirror("type")
    aliases = mirror("aliases")

    def __init__(self, name, /, type=Unset, alias=Unset, default=Unset):
        _sanitize_metadata(metadata := {"name": name, "type": type, "alias": alias})
        self._name = metadata["name"]
        self._type = metadata["type"]
        self._aliases = metadata["alias"]
        self._default = default

    @classmethod
    def from_declaration(cls, name, declaration, /):
        """
        Build a FlagSpec from any accepted declaration shape.

        - FlagSpec: returned as-is when its name matches, otherwise re-declared under `name`.
        - str: short form, the flag type.
        - Mapping: full form with optional "type", "alias" and "default" keys.
        """
        if isinstance(declaration, FlagSpec):
            if declaration.name == name.strip().lstrip("-"):
                return declaration
            return cls(name, declaration.type, declaration._aliases, declaration._default)
        if isinstance(declaration, str):
            return cls(name, declaration)
        if isinstance(declaration, Mapping):
            if unknown := set(declaration) - {"type", "alias", "default"}:
                raise TypeError(f"flag {name!r} got unexpected metadata {', '.join(map(repr, sorted(map(str, unknown))))}")
            return cls(
                name,
                declaration.get("type", Unset),
                declaration.get("alias", Unset),
                declaration.get("default", Unset),
            )
        raise TypeError(f"flag {name!r} must be declared with a type string, a mapping or a FlagSpec")

    @property
    def default(self):
        # the declared object itself; defaults are published as given
        return coalesce(self._default)

    @property
    def defaulted(self):
        return self._default is not Unset

    @property
    def option(self):
        return self._name if len(self._name) == 1 else decamelize(self._name)

    @property
    def key(self):
        return keyify(self.option)

    @property
    def names(self):
        return tuple(dict.fromkeys((self.option, self._name, *self._aliases)))

    @property
    def keys(self):
        return tuple(dict.fromkeys((self.key, *map(keyify, self._aliases))))

    def __eq__(self, other):
        if not isinstance(other, FlagSpec):
            return NotImplemented
        return (
            self._name == other._name and
            self._type == other._type and
            self._aliases == other._aliases and
            self.defaulted == other.defaulted and
            self._default == other._default
        )

    def __hash__(self):
        return hash((self._name, self._type, self._aliases))

    def __repr__(self):
        return f"flag-spec({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        yield "name", self._name
        yield "type", self._type
        if self._aliases:
            yield "aliases", self._aliases
        if self.defaulted:
            yield "default", self._default


class Schema:
    """
    Canonicalized flag schema with a bidirectional lookup.

    Construction
    - Schema(flags) where flags is Unset, a Mapping of name → declaration, or
      another Schema (returned unchanged by Schema.coerce()).

    Lookup
    - resolve(name) → FlagSpec | None: any CLI spelling (option, declared name,
      alias) to its FlagSpec; None for undeclared names.
    - keys(name) → tuple[str, ...]: result keys to publish a value under; for
      undeclared names, the single keyify(name) key.

    Aliases
    - An alias claimed by a second flag moves to that flag (AliasCollisionWarning).
    - An alias spelled like another flag's own name takes that spelling over
      (AliasShadowingWarning): the alias is the more specific declaration.
    """
    __slots__ = ("_specs", "_lookup", "_separator")

    def __init__(self, flags=Unset, /):
        flags = coalesce(flags, {})
        if not isinstance(flags, Mapping):
            raise TypeError("schema flags must be a mapping of names to declarations")

        self._specs = []
        self._lookup = {}
        self._separator = False

        for name, declaration in flags.items():
            if not isinstance(name, str):
                raise TypeError("flag names must be strings")
            if name == "--":
                self._separator = bool(declaration)
                continue
            self._specs.append(FlagSpec.from_declaration(name, declaration))

        # Own spellings first, so aliases can be checked against every flag's names.
        for spec in self._specs:
            for name in (spec.option, spec.name):
                self._lookup.setdefault(name, spec)

        for spec in self._specs:
            for alias in spec.aliases:
                owner = self._lookup.get(alias)
                if owner is not None and owner is not spec:
                    if alias in (owner.option, owner.name):
                        trigger(AliasShadowingWarning(
                            "alias %r of flag %r shadows flag %r" % (alias, spec.name, owner.name),
                            title="alias shadows a flag",
                            code=FaultCode.ALIAS_SHADOWING,
                            hint="rename the alias or drop it from %r" % spec.name,
                            stacklevel=4,
                        ))
                    else:
                        trigger(AliasCollisionWarning(
                            "alias %r is declared by both %r and %r" % (alias, owner.name, spec.name),
                            title="alias declared twice",
                            code=FaultCode.ALIAS_COLLISION,
                            hint="keep the alias on one flag only (now it belongs to %r)" % spec.name,
                            stacklevel=4,
                        ))
                self._lookup[alias] = spec

    @classmethod
    def coerce(cls, flags=Unset, /):
        return flags if isinstance(flags, Schema) else cls(flags)

    @property
    def specs(self):
        return tuple(self._specs)

    @property
    def separator(self):
        return self._separator

    def resolve(self, name, /):
        return self._lookup.get(name)

    def keys(self, name, /):
        if (spec := self.resolve(name)) is None:
            return (keyify(name),)
        return spec.keys

    def __iter__(self):
        return iter(self._specs)

    def __len__(self):
        return len(self._specs)

    def __contains__(self, name):
        return name in self._lookup

    def __repr__(self):
        return "schema(%s)" % ", ".join(map(repr, self._specs))

    def __rich_repr__(self):
        for spec in self._specs:
            yield spec
        if self._separator:
            yield "separator", True


__all__ = (
    "TYPES",
    "FlagSpec",
    "Schema",
)
