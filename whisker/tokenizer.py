"""
Whisker raw tokenizer: split an argument vector into positionals, switches and
the separator section.

Token grammar (checked in this order)
- "--"               → everything after it is the separator section.
- "-" or a number    → positional ("-" conventionally means stdin, "-5" is a value).
- "--name=value"     → ("name", "value")
- "-x=value"         → ("x", "value")
- "--no-name"        → ("name", False), unless "no-name" itself is declared
- "--name" / "-x"    → boolean flags take True, or a following literal "true"/"false";
                       other flags take the next token when it is not itself a switch,
                       otherwise "" (string flags) or True (anything else).
- "-name"            → the long name "name" (no short-option clustering).
- anything else      → positional.

Values are left as raw strings (or True/False from the shapes above); coercion is
the normalizer's job. The schema is only consulted to know which flags are boolean
(they never swallow the next token) and which are strings (bare form yields "").
"""
import re
from collections import deque
from typing import NamedTuple

from .schema import Schema
from .utils import isnumeric


class Tokens(NamedTuple):
    positionals: list[str]
    switches: list[tuple[str, str | bool]]
    separated: list[str]


def _isswitch(token):
    return token.startswith("-") and token != "-" and not isnumeric(token)


def tokenize(argv, schema=None, /) -> Tokens:
    """
    Split `argv` into Tokens(positionals, switches, separated).

    parameters
    - argv: Iterable[str], the raw argument vector (program name excluded).
    - schema: Schema | Mapping | None, used to look up flag types.

    returns
    - Tokens where `switches` keeps every (name, value) pair in argv order,
      repeated names included.
    """
    schema = Schema.coerce(schema) if schema is not None else Schema()

    positionals = []
    switches = []
    separated = []

    tokens = deque(argv)
    while tokens:
        token = tokens.popleft()

        if not isinstance(token, str):
            raise TypeError("tokenize() argument must be an iterable of strings")

        if token == "--":
            separated.extend(tokens)
            break

        if not _isswitch(token):
            positionals.append(token)
            continue

        if match := re.fullmatch(r"--?(?P<name>[^=]+)=(?P<value>.*)", token, re.DOTALL):
            switches.append((match["name"], match["value"]))
            continue

        # a flag declared as "no-something" is taken literally
        if token.startswith("--no-") and len(token) > 5 and token[2:] not in schema:
            switches.append((token[5:], False))
            continue

        name = token[2:] if token.startswith("--") else token[1:]
        spec = schema.resolve(name)

        if spec is not None and spec.type == "boolean":
            if tokens and tokens[0] in ("true", "false"):
                switches.append((name, tokens.popleft()))
            else:
                switches.append((name, True))
        elif tokens and not _isswitch(tokens[0]) and tokens[0] != "-":
            switches.append((name, tokens.popleft()))
        elif spec is not None and spec.type == "string":
            switches.append((name, ""))
        else:
            switches.append((name, True))

    return Tokens(positionals, switches, separated)


__all__ = (
    "Tokens",
    "tokenize",
)
