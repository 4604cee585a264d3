"""
Whisker schema normalizer: turn raw Tokens into the final `input` list and
`flags` mapping.

Phases (order matters)
1. seed booleans by policy
   • declared default → that default
   • boolean_default is False (the default) → False
   • boolean_default is None → nothing; the flag stays absent unless supplied
   • any other boolean_default → that value
2. merge switches from argv: resolve through the schema, coerce, publish under
   every key of the flag (the spelling used on argv first, then the canonical
   key and aliases) as one shared object
3. seed every other declared default, for flags argv did not supply
4. copy positionals, inferring numbers when asked to
5. route the separator section to flags["--"] (enabled) or to input (disabled)

Coercion
- boolean: True/False kept; the string "false" → False; any other string → True.
- number:  numeric literals converted (int/float/hex); anything else kept as given.
- string:  kept as given ("true"/"false" stay strings).
- undeclared: kept as given, or numbers inferred when infer_type is on.

Nothing in here raises for odd argv: unknown flags land under a camelCase key
(single characters verbatim) and failed numeric conversions keep the string.
"""
from collections.abc import Sequence

from .schema import Schema
from .tokenizer import Tokens
from .utils import keyify, tonumber


def _coerce(spec, value, infer_type):
    # --no-name and bare switches give real booleans already
    if isinstance(value, bool):
        return value
    if spec is None:
        return tonumber(value) if infer_type else value
    match spec.type:
        case "boolean":
            return value != "false"
        case "number":
            return tonumber(value)
        case _:
            return value


def _hint(input, index):
    if isinstance(input, str):
        return input
    if index < len(input):
        return input[index]
    return "string"


def normalize(tokens, schema=None, /, *, infer_type=False, input="string", boolean_default=False, separator=False):
    """
    Build (input, flags) from tokenizer output.

    parameters
    - tokens: Tokens from tokenize().
    - schema: Schema | Mapping | None.
    - infer_type: convert numeric positionals (and undeclared flag values) to numbers.
    - input: "string" | "number" | Sequence of those, a per-position hint for positionals.
    - boolean_default: policy for boolean flags without a declared default (see module doc).
    - separator: capture tokens after "--" into flags["--"]; also enabled by a
      schema entry "--": True.

    returns
    - tuple[list, dict]
    """
    if not isinstance(tokens, Tokens):
        raise TypeError("normalize() first argument must be Tokens")
    schema = Schema.coerce(schema) if schema is not None else Schema()
    input = _sanitize_input(input)

    flags = {}

    def publish(keys, value):
        for key in keys:
            flags[key] = value

    for spec in schema:
        if spec.type != "boolean":
            continue
        if spec.defaulted:
            publish(spec.keys, spec.default)
        elif boolean_default is False:
            publish(spec.keys, False)
        elif boolean_default is not None:
            publish(spec.keys, boolean_default)

    supplied = set()
    for name, value in tokens.switches:
        spec = schema.resolve(name)
        keys = schema.keys(name)
        value = _coerce(spec, value, infer_type)

        # repeats of a non-boolean flag accumulate in argv order, once it holds a value
        if keys[0] in supplied and (spec is None or spec.type != "boolean"):
            if not isinstance(previous := flags[keys[0]], bool):
                value = [*previous, value] if isinstance(previous, list) else [previous, value]

        supplied.add(keys[0])
        # the spelling used on argv comes first
        publish(sorted(keys, key=lambda key: key != keyify(name)), value)

    for spec in schema:
        if spec.type != "boolean" and spec.defaulted and spec.keys[0] not in supplied:
            publish(spec.keys, spec.default)

    positionals = []
    for index, token in enumerate(tokens.positionals):
        if infer_type or _hint(input, index) == "number":
            token = tonumber(token)
        positionals.append(token)

    if separator or schema.separator:
        flags["--"] = list(tokens.separated)
    else:
        positionals.extend(tokens.separated)

    return positionals, flags


def _sanitize_input(input, /):
    """
    Internal: validate the positional type hint.

    Raises
    - TypeError: when input is neither a string nor a sequence of strings.
    - ValueError: when a hint is not "string" or "number".
    """
    hints = (input,) if isinstance(input, str) else input
    if not isinstance(hints, Sequence):
        raise TypeError("'input' must be 'string', 'number' or a sequence of those")
    for hint in hints:
        if not isinstance(hint, str):
            raise TypeError("'input' hints must be strings")
        if hint not in ("string", "number"):
            raise ValueError("'input' hints must be 'string' or 'number', not %r" % hint)
    return input if isinstance(input, str) else tuple(input)


__all__ = (
    "normalize",
)
