"""
Whisker CLI layer: parse an argument vector against a flag schema and handle
the conventional help/version behaviour.

What this module provides
- parse(help, /, **options) → Cli
  • Tokenizes argv, normalizes it against the flag schema, formats the help screen.
  • Auto-version: a truthy `version` flag prints the version and exits with 0.
  • Auto-help: a truthy `help` flag prints the help screen and exits with 0.
  • `--no-auto-version` / `--no-auto-help` on argv switch those off for the run.
- Cli: the parse result (input, flags, pkg, help, title) with show_help()/show_version().

Quick start
    from whisker import parse

    cli = parse('''
        Usage
          $ unicorns <input>

        Options
          --rainbow, -r  Include a rainbow
    ''', flags={"rainbow": {"type": "boolean", "alias": "r"}})

    # $ unicorns ponies --rainbow
    cli.input   # ["ponies"]
    cli.flags   # {"rainbow": True, "r": True}

Options (keyword-only)
- argv: Iterable[str], default from the environment (sys.argv[1:]).
- flags: Mapping of flag declarations or a Schema.
- infer_type: bool, convert numeric positionals into numbers.
- input: "string" | "number" | Sequence of those, per-position positional type hint.
- boolean_default: False (default) | None (leave unset booleans out) | any value.
- separator / "--": collect the tokens after "--" into flags["--"].
- description: str, or False to hide the manifest description.
- version: str overriding the manifest version.
- auto_help / auto_version: bool, both True by default.
- pkg: Mapping or Manifest; discovered from the running distribution when omitted.
- environment: Environment with argv source, consoles, exit and title hooks.
"""
from collections.abc import Iterable, Mapping, Sequence

from .environment import Environment
from .manifest import Manifest
from .normalizer import normalize
from .schema import Schema
from .tokenizer import tokenize
from .utils import *


def _format_help(help, description, /):
    """
    Shape the help screen: drop trailing whitespace (the indentation left before
    the closing quotes of a triple-quoted string), trim surrounding newlines,
    re-indent by two spaces and put the description on top.
    """
    help = redent(trim_newlines(help.rstrip()), 2)
    return ("\n  %s\n" % description if description else "") + ("\n%s\n" % help if help else "\n")


def _disabled(switches, key, /):
    """
    Tell whether argv negated `key` (e.g. --no-auto-help for "autoHelp").
    """
    return any(value is False and keyify(name) == key for name, value in switches)


def _sanitize_options(metadata, /):
    """
    Internal: validate and normalize parse() options in place.

    Responsibilities
    - help: Unset | str | Sequence[str]; sequences are joined with newlines; Unset → "".
    - argv: Unset | Iterable[str] (a bare string is rejected, it is not a vector).
    - flags: Unset | Mapping | Schema.
    - infer_type / auto_help / auto_version / separator: bool.
    - description: Unset | None | False | str.
    - version: Unset | str.
    - environment: Unset | Environment; Unset → Environment().

    Raises
    - TypeError: when any option has an unsupported type.
    """
    if isinstance(help := metadata["help"], Sequence) and not isinstance(help, str):
        if not all(isinstance(line, str) for line in help):
            raise TypeError("parse() 'help' lines must be strings")
        help = "\n".join(help)
    elif not isinstance(help, str | Unset):
        raise TypeError("parse() 'help' must be a string or a sequence of lines")
    metadata["help"] = coalesce(help, "")

    if isinstance(argv := metadata["argv"], str) or not isinstance(argv, Iterable | Unset):
        raise TypeError("parse() 'argv' must be an iterable of strings")
    if argv is not Unset:
        argv = list(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("parse() 'argv' must be an iterable of strings")
        metadata["argv"] = argv

    if not isinstance(metadata["flags"], Mapping | Schema | Unset):
        raise TypeError("parse() 'flags' must be a mapping of flag declarations")

    for name in ("infer_type", "auto_help", "auto_version", "separator"):
        if not isinstance(metadata[name], bool):
            raise TypeError(f"parse() {name!r} must be a boolean")

    if not (metadata["description"] in (None, False) or isinstance(metadata["description"], str | Unset)):
        raise TypeError("parse() 'description' must be a string or False")

    if not isinstance(metadata["version"], str | Unset):
        raise TypeError("parse() 'version' must be a string")

    if not isinstance(environment := metadata["environment"], Environment | Unset):
        raise TypeError("parse() 'environment' must be an Environment")
    metadata["environment"] = coalesce(environment, Environment())


class Cli:
    """
    Result of parse().

    Attributes
    - input: list of positionals (numbers when inferred).
    - flags: dict of camelCase keys and aliases; aliases share the same value object.
    - pkg: the Manifest in use.
    - help: the formatted help screen.
    - title: the process title derived from pkg (None when unknown).
    - version: the version string shown by show_version().
    """
    __slots__ = ("input", "flags", "pkg", "help", "title", "version", "_environment")

    def __init__(self, input, flags, pkg, help, /, *, title=None, version=None, environment=Unset):
        self.input = input
        self.flags = flags
        self.pkg = pkg
        self.help = help
        self.title = title
        self.version = version
        self._environment = environment if environment is not Unset else Environment()

    def show_help(self, code=Unset, /):
        """
        Print the help screen and terminate.

        - code 0 → stdout (success path); anything else → stderr.
        - a missing or non-integer code means 2.
        """
        if not isinstance(code, int) or isinstance(code, bool):
            code = 2
        self._environment.write(self.help, error=code != 0)
        self._environment.terminate(code)

    def show_version(self):
        """
        Print the version and terminate with 0.
        """
        self._environment.write(coalesce(self.version, ""))
        self._environment.terminate(0)

    def __repr__(self):
        return "cli(%s)" % ", ".join("%s=%r" % item for item in self.__rich_repr__())

    def __rich_repr__(self):
        yield "input", self.input
        yield "flags", self.flags
        yield "pkg", self.pkg
        yield "help", self.help


def parse(
        help=Unset,
        *,
        argv=Unset,
        flags=Unset,
        infer_type=False,
        input="string",
        boolean_default=False,
        separator=False,
        description=Unset,
        version=Unset,
        auto_help=True,
        auto_version=True,
        pkg=Unset,
        environment=Unset,
        **options,
):
    """
    Parse an argument vector against a flag schema.

    Parameters
    - help: help text (str or sequence of lines); may be given positionally.
    - options: see the module documentation. The separator option may also be
      spelled "--" (parse(**{"--": True})), and a flags entry "--": True does the same.

    Returns
    - Cli

    Side effects (through the environment, at most once)
    - retitles the process when a title hook is installed.
    - exits after printing the version or the help screen when requested on argv.

    Raises
    - TypeError: unknown options or options of the wrong type.
    - ValueError: invalid flag declarations or positional type hints.
    """
    if unknown := set(options) - {"--"}:
        raise TypeError("parse() got unexpected options %s" % ", ".join(map(repr, sorted(unknown))))
    if "--" in options:
        if not isinstance(options["--"], bool):
            raise TypeError("parse() '--' must be a boolean")
        separator = separator or options["--"]

    _sanitize_options(metadata := {
        "help": help,
        "argv": argv,
        "flags": flags,
        "infer_type": infer_type,
        "auto_help": auto_help,
        "auto_version": auto_version,
        "separator": separator,
        "description": description,
        "version": version,
        "environment": environment,
    })
    environment = metadata["environment"]

    schema = Schema.coerce(metadata["flags"])
    pkg = Manifest.coerce(pkg)
    if (argv := metadata["argv"]) is Unset:
        argv = environment.arguments()

    tokens = tokenize(argv, schema)
    input, flags = normalize(
        tokens,
        schema,
        infer_type=infer_type,
        input=input,
        boolean_default=boolean_default,
        separator=separator,
    )

    # an empty description falls back to the manifest; False hides it
    if not (description := metadata["description"]) and description is not False:
        description = pkg.description

    cli = Cli(
        input,
        flags,
        pkg,
        _format_help(metadata["help"], description),
        title=pkg.title,
        version=coalesce(metadata["version"], pkg.version),
        environment=environment,
    )

    environment.retitle(cli.title)

    if auto_version and flags.get("version") and not _disabled(tokens.switches, "autoVersion"):
        cli.show_version()
    elif auto_help and flags.get("help") and not _disabled(tokens.switches, "autoHelp"):
        cli.show_help(0)

    return cli


__all__ = (
    "Cli",
    "parse",
)
