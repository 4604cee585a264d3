"""
Package manifest: the name/version/description/bin facts a CLI reports about itself.

Sources
- Manifest.from_mapping({...}): a plain mapping shaped like a package manifest
  ({"name": ..., "version": ..., "description": ..., "bin": ...}). Every other key
  is kept in `metadata` untouched.
- Manifest.from_distribution("dist-name"): installed distribution metadata via
  importlib.metadata (Name, Version, Summary, console_scripts entry points as bin).
- Manifest.discover(): the distribution that owns the running __main__ package.

Missing facts stay None; nothing here raises for incomplete metadata.
"""
import importlib.metadata
import os.path
import sys
from collections.abc import Mapping
from types import MappingProxyType

from .utils import *


class Manifest:
    __introspectable__ = ("name", "version", "description", "bin")
    __slots__ = ("_name", "_version", "_description", "_bin", "_metadata")

    name = mirror("name")
    version = mirror("version")
    description = mirror("description")
    bin = mirror("bin")

    def __init__(self, *, name=None, version=None, description=None, bin=None, metadata=Unset):
        for field, value in (("name", name), ("version", version), ("description", description)):
            if value is not None and not isinstance(value, str):
                raise TypeError(f"manifest {field!r} must be a string")
        if bin is not None and not isinstance(bin, str | Mapping):
            raise TypeError("manifest 'bin' must be a string or a mapping of command names to paths")

        self._name = name
        self._version = version
        self._description = description
        self._bin = dict(bin) if isinstance(bin, Mapping) else bin
        self._metadata = dict(coalesce(metadata, {}))

    @property
    def metadata(self):
        return MappingProxyType(self._metadata)

    @property
    def title(self):
        """
        Process title: the first command of a bin mapping, else the package name.
        """
        if isinstance(self._bin, Mapping) and self._bin:
            return next(iter(self._bin))
        return self._name

    @classmethod
    def coerce(cls, pkg=Unset, /):
        if pkg is Unset:
            return cls.discover()
        if isinstance(pkg, Manifest):
            return pkg
        if isinstance(pkg, Mapping):
            return cls.from_mapping(pkg)
        raise TypeError("'pkg' must be a mapping or a Manifest")

    @classmethod
    def from_mapping(cls, mapping, /):
        return cls(
            name=mapping.get("name"),
            version=mapping.get("version"),
            description=mapping.get("description"),
            bin=mapping.get("bin"),
            metadata=mapping,
        )

    @classmethod
    def from_distribution(cls, name, /):
        try:
            distribution = importlib.metadata.distribution(name)
        except importlib.metadata.PackageNotFoundError:
            return cls(name=name)

        metadata = distribution.metadata
        scripts = {
            entry.name: entry.value
            for entry in distribution.entry_points
            if entry.group == "console_scripts"
        }
        return cls(
            name=metadata.get("Name", name),
            version=metadata.get("Version"),
            description=metadata.get("Summary"),
            bin=scripts or None,
            metadata={key.lower(): value for key, value in metadata.items()},
        )

    @classmethod
    def discover(cls):
        """
        Manifest of the distribution providing the running program.

        The top-level package of __main__ is mapped to its distribution; scripts
        that do not belong to any installed distribution get a manifest named
        after the program file.
        """
        main = sys.modules.get("__main__")
        package = (getattr(main, "__package__", None) or "").partition(".")[0]
        if package:
            for distribution in importlib.metadata.packages_distributions().get(package, ()):
                return cls.from_distribution(distribution)
        return cls(name=os.path.splitext(os.path.basename(sys.argv[0]))[0] or None)

    def __repr__(self):
        return "manifest(%s)" % ", ".join("%s=%r" % item for item in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            if (value := getattr(self, name)) is not None:
                yield name, value


__all__ = (
    "Manifest",
)
