"""Port names, package names and port origins.

- portname:   `foo`, `p5-Foo-Bar`
- pkgname:    portname + `-` + version, e.g. `foo-1.2.3_1,1`
- portorigin: `category/portname`, e.g. `lang/foo`

The pattern builders produce extended regular expressions for the
`<key>=<pattern>` argument of `make search` (matched by awk).
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

_PORTNAME = r"[a-zA-Z0-9][a-zA-Z0-9@._+-]*"
_VERSION = r"[0-9][a-zA-Z0-9._,+]*"

PORTNAME_RE = re.compile(rf"^{_PORTNAME}$")
PKGNAME_RE = re.compile(rf"^{_PORTNAME}-{_VERSION}$")
PORTORIGIN_RE = re.compile(rf"^{_PORTNAME}/{_PORTNAME}$")

# Characters with a special meaning in a POSIX extended regex.
_ERE_SPECIAL_RE = re.compile(r"([\\()|.*+?{}\[\]^$])")


def is_portname(value: str) -> bool:
    return bool(PORTNAME_RE.match(value))


def is_pkgname(value: str) -> bool:
    return bool(PKGNAME_RE.match(value))


def is_portorigin(value: str) -> bool:
    return bool(PORTORIGIN_RE.match(value))


def split_pkgname(pkgname: str) -> tuple[str, str | None]:
    """Split `foo-bar-1.2` into `("foo-bar", "1.2")`.

    A name without any dash has no version: `("foo", None)`.
    """

    if "-" not in pkgname:
        return pkgname, None
    portname, version = pkgname.rsplit("-", 1)
    return portname, version


def escape_pattern(value: str) -> str:
    return _ERE_SPECIAL_RE.sub(r"\\\1", value)


def strings_to_pattern(values: Iterable[str]) -> str:
    escaped = [escape_pattern(v) for v in values]
    if len(escaped) == 1:
        return escaped[0]
    return "(" + "|".join(escaped) + ")"


def fullname_to_pattern(names: Iterable[str]) -> str:
    return f"^{strings_to_pattern(names)}$"


def portname_to_pattern(portnames: Iterable[str]) -> str:
    """Match `make search` port names (pkgnames) built from `portnames`."""

    return f"^{strings_to_pattern(portnames)}-[^-]+$"


def pkgname_to_pattern(pkgnames: Iterable[str]) -> str:
    return fullname_to_pattern(pkgnames)


def portorigin_to_pattern(portorigins: Iterable[str], portsdir: str | Path = "/usr/ports") -> str:
    """Match `make search` paths (`<portsdir>/<origin>`)."""

    root = escape_pattern(str(portsdir).rstrip("/"))
    return f"^{root}/{strings_to_pattern(portorigins)}$"


def path_to_portorigin(path: str) -> str:
    """`/usr/ports/lang/foo` -> `lang/foo`."""

    parts = [p for p in re.split(r"/+", path) if p]
    return "/".join(parts[-2:])


def options_files(portname: str, portorigin: str, port_dbdir: str | Path) -> list[Path]:
    """Candidate options files of a port, in the order make reads them.

    `<dbdir>/<portname>/options` is the legacy (UNIQUENAME) location,
    `<dbdir>/<category>_<portname>/options` the current one; each may be
    followed by a `.local` override.
    """

    dbdir = Path(port_dbdir)
    files: list[Path] = []
    for subdir in (portname, portorigin.replace("/", "_")):
        base = dbdir / subdir / "options"
        files.extend([base, base.with_name("options.local")])
    return files
