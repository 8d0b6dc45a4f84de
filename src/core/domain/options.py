"""Port build options (Pydantic v2).

A port's options live in `${PORT_DBDIR}/<dir>/options` files written by
`make config`:

    _OPTIONS_READ=foo-1.2.3
    _FILE_COMPLETE_OPTIONS_LIST=DOCS EXAMPLES
    OPTIONS_FILE_SET+=DOCS
    OPTIONS_FILE_UNSET+=EXAMPLES

Older ports trees wrote `WITH_DOCS=true` / `WITHOUT_EXAMPLES=true` instead;
both forms are understood when loading.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import RootModel

logger = logging.getLogger(__name__)

_OPTION_RE = re.compile(r"^\s*OPTIONS_FILE_((?:UN)?SET)\s*\+=\s*(\w+)\s*$", re.MULTILINE)
_LEGACY_OPTION_RE = re.compile(r"^\s*(WITH(?:OUT)?)_(\w+)\s*=\s*\"?(\w*)\"?\s*$", re.MULTILINE)


class Options(RootModel[dict[str, bool]]):
    """Option name -> enabled flag.

    Values are validated as booleans, so `"on"`, `"yes"` or `1` are
    accepted when building from arbitrary input.
    """

    root: dict[str, bool] = {}

    def __getitem__(self, name: str) -> bool:
        return self.root[name]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def get(self, name: str, default: bool | None = None) -> bool | None:
        return self.root.get(name, default)

    def items(self):
        return self.root.items()

    def merged(self, other: Options) -> Options:
        """New Options with `other` taking precedence."""

        return Options({**self.root, **other.root})

    @classmethod
    def parse(cls, text: str) -> Options:
        values: dict[str, bool] = {}
        for prefix, name, flag in _LEGACY_OPTION_RE.findall(text):
            if flag.lower() in ("", "yes", "true", "on", "1"):
                values[name] = prefix == "WITH"
        for state, name in _OPTION_RE.findall(text):
            values[name] = state == "SET"
        return cls(values)

    @classmethod
    def load(cls, files: Path | str | Iterable[Path | str]) -> Options:
        """Merge options from `files`; later files override earlier ones.

        Files that do not exist are skipped. Unreadable files are logged and
        skipped as well, so a broken options file never breaks a search.
        """

        if isinstance(files, (str, Path)):
            files = [files]

        options = cls()
        for file in files:
            path = Path(file)
            try:
                if not path.is_file():
                    continue
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("can't read options file %s: %s", path, exc)
                continue
            options = options.merged(cls.parse(text))
        return options

    def generate(self, pkgname: str | None = None) -> str:
        """Render an options file in the format `make config` writes."""

        lines = ["# This file was generated by ports-records"]
        if pkgname:
            lines.append(f"# Options for {pkgname}")
            lines.append(f"_OPTIONS_READ={pkgname}")
        names = sorted(self.root)
        lines.append(f"_FILE_COMPLETE_OPTIONS_LIST={' '.join(names)}")
        for name in names:
            state = "SET" if self.root[name] else "UNSET"
            lines.append(f"OPTIONS_FILE_{state}+={name}")
        return "\n".join(lines) + "\n"

    def save(self, path: Path | str, pkgname: str | None = None) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.generate(pkgname), encoding="utf-8")
        return out
