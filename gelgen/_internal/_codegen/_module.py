# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    TextIO,
)

import contextlib
import enum
import logging
import os
import pathlib
import tempfile
import textwrap
from collections import defaultdict

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


logger = logging.getLogger(__name__)


MAX_LINE_LENGTH = 79


class _ImportSource(enum.Enum):
    lib = enum.auto()
    local = enum.auto()


class _ImportKind(enum.Enum):
    namespace = enum.auto()
    names = enum.auto()
    reexport = enum.auto()


def _get_import_source(module: str) -> _ImportSource:
    if module.startswith("."):
        return _ImportSource.local
    else:
        return _ImportSource.lib


class GeneratedModule:
    """A generated TypeScript file: deduplicated imports plus a body."""

    INDENT = " " * 2

    def __init__(self, preamble: str) -> None:
        self._comment_preamble = preamble
        self._indent_level = 0
        self._code: list[str] = []
        # (module, type_only) -> alias
        self._namespaces: dict[tuple[str, bool], str] = {}
        # (module, type_only) -> {local name: imported name}
        self._names: defaultdict[tuple[str, bool], dict[str, str]] = (
            defaultdict(dict)
        )
        # alias -> module
        self._reexports: dict[str, str] = {}
        self._globals: set[str] = set()

    def has_content(self) -> bool:
        return bool(self._code) or bool(self._reexports)

    def is_empty(self) -> bool:
        return not self.has_content()

    def _disambiguate_name(self, name: str) -> str:
        if name not in self._globals:
            return name

        ctr = 0

        def _mangle(name: str) -> str:
            if ctr == 0:
                return f"__{name}__"
            else:
                return f"__{name}_{ctr}__"

        mangled = _mangle(name)
        while mangled in self._globals:
            ctr += 1
            mangled = _mangle(name)

        return mangled

    def import_namespace(
        self,
        module: str,
        alias: str,
        *,
        type_only: bool = False,
    ) -> str:
        """Register ``import * as <alias> from "<module>"``.

        Returns the local name to use, which differs from *alias* only
        when the alias is already taken by another import.
        """
        key = (module, type_only)
        imported = self._namespaces.get(key)
        if imported is not None:
            return imported

        imported = self._disambiguate_name(alias)
        self._namespaces[key] = imported
        self._globals.add(imported)
        return imported

    def import_name(
        self,
        module: str,
        name: str,
        *,
        alias: str | None = None,
        type_only: bool = False,
    ) -> str:
        """Register ``import {<name> as <alias>} from "<module>"``."""
        names = self._names[(module, type_only)]
        for local, imported_name in names.items():
            if imported_name == name:
                return local

        local = self._disambiguate_name(alias or name)
        names[local] = name
        self._globals.add(local)
        return local

    def export_namespace(self, module: str, alias: str) -> None:
        """Register ``export * as <alias> from "<module>"``."""
        self._reexports[alias] = module

    def current_indentation(self, extra: int = 0) -> str:
        return self.INDENT * (self._indent_level + extra)

    @contextlib.contextmanager
    def indented(self) -> Iterator[None]:
        self._indent_level += 1
        try:
            yield
        finally:
            self._indent_level -= 1

    def write(self, text: str = "") -> None:
        chunk = textwrap.indent(text, prefix=self.INDENT * self._indent_level)
        self._code.append(chunk)

    def write_section_break(self, size: int = 1) -> None:
        self._code.extend([""] * size)

    def get_comment_preamble(self) -> str:
        return self._comment_preamble

    def merge(self, other: GeneratedModule) -> None:
        """Append *other* to this module, combining imports."""
        for key, alias in other._namespaces.items():
            if key not in self._namespaces:
                self._namespaces[key] = alias
                self._globals.add(alias)
        for key, names in other._names.items():
            for local, name in names.items():
                self._names[key].setdefault(local, name)
                self._globals.add(local)
        for alias, module in other._reexports.items():
            self._reexports.setdefault(alias, module)
        if other._code:
            if self._code:
                self._code.append("")
            self._code.extend(other._code)

    def render_imports(self) -> str:
        lines: list[tuple[tuple[int, str, int, str], str]] = []

        for (module, type_only), alias in self._namespaces.items():
            kw = "import type" if type_only else "import"
            lines.append(
                (
                    _sort_key(module, _ImportKind.namespace, alias),
                    f'{kw} * as {alias} from "{module}";',
                )
            )

        for (module, type_only), names in self._names.items():
            if not names:
                continue
            kw = "import type" if type_only else "import"
            parts = sorted(
                name if local == name else f"{name} as {local}"
                for local, name in names.items()
            )
            lines.append(
                (
                    _sort_key(module, _ImportKind.names, str(type_only)),
                    self.format_list(
                        f'{kw} {{{{{{list}}}}}} from "{module}";',
                        parts,
                    ),
                )
            )

        for alias, module in self._reexports.items():
            lines.append(
                (
                    _sort_key(module, _ImportKind.reexport, alias),
                    f'export * as {alias} from "{module}";',
                )
            )

        lines.sort(key=lambda kv: kv[0])
        return "\n".join(line for _, line in lines)

    def render(self) -> str:
        sections = [self.get_comment_preamble().rstrip("\n")]
        imports = self.render_imports()
        if imports:
            sections.append(imports)
        if self._code:
            sections.append("\n".join(self._code).rstrip("\n"))
        return "\n\n".join(filter(None, sections)) + "\n"

    def output(self, out: TextIO) -> None:
        out.write(self.render())

    def format_list(
        self,
        tpl: str,
        values: list[str],
        *,
        extra_indent: int = 0,
        separator: str = ", ",
    ) -> str:
        list_string = separator.join(values)
        output_string = tpl.format(list=list_string)
        line_length = len(output_string) + len(
            self.current_indentation(extra_indent)
        )
        if line_length > MAX_LINE_LENGTH:
            strip_sep = separator.rstrip()
            line_sep = f"{strip_sep}\n{self.INDENT}"
            list_string = line_sep.join(values)
            if list_string:
                list_string += strip_sep
            list_string = f"\n{self.INDENT}{list_string}\n"
            output_string = tpl.format(list=list_string)

        return output_string


def _sort_key(
    module: str,
    kind: _ImportKind,
    tail: str,
) -> tuple[int, str, int, str]:
    return (_get_import_source(module).value, module, kind.value, tail)


class GeneratedTree:
    """A tree of generated files keyed by relative POSIX path."""

    def __init__(self, preamble: str) -> None:
        self._preamble = preamble
        self._files: dict[str, GeneratedModule] = {}

    def get_path(self, path: str) -> GeneratedModule:
        module = self._files.get(path)
        if module is None:
            module = GeneratedModule(self._preamble)
            self._files[path] = module
        return module

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._files))

    def __len__(self) -> int:
        return len(self._files)

    @property
    def files(self) -> Mapping[str, GeneratedModule]:
        return self._files

    def merge(self, other: GeneratedTree) -> None:
        for path, module in other._files.items():
            self.get_path(path).merge(module)

    def render(self) -> dict[str, str]:
        return {
            path: self._files[path].render()
            for path in sorted(self._files)
            if self._files[path].has_content()
        }

    def write(self, outdir: str | os.PathLike[str]) -> list[pathlib.Path]:
        """Flush the tree into *outdir*.

        Everything is rendered and written to a temporary directory next
        to *outdir* first; files are moved into place only after all of
        them were written successfully.
        """
        rendered = self.render()
        outpath = pathlib.Path(outdir)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        written = []

        with tempfile.TemporaryDirectory(
            prefix=".~tmp.gelgen.",
            dir=outpath.parent,
        ) as tmp:
            tmpdir = pathlib.Path(tmp)
            for path, text in rendered.items():
                tmpfile = tmpdir / path
                tmpfile.parent.mkdir(parents=True, exist_ok=True)
                with open(tmpfile, "w", encoding="utf8") as f:
                    f.write(text)

            logger.info("writing %d files to %s", len(rendered), outpath)
            for path in rendered:
                target = outpath / path
                target.parent.mkdir(parents=True, exist_ok=True)
                os.replace(tmpdir / path, target)
                written.append(target)

        return written
