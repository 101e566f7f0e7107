# SPDX-PackageName: gelgen
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright Gel Data Inc. and the contributors.


from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
)

import dataclasses
import json
import logging
import os
import pathlib

from gelgen import errors
from gelgen._internal import _reflection as reflection

from ._emitter import COMMENT, SchemaEmitter

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ._module import GeneratedTree


logger = logging.getLogger(__name__)


MANIFEST_ENV = "_GEL_MANIFEST"


@dataclasses.dataclass(kw_only=True, frozen=True)
class GeneratorOptions:
    runtime_module: str = "edgedb"
    header: str = COMMENT


class AbstractCodeGenerator:
    def __init__(
        self,
        *,
        runtime_module: str | None = None,
        header: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._options = GeneratorOptions()
        self._environ = os.environ if environ is None else environ
        self._apply_env_config()
        self._apply_explicit_config(
            runtime_module=runtime_module,
            header=header,
        )

    @property
    def options(self) -> GeneratorOptions:
        return self._options

    def _apply_explicit_config(
        self,
        *,
        runtime_module: str | None,
        header: str | None,
    ) -> None:
        if runtime_module is not None:
            self._apply_env_runtime_module(runtime_module)
        if header is not None:
            self._apply_env_header(header)

    def _apply_env_config(self) -> None:
        """
        Apply environment configuration.

        _GEL_MANIFEST is a JSON string from the Gel CLI in the form:
        {
            "generate-config": {
                "runtime_module": {
                    "value": "edgedb",
                    "source": {
                        "span": [<start>, <end>],
                        "manifest": "project"
                    }
                }
            },
            "manifests": {
                "project": "path/to/gel.toml"
            }
        }
        """
        manifest_str = self._environ.get(MANIFEST_ENV)
        if not manifest_str:
            return
        try:
            manifest = json.loads(manifest_str)
        except ValueError as e:
            raise errors.ConfigError(
                f"{MANIFEST_ENV} is not valid JSON: {e}"
            ) from e
        if not isinstance(manifest, dict):
            raise errors.ConfigError(f"{MANIFEST_ENV} must be a JSON object")
        config = manifest.get("generate-config")
        if not config:
            return
        if not isinstance(config, dict):
            raise errors.ConfigError("generate-config must be a JSON object")
        for key, value in config.items():
            if not isinstance(value, dict) or "value" not in value:
                raise errors.ConfigError(
                    f"Invalid generate-config value for {key!r}: "
                    f"expected a JSON object with a \"value\" key, "
                    f"got {type(value).__name__}"
                )
            m = getattr(self, f"_apply_env_{key}", None)
            if m is None:
                logger.warning(
                    "Skipping unknown environment config: %s", key
                )
                continue
            try:
                m(value["value"])
            except errors.ConfigError as e:
                source = value.get("source")
                if isinstance(source, dict) and source.get("manifest"):
                    manifests = manifest.get("manifests") or {}
                    name = source["manifest"]
                    path = manifests.get(name, name)
                    raise errors.ConfigError(f"{path}: {e}") from e
                raise

    def _apply_env_runtime_module(self, value: Any) -> None:
        if not isinstance(value, str) or not value:
            raise errors.ConfigError(
                '"runtime_module" must be a non-empty string'
            )
        self._options = dataclasses.replace(
            self._options, runtime_module=value
        )

    def _apply_env_header(self, value: Any) -> None:
        if not isinstance(value, str):
            raise errors.ConfigError('"header" must be a string')
        self._options = dataclasses.replace(self._options, header=value)


class InterfacesGenerator(AbstractCodeGenerator):
    """Generate TypeScript declarations for an introspected schema."""

    def generate(self, types: Iterable[reflection.AnyType]) -> GeneratedTree:
        types = list(types)
        logger.info("generating declarations for %d types", len(types))
        try:
            return SchemaEmitter(
                types,
                runtime_module=self._options.runtime_module,
                preamble=self._options.header,
            ).emit()
        except errors.SchemaError as e:
            logger.error("cannot generate declarations: %s", e)
            raise

    def run(
        self,
        types: Iterable[reflection.AnyType],
        outdir: str | os.PathLike[str],
    ) -> list[pathlib.Path]:
        tree = self.generate(types)
        return tree.write(outdir)

    def run_from_executor(
        self,
        db: reflection.ReadOnlyExecutor,
        outdir: str | os.PathLike[str],
    ) -> list[pathlib.Path]:
        return self.run(reflection.fetch_types(db), outdir)
