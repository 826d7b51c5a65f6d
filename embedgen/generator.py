"""Pipeline turning input files into the generated C++ documents."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_BASE_NAME, EmbedGenConfig
from .discovery import discover_inputs
from .errors import OutputWriteError
from .logging import get_logger
from .models import EncodingOptions, FileRecord, InputFile
from .registry import ON_DUPLICATE_OVERWRITE, Registry, assemble
from .render import DocumentRenderer, validate_namespace
from .render.constants import HEADER_SUFFIX, SOURCE_SUFFIX


@dataclass
class GenerationSettings:
    """Effective settings for one generation run."""

    output_dir: Path
    base_name: str = DEFAULT_BASE_NAME
    namespace: Optional[str] = None
    encoding: EncodingOptions = field(default_factory=EncodingOptions)
    on_duplicate: str = ON_DUPLICATE_OVERWRITE
    exclude_paths: List[str] = field(default_factory=list)

    @classmethod
    def from_config(
        cls,
        config: EmbedGenConfig,
        *,
        output_dir: Path | None = None,
        base_name: str | None = None,
        namespace: str | None = None,
        style: str | None = None,
        wrap_width: int | None = None,
        row_size: int | None = None,
        on_duplicate: str | None = None,
    ) -> "GenerationSettings":
        """Merge explicit overrides on top of file configuration."""
        encoding = EncodingOptions(
            style=style or config.encoding.style,
            wrap_width=wrap_width or config.encoding.wrap_width,
            row_size=row_size or config.encoding.row_size,
        )
        return cls(
            output_dir=output_dir or config.output.directory or Path.cwd(),
            base_name=base_name or config.output.base_name,
            namespace=namespace if namespace is not None else config.namespace,
            encoding=encoding,
            on_duplicate=on_duplicate or config.registry.on_duplicate,
            exclude_paths=list(config.exclude_paths),
        )

    @property
    def header_path(self) -> Path:
        return self.output_dir / f"{self.base_name}{HEADER_SUFFIX}"

    @property
    def source_path(self) -> Path:
        return self.output_dir / f"{self.base_name}{SOURCE_SUFFIX}"


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    header_path: Path
    source_path: Path
    file_count: int
    dry_run: bool = False
    header_text: Optional[str] = None
    source_text: Optional[str] = None


class Generator:
    """Coordinates discovery, encoding, assembly and output."""

    def __init__(self, renderer: DocumentRenderer | None = None) -> None:
        self.renderer = renderer or DocumentRenderer()
        self.logger = get_logger("generator")

    def run(
        self,
        inputs: Iterable[str | Path],
        settings: GenerationSettings,
        *,
        dry_run: bool = False,
    ) -> GenerationResult:
        """Generate both documents for the files named by ``inputs``."""
        validate_namespace(settings.namespace)
        files = discover_inputs(inputs, exclude_paths=settings.exclude_paths)
        if files:
            self.logger.info("Ready to process %d file(s).", len(files))
        else:
            self.logger.warning("No input file to process, will generate empty C++ output!")

        registry = self.build_registry(files, settings)

        header_path = settings.header_path
        source_path = settings.source_path
        if dry_run:
            return GenerationResult(
                header_path=header_path,
                source_path=source_path,
                file_count=registry.count,
                dry_run=True,
                header_text="".join(self.renderer.render_header(registry, settings.base_name)),
                source_text="".join(self.renderer.render_source(registry, header_path.name)),
            )

        _ensure_directory(settings.output_dir)
        self.logger.info("Generating %s...", header_path.as_posix())
        _write_document(header_path, self.renderer.render_header(registry, settings.base_name))
        self.logger.info("Generating %s...", source_path.as_posix())
        try:
            _write_document(source_path, self.renderer.render_source(registry, header_path.name))
        except BaseException:
            # The header alone would declare symbols nobody defines.
            _remove_quietly(header_path)
            raise

        return GenerationResult(
            header_path=header_path,
            source_path=source_path,
            file_count=registry.count,
        )

    def build_registry(
        self, files: Sequence[InputFile], settings: GenerationSettings
    ) -> Registry:
        """Read, encode and assemble ``files`` into a registry."""
        records: List[FileRecord] = []
        for input_file in files:
            self.logger.info("  %s", input_file.path.as_posix())
            records.append(FileRecord(source=input_file, options=settings.encoding))
        return assemble(
            records,
            namespace=settings.namespace,
            on_duplicate=settings.on_duplicate,
        )


def _ensure_directory(directory: Path) -> None:
    if directory.is_dir():
        return
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(directory.as_posix(), exc.strerror or str(exc)) from exc


def _write_document(path: Path, chunks: Iterable[str]) -> None:
    """Write ``chunks`` to a temporary sibling file, then move it into place."""
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
    except OSError as exc:
        raise OutputWriteError(path.as_posix(), exc.strerror or str(exc)) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            for chunk in chunks:
                handle.write(chunk)
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as exc:
        _remove_quietly(tmp_path)
        raise OutputWriteError(path.as_posix(), exc.strerror or str(exc)) from exc
    except BaseException:
        _remove_quietly(tmp_path)
        raise


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


__all__ = ["GenerationResult", "GenerationSettings", "Generator"]
