"""
Compiler for webflow sources to HTML

Runs the full pipeline for one source file (lexer -> parser -> emitter) and
resolves its imports, compiling each imported file recursively and
substituting the result wherever the component name is used as a tag.

Example:
    >>> source_compile('div: content:{Hello};')
    '<div>Hello</div>'
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from ..models.errors import ErrorKind
from .emitter import Emitter
from .errors import WebflowError, error_raise
from .log import LOG
from .parser import Import, Parser


class FileSystem(Protocol):
    """File access needed to resolve imports"""

    def exists(self, path: str) -> bool:
        ...

    def read_text(self, path: str) -> str:
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk"""

    def __init__(self, encoding: Optional[str] = None) -> None:
        from ..config import appsettings

        self.encoding = encoding or appsettings.encoding

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding=self.encoding)


def source_read(filesystem: FileSystem, path: str) -> str:
    """
    Read a source file through ``filesystem``

    Raises:
        WebflowError: UnreadableSource if the bytes do not decode
    """
    try:
        return filesystem.read_text(path)
    except UnicodeDecodeError as e:
        error_raise(
            ErrorKind.UNREADABLE_SOURCE,
            f"Cannot decode {path}: {e.reason} at byte {e.start}",
            path=path,
        )


class Compiler:
    """
    Compiles webflow source text to an HTML fragment

    Responsibilities:
    - Tokenize and parse the source
    - Resolve imports relative to ``base_dir``, recursively
    - Cache each component's HTML by name (write-once, shared by reference)
    - Detect import cycles
    - Render the elements with components substituted
    """

    def __init__(
        self,
        base_dir: str = ".",
        components: Optional[Dict[str, str]] = None,
        filesystem: Optional[FileSystem] = None,
        detect_cycles: Optional[bool] = None,
        resolving: Optional[List[str]] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            base_dir: Directory that relative import paths are resolved against
            components: Component cache, shared with nested compilers. A new
                        empty cache is created when omitted.
            filesystem: File access for imports (default: LocalFileSystem)
            detect_cycles: Fail fast on import cycles. Defaults to the
                           ``detect_cycles`` setting.
            resolving: Absolute paths of files currently being compiled,
                       outermost first
        """
        from ..config import appsettings

        self.base_dir = base_dir
        self.components = components if components is not None else {}
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()
        if detect_cycles is None:
            detect_cycles = appsettings.detect_cycles
        self.detect_cycles = detect_cycles
        self.resolving = resolving if resolving is not None else []

    def compile(self, source: str) -> str:
        """
        Compile source text to HTML

        Args:
            source: Raw webflow source text

        Returns:
            Compiled HTML fragment

        Raises:
            WebflowError: On any lexer, parser or import failure
        """
        try:
            result = Parser(source).parse()

            for component in result.imports:
                self.import_resolve(component)
        except WebflowError as error:
            # Innermost file wins; outer compilers leave the path alone
            if error.path is None and self.resolving:
                error.path_attach(self.resolving[-1])
            raise

        return Emitter(self.components).render(result.elements)

    def path_resolve(self, path: str) -> str:
        """Resolve an import path against base_dir to a normalized absolute path"""
        return os.path.normpath(os.path.abspath(os.path.join(self.base_dir, path)))

    def import_resolve(self, component: Import) -> None:
        """
        Compile one imported component into the cache

        Names already in the cache are not compiled again.

        Raises:
            WebflowError: ImportNotFound or CyclicImport
        """
        if component.name in self.components:
            LOG(f"Component '{component.name}' already compiled, reusing", level=3)
            return

        target = self.path_resolve(component.path)

        if self.detect_cycles and target in self.resolving:
            chain = ' -> '.join(self.resolving[self.resolving.index(target):] + [target])
            error_raise(
                ErrorKind.CYCLIC_IMPORT,
                f"Import of '{component.name}' re-enters a file being compiled: {chain}",
                path=target,
            )

        if not self.filesystem.exists(target):
            error_raise(
                ErrorKind.IMPORT_NOT_FOUND,
                f"Cannot import '{component.name}': file not found: {target}",
                path=target,
            )

        LOG(f"Resolving import '{component.name}' from {target}", level=2)
        source = source_read(self.filesystem, target)

        nested = Compiler(
            base_dir=os.path.dirname(target),
            components=self.components,
            filesystem=self.filesystem,
            detect_cycles=self.detect_cycles,
            resolving=self.resolving + [target],
        )
        self.components[component.name] = nested.compile(source)


def source_compile(
    source: str,
    base_dir: str = ".",
    components: Optional[Dict[str, str]] = None,
    filesystem: Optional[FileSystem] = None,
) -> str:
    """
    Compile webflow source text to HTML

    Args:
        source: Raw webflow source text
        base_dir: Directory that relative import paths are resolved against
        components: Component cache to populate (default: fresh empty cache)
        filesystem: File access for imports

    Returns:
        Compiled HTML fragment
    """
    compiler = Compiler(base_dir=base_dir, components=components, filesystem=filesystem)
    return compiler.compile(source)


def file_compile(
    path: str,
    components: Optional[Dict[str, str]] = None,
    filesystem: Optional[FileSystem] = None,
) -> str:
    """
    Compile a webflow source file to HTML

    Imports are resolved against the file's directory, and the file itself
    counts as being compiled for cycle detection.

    Raises:
        WebflowError: ImportNotFound if ``path`` does not exist, or any
                      compilation failure
    """
    filesystem = filesystem if filesystem is not None else LocalFileSystem()
    target = os.path.normpath(os.path.abspath(path))
    if not filesystem.exists(target):
        error_raise(ErrorKind.IMPORT_NOT_FOUND, f"Source file not found: {target}", path=target)

    compiler = Compiler(
        base_dir=os.path.dirname(target),
        components=components,
        filesystem=filesystem,
        resolving=[target],
    )
    return compiler.compile(source_read(filesystem, target))
