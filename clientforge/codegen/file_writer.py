"""File writing utilities for generated Python code.

This module provides utilities for writing and validating generated Python code
to the filesystem with proper syntax checking.
"""

import ast
import logging
import py_compile
import tempfile
from pathlib import Path

from upath import UPath

from clientforge.exceptions import OutputError

logger = logging.getLogger(__name__)

__all__ = ['PythonFileWriter']


class PythonFileWriter:
    """Writes Python AST modules to files with validation.

    Each module is unparsed and byte-compiled before anything is written, so
    a syntactically broken module never reaches the output directory.

    Several modules can be written together with ``write_sources``: each one
    is staged next to its target first and only moved into place once all of
    them were staged.

    Example:
        >>> writer = PythonFileWriter()
        >>> body = [ast.Import(names=[ast.alias(name='sys')])]
        >>> source = writer.render(body)
        >>> writer.write_source(source, UPath('output.py'))
    """

    def render(self, body: list[ast.stmt]) -> str:
        """Unparse a list of AST statements into validated source code.

        Raises:
            SyntaxError: If the generated code is not valid Python.
        """
        mod = ast.Module(body=body, type_ignores=[])
        ast.fix_missing_locations(mod)
        content = ast.unparse(mod) + '\n'
        self._validate_python_syntax(content)
        return content

    def write_source(self, content: str, path: UPath | Path | str) -> UPath:
        """Write already rendered source code to a file.

        Raises:
            OutputError: If the file cannot be written.
        """
        path = UPath(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e)

        logger.debug(f'Wrote {path}')
        return path

    def write_sources(
        self, sources: list[tuple[str, UPath | Path | str]]
    ) -> list[UPath]:
        """Write several rendered modules, all of them or none.

        Every module is first written to a hidden sibling of its target. The
        targets are only replaced once all modules were staged; a failure
        while staging removes the staged files and leaves the targets as they
        were.

        Args:
            sources: Pairs of rendered source code and target path.

        Returns:
            The target paths, in the order given.

        Raises:
            OutputError: If a module cannot be staged or moved into place.
        """
        targets = [UPath(path) for _, path in sources]
        staged: list[UPath] = []
        try:
            for (content, _), target in zip(sources, targets):
                staging = target.with_name(f'.{target.name}.tmp')
                staged.append(staging)
                self.write_source(content, staging)
        except OutputError:
            self._discard(staged)
            raise

        for staging, target in zip(staged, targets):
            try:
                staging.rename(target)
            except OSError as e:
                self._discard(staged)
                raise OutputError(str(target), cause=e)
            logger.debug(f'Moved {staging} to {target}')
        return targets

    def _discard(self, paths: list[UPath]) -> None:
        for path in paths:
            try:
                if path.exists():
                    path.unlink()
            except OSError as e:
                logger.warning(f'Could not remove staged file {path}: {e}')

    def _validate_python_syntax(self, content: str) -> None:
        with tempfile.NamedTemporaryFile(
            mode='w', suffix='.py', delete=False, encoding='utf-8'
        ) as f:
            f.write(content)
            temp_path = f.name

        try:
            py_compile.compile(temp_path, doraise=True)
        finally:
            Path(temp_path).unlink(missing_ok=True)

    def write_init_file(self, directory: UPath | Path | str) -> None:
        """Create an empty __init__.py file in the specified directory.

        Raises:
            OutputError: If the file cannot be created.
        """
        directory = UPath(directory)
        init_file = directory / '__init__.py'
        try:
            if not init_file.exists():
                directory.mkdir(parents=True, exist_ok=True)
                init_file.touch()
        except OSError as e:
            raise OutputError(str(init_file), cause=e)
