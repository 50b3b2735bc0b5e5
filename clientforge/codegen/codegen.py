"""Code generation module for clientforge.

This module provides the main Codegen class that orchestrates the generation
of a typed Python client from one OpenAPI document.
"""

import ast
import logging
import py_compile

from upath import UPath

from clientforge.codegen.emitter import CodeEmitter, PythonEmitter
from clientforge.codegen.file_writer import PythonFileWriter
from clientforge.codegen.generator import assemble
from clientforge.codegen.schema_loader import SchemaLoader
from clientforge.codegen.type_registry import GeneratedModule
from clientforge.config import DocumentConfig
from clientforge.exceptions import OutputError
from clientforge.openapi.v3 import OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['Codegen']


class Codegen:
    """Main code generator for creating Python clients from OpenAPI documents.

    This class orchestrates the whole run:
    - Loading and validating the OpenAPI document
    - Assembling the generated module (named types and operations)
    - Rendering it with a CodeEmitter
    - Writing the rendered modules

    Generation is all-or-nothing: the document is assembled and rendered
    completely before the first file is written, so a failing document
    leaves the output directory untouched.

    Attributes:
        config: The DocumentConfig containing source and output settings.
        openapi: The loaded OpenAPI document (populated by ``load``).

    Example:
        >>> from clientforge.config import DocumentConfig
        >>> from clientforge.codegen.codegen import Codegen
        >>>
        >>> config = DocumentConfig(source='./petstore.yaml', output='./client')
        >>> Codegen(config).generate()
        # Creates models.py and client.py in ./client/
    """

    def __init__(
        self,
        config: DocumentConfig,
        schema_loader: SchemaLoader | None = None,
        emitter: CodeEmitter | None = None,
        writer: PythonFileWriter | None = None,
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source document and output location.
            schema_loader: Optional custom schema loader.
            emitter: Optional rendering backend. Defaults to a PythonEmitter
                configured from ``config``.
            writer: Optional file writer.
        """
        self.config = config
        self.openapi: OpenAPI | None = None
        self._schema_loader = schema_loader or SchemaLoader()
        self._emitter = emitter or PythonEmitter(
            client_class=config.client_class,
            models_module=UPath(config.models_file).stem,
            models_import_path=config.models_import_path,
        )
        self._writer = writer or PythonFileWriter()

    def load(self) -> OpenAPI:
        """Load and validate the configured OpenAPI document.

        Raises:
            SchemaLoadError: If the document cannot be loaded from the source.
            SchemaValidationError: If the document is not valid OpenAPI.
        """
        self.openapi = self._schema_loader.load(self.config.source)
        return self.openapi

    def assemble(self) -> GeneratedModule:
        """Load the document if needed and assemble its generated module."""
        if self.openapi is None:
            self.load()
        module = assemble(self.openapi)
        logger.info(
            f'Assembled {len(module)} types and {len(module.operations)} '
            f'operations from {self.config.source}'
        )
        return module

    def _render(self, body: list[ast.stmt], path: UPath) -> str:
        try:
            return self._writer.render(body)
        except (SyntaxError, py_compile.PyCompileError) as e:
            raise OutputError(str(path), cause=e)

    def generate(self) -> list[UPath]:
        """Generate the client modules into the configured output directory.

        Returns:
            The paths of the written modules.

        Raises:
            ClientForgeError: Any loading, mapping, naming or output error.
                Nothing is written unless assembly, rendering and staging
                of both modules succeed.
        """
        module = self.assemble()
        emitted = self._emitter.emit(module)

        output = UPath(self.config.output)
        models_path = output / self.config.models_file
        client_path = output / self.config.client_file
        sources = [
            (self._render(emitted.models, models_path), models_path),
            (self._render(emitted.client, client_path), client_path),
        ]

        written = self._writer.write_sources(sources)
        self._writer.write_init_file(output)
        logger.info(f'Generated {len(written)} modules in {output}')
        return written
