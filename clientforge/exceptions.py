"""Custom exceptions for clientforge.

This module defines a hierarchy of exceptions used throughout the clientforge
library. Generation is fail-fast: every exception raised here aborts the run
and no partial module is produced. Errors raised while mapping the document
carry the JSON-pointer location of the offending node so the problem can be
fixed at the source.
"""


class ClientForgeError(Exception):
    """Base exception for all clientforge errors.

    All exceptions raised by clientforge inherit from this class, making it
    easy to catch all clientforge-related errors with a single except clause.

    Example:
        try:
            codegen.generate()
        except ClientForgeError as e:
            print(f"clientforge error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(ClientForgeError):
    """Base exception for schema-related errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load an OpenAPI document from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """Document failed OpenAPI validation.

    Attributes:
        source: The source path or URL of the invalid document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class SchemaResolutionError(SchemaError):
    """A schema node cannot be mapped to a type.

    Raised for undefined references and for shapes the mapper refuses to
    approximate: inline object schemas, composition keywords and
    additional-properties maps.

    Attributes:
        location: JSON pointer of the offending node.
        construct: The construct that triggered the failure.
    """

    def __init__(self, location: str, construct: str):
        self.location = location
        self.construct = construct
        super().__init__(f"Cannot resolve schema at '{location}': {construct}")


class SchemaReferenceError(SchemaResolutionError):
    """Failed to resolve a $ref reference in the document.

    Attributes:
        reference: The $ref string that could not be resolved.
        reason: Explanation of why the reference couldn't be resolved.
    """

    def __init__(
        self, reference: str, reason: str | None = None, location: str | None = None
    ):
        self.reference = reference
        self.reason = reason
        construct = f"reference '{reference}'"
        if reason:
            construct += f' ({reason})'
        super().__init__(location or reference, construct)


class CodeGenerationError(ClientForgeError):
    """Error during code generation.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class NamingCollisionError(CodeGenerationError):
    """Two distinct entities derived the same identifier.

    There is no disambiguation policy for generated type names or operation
    identifiers, so a collision aborts generation.

    Attributes:
        identifier: The identifier both entities derived.
        first: Location of the entity that registered the identifier first.
        second: Location of the entity that collided with it.
    """

    def __init__(self, identifier: str, first: str, second: str):
        self.identifier = identifier
        self.first = first
        self.second = second
        super().__init__(
            f"Identifier '{identifier}' derived from '{second}' "
            f"is already taken by '{first}'"
        )


class UnsupportedConstructError(CodeGenerationError):
    """The document uses a recognised construct that is not implemented.

    Attributes:
        construct: Description of the unsupported construct.
        location: JSON pointer of the node using it.
        suggestion: Optional suggestion for a workaround.
    """

    def __init__(
        self,
        construct: str,
        location: str | None = None,
        suggestion: str | None = None,
    ):
        self.construct = construct
        self.location = location
        self.suggestion = suggestion
        message = f'Unsupported construct: {construct}'
        if location:
            message += f" at '{location}'"
        if suggestion:
            message += f'. {suggestion}'
        super().__init__(message)


class ConfigurationError(ClientForgeError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(ClientForgeError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
