"""Errors raised while declaring or finalizing a project configuration."""


class ConfigError(Exception):
    """Base class for every configuration error."""


class DuplicateParameterError(ConfigError):
    """A project parameter was declared twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Parameter '{name}' is already declared")


class DuplicateIdError(ConfigError):
    """An id collides with another id in the same scope."""

    def __init__(self, scope: str, id: str):
        self.scope = scope
        self.id = id
        super().__init__(f"Duplicate {scope} id '{id}'")


class MalformedReferenceError(ConfigError):
    """An id or template reference is not a well-formed external id."""

    def __init__(self, reference: str, context: str):
        self.reference = reference
        self.context = context
        super().__init__(f"Malformed reference '{reference}' in {context}")


class ClosedBuilderError(ConfigError):
    """A mutating call was made after the builder was finalized."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot call {operation}() after build()")


class ValidationError(ConfigError):
    """Aggregate of every violation found by a single build()."""

    def __init__(self, errors: list[ConfigError]):
        self.errors = list(errors)
        lines = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(
            f"Project configuration has {len(self.errors)} error(s):\n{lines}"
        )


class DefinitionError(ConfigError):
    """A project definition file could not be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid project definition {path}: {reason}")
