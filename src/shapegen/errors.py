# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for the code generation engine.

Every error raised here is fatal for the artifact being generated. Generation
is deterministic, so none of them is retried: running again with the same
input reproduces the same error.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class CodegenError(Exception):
    """Base class for all unrecoverable code generation errors."""


class ConfigurationError(CodegenError):
    """Raised when the engine itself is assembled incorrectly.

    Examples are a resolver dispatch table missing a shape kind, or an
    initializer registered after the registry was frozen.
    """


class UnresolvedReferenceError(CodegenError):
    """Raised when a shape reference cannot be resolved to a shape.

    Attributes:
        shape_id: The textual id of the missing shape.
        referenced_by: The textual id of the shape holding the reference, if known.
    """

    def __init__(self, shape_id: str, referenced_by: str | None = None) -> None:
        if referenced_by is None:
            message = f"Could not find shape '{shape_id}'"
        else:
            message = f"Could not find shape '{shape_id}' targeted by '{referenced_by}'"
        super().__init__(message)
        self.shape_id = shape_id
        self.referenced_by = referenced_by


class UnmatchedAnnotationError(CodegenError):
    """Raised when an annotation initializer matched but cannot produce output.

    Attributes:
        annotation_id: The textual id of the annotation.
        shape_id: The textual id of the shape the annotation is attached to.
    """

    def __init__(self, annotation_id: str, shape_id: str, reason: str) -> None:
        super().__init__(f"Cannot initialize annotation '{annotation_id}' on '{shape_id}': {reason}")
        self.annotation_id = annotation_id
        self.shape_id = shape_id


class EmptyClosureError(CodegenError):
    """Raised when the closure transform finds no top-level shapes."""

    def __init__(self) -> None:
        super().__init__("Could not create synthetic service: no shapes found in closure")


class UnsupportedValueError(CodegenError):
    """Raised when a metadata value has no literal form in the target language.

    Attributes:
        kind: The kind of the offending value (e.g. ``"null"``).
    """

    def __init__(self, kind: str) -> None:
        super().__init__(f"Metadata values of kind '{kind}' cannot be rendered as a literal")
        self.kind = kind
