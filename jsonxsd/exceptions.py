#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""
This module contains the exception and warning classes of the package.
"""
from collections.abc import Iterable
from typing import NamedTuple

from jsonxsd.translation import gettext as _


class JsonXsdException(Exception):
    """Package's base exception class."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class JsonXsdTypeError(JsonXsdException, TypeError):
    pass


class JsonXsdValueError(JsonXsdException, ValueError):
    pass


class JsonXsdAttributeError(JsonXsdException, AttributeError):
    pass


class SchemaParseError(JsonXsdException):
    """Raised when a schema source cannot be loaded into a schema model."""


class SchemaReadError(SchemaParseError, OSError):
    """Raised when a schema source cannot be located or decoded."""


class SchemaSyntaxError(SchemaParseError, SyntaxError):
    """
    Raised when a schema source is not well-formed XML or when it doesn't
    contain an XSD schema element (directly or embedded into a WSDL document).
    """


class ValidationIssue(NamedTuple):
    """A single schema violation found in a JSON value."""
    path: str
    message: str

    def __str__(self) -> str:
        return f'[{self.path}] {self.message}'


class SchemaValidationError(JsonXsdException, ValueError):
    """
    Raised by strict conversions and by validation calls, collecting all the
    schema violations found in a JSON value.

    :param issues: the list of :class:`ValidationIssue` found.
    """
    def __init__(self, issues: Iterable[ValidationIssue]) -> None:
        self.issues = list(issues)
        message = '\n  '.join(
            [_("JSON validation against XSD schema failed:")] +
            [str(issue) for issue in self.issues]
        )
        super().__init__(message)


class MappingError(JsonXsdException, ValueError):
    """
    Raised when the shape of a JSON value cannot be mapped to the schema,
    regardless of the strict mode.

    :param path: the JSON path of the value that cannot be mapped.
    :param reason: the description of the mapping failure.
    """
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(_("mapping error at [{}]: {}").format(path, reason))


class JsonXsdWarning(UserWarning):
    """Base warning class of the package."""


class SchemaIncludeWarning(JsonXsdWarning):
    """A schema include fails."""


class SchemaImportWarning(JsonXsdWarning):
    """A schema namespace import fails."""
