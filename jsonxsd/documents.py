#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""API functions for converting JSON data to XML using an XSD schema."""
import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, IO, Optional, Union
from xml.etree.ElementTree import Element, indent

from elementpath.etree import etree_tostring

from jsonxsd.exceptions import JsonXsdTypeError, ValidationIssue
from jsonxsd.models import SchemaModel
from jsonxsd.parser import parse_schema
from jsonxsd.settings import ConverterSettings
from jsonxsd.translation import gettext as _
from jsonxsd.utils.logger import logged
from jsonxsd.validation import JsonValidator
from jsonxsd.builder import ElementBuilder
from jsonxsd.walker import SchemaWalker

logger = logging.getLogger('jsonxsd')

SchemaSourceType = Union[str, Path, SchemaModel]


def get_walker(schema: SchemaSourceType, settings: ConverterSettings) -> SchemaWalker:
    """Returns a walker for a schema path or for an already built schema model."""
    if isinstance(schema, SchemaModel):
        return SchemaWalker(schema)
    elif isinstance(schema, (str, Path)):
        return SchemaWalker(parse_schema(schema, settings.base_dir))

    msg = _("invalid type {!r} for argument 'schema', must be a path or a SchemaModel")
    raise JsonXsdTypeError(msg.format(type(schema)))


def get_validator(walker: SchemaWalker, settings: ConverterSettings) -> JsonValidator:
    return JsonValidator(walker, settings.attr_prefix, settings.text_key)


def render(root: Element, settings: ConverterSettings) -> str:
    """Serializes an XML tree to a string, as configured by the settings."""
    if settings.pretty_print:
        indent(root, space='  ')

    text = str(etree_tostring(root, spaces_for_tab=None))
    if settings.xml_declaration:
        return f'<?xml version="1.0" encoding="{settings.encoding}"?>\n{text}'
    return text


@logged
def iter_issues(obj: Any, schema: SchemaSourceType, **kwargs: Any) \
        -> Iterator[ValidationIssue]:
    """
    Creates an iterator for the schema violations of JSON data.

    :param obj: the JSON data, as decoded by the `json` module.
    :param schema: a path to an XSD schema or a WSDL document, or a schema model.
    :param kwargs: other conversion options, see :class:`ConverterSettings`.
    """
    settings = ConverterSettings.get_settings(**kwargs)
    walker = get_walker(schema, settings)
    return get_validator(walker, settings).iter_issues(obj, settings.root_element)


@logged
def validate(obj: Any, schema: SchemaSourceType, **kwargs: Any) -> None:
    """
    Validates JSON data against a schema.

    :param obj: the JSON data, as decoded by the `json` module.
    :param schema: a path to an XSD schema or a WSDL document, or a schema model.
    :param kwargs: other conversion options, see :class:`ConverterSettings`.
    :raises SchemaValidationError: with all the issues found, if the data is not valid.
    """
    settings = ConverterSettings.get_settings(**kwargs)
    walker = get_walker(schema, settings)
    get_validator(walker, settings).validate(obj, settings.root_element)


@logged
def is_valid(obj: Any, schema: SchemaSourceType, **kwargs: Any) -> bool:
    """Returns `True` if the JSON data is valid for the schema, `False` otherwise."""
    settings = ConverterSettings.get_settings(**kwargs)
    walker = get_walker(schema, settings)
    return get_validator(walker, settings).is_valid(obj, settings.root_element)


@logged
def to_etree(obj: Any, schema: SchemaSourceType, **kwargs: Any) -> Element:
    """
    Builds an ElementTree structure from JSON data, using a schema for mapping the
    JSON keys to XML elements and attributes.

    :param obj: the JSON data, as decoded by the `json` module.
    :param schema: a path to an XSD schema or a WSDL document, or a schema model.
    :param kwargs: other conversion options, see :class:`ConverterSettings`.
    :raises SchemaValidationError: in strict mode, if the data is not valid.
    :raises MappingError: if the JSON data cannot be mapped to the schema.
    """
    settings = ConverterSettings.get_settings(**kwargs)
    walker = get_walker(schema, settings)
    if settings.strict:
        get_validator(walker, settings).validate(obj, settings.root_element)

    builder = ElementBuilder(walker, settings.attr_prefix, settings.text_key)
    return builder.build(obj, settings.root_element)


@logged
def json2xml(obj: Any, schema: SchemaSourceType, **kwargs: Any) -> str:
    """
    Converts JSON data to an XML string, using a schema for deciding the names,
    the nesting and the attributes of the elements.

    :param obj: the JSON data, as decoded by the `json` module.
    :param schema: a path to an XSD schema or a WSDL document, or a schema model.
    :param kwargs: other conversion options, see :class:`ConverterSettings`.
    :raises SchemaParseError: if the schema cannot be loaded.
    :raises SchemaValidationError: in strict mode, if the data is not valid.
    :raises MappingError: if the JSON data cannot be mapped to the schema.
    """
    settings = ConverterSettings.get_settings(**kwargs)
    return render(to_etree(obj, schema, settings=settings), settings)


@logged
def from_json(source: Union[str, bytes, IO[str]],
              schema: SchemaSourceType,
              json_options: Optional[dict[str, Any]] = None,
              **kwargs: Any) -> str:
    """
    Converts JSON text to an XML string. Same as :meth:`json2xml`, except that
    the source is JSON text or a file-like object containing JSON text.

    :param source: a string or a bytes containing JSON text, or a file-like object.
    :param schema: a path to an XSD schema or a WSDL document, or a schema model.
    :param json_options: a dictionary with options for the JSON deserializer.
    :param kwargs: other conversion options, see :class:`ConverterSettings`.
    """
    if json_options is None:
        json_options = {}

    if isinstance(source, (str, bytes)):
        obj = json.loads(source, **json_options)
    else:
        obj = json.load(source, **json_options)
    return json2xml(obj, schema, **kwargs)
