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
This module contains the validator of JSON data against a schema model.
The validator follows the same schema walker queries of the XML builder,
adding the checks on the required elements and attributes and on the
undeclared properties.
"""
import logging
from collections.abc import Iterator
from typing import Any, Optional

from jsonxsd.exceptions import ValidationIssue, SchemaValidationError
from jsonxsd.models import ElementDef
from jsonxsd.translation import gettext as _
from jsonxsd.utils.mappings import lookup_key, folded_names, is_json_array, is_json_object
from jsonxsd.walker import SchemaWalker

logger = logging.getLogger('jsonxsd')


class JsonValidator:
    """
    Validates JSON data against the schema model wrapped by a walker.

    :param walker: the schema walker.
    :param attr_prefix: the prefix of the keys mapped to attributes, '@' for default.
    :param text_key: the key mapped to text content, '#text' for default.
    """
    def __init__(self, walker: SchemaWalker,
                 attr_prefix: str = '@',
                 text_key: str = '#text') -> None:
        self.walker = walker
        self.attr_prefix = attr_prefix
        self.text_key = text_key

    def iter_issues(self, obj: Any, root_element: Optional[str] = None) \
            -> Iterator[ValidationIssue]:
        """
        Yields the schema violations of a JSON value, in document order.
        A root element not declared by the schema is the only issue reported.
        """
        name, element, value = self.walker.select_root(obj, root_element)
        if element is None:
            yield ValidationIssue('$', _('Root element "{}" not found in schema.').format(name))
            return

        yield from self.iter_element_issues(element, value, f'$.{element.name}')

    def iter_element_issues(self, element: ElementDef, value: Any, path: str) \
            -> Iterator[ValidationIssue]:
        if is_json_array(value):
            if not element.is_array:
                msg = _('Element "{}" does not allow multiple occurrences (maxOccurs={}), '
                        'but an array was provided.').format(element.name, element.max_occurs)
                yield ValidationIssue(path, msg)
            else:
                for k, item in enumerate(value):
                    yield from self.iter_item_issues(element, item, f'{path}[{k}]')
        else:
            yield from self.iter_item_issues(element, value, path)

    def iter_item_issues(self, element: ElementDef, value: Any, path: str) \
            -> Iterator[ValidationIssue]:
        complex_type = self.walker.resolve_complex_type(element)
        if complex_type is None:
            if is_json_object(value) or is_json_array(value):
                msg = _('Element "{}" is a simple type but received an object.')
                yield ValidationIssue(path, msg.format(element.name))
            return
        elif value is None:
            if element.is_required:
                msg = _('Required element "{}" (minOccurs={}) is missing.')
                yield ValidationIssue(path, msg.format(element.name, element.min_occurs))
            return
        elif not is_json_object(value):
            if is_json_array(value):
                msg = _('Element "{}" expects an object (complexType) but received an array.')
            else:
                msg = _('Element "{}" expects an object (complexType) but received a scalar.')
            yield ValidationIssue(path, msg.format(element.name))
            return

        attributes = self.walker.resolve_attributes(element)
        for attribute in attributes:
            key = lookup_key(value, self.attr_prefix + attribute.name)
            if key is None or value[key] is None:
                if attribute.is_required:
                    msg = _('Required attribute "{}" is missing.').format(attribute.name)
                    yield ValidationIssue(f'{path}.{self.attr_prefix}{attribute.name}', msg)
            elif attribute.is_prohibited:
                msg = _('Attribute "{}" is prohibited.').format(attribute.name)
                yield ValidationIssue(f'{path}.{key}', msg)

        children = self.walker.resolve_children(element)
        for child in children:
            child_path = f'{path}.{child.name}'
            key = lookup_key(value, child.name)
            if key is None or value[key] is None:
                if child.is_required:
                    msg = _('Required element "{}" (minOccurs={}) is missing.')
                    yield ValidationIssue(child_path, msg.format(child.name, child.min_occurs))
            else:
                yield from self.iter_element_issues(child, value[key], child_path)

        if self.walker.has_wildcard(element):
            return

        known_names = folded_names(x.name for x in children)
        known_names.update(folded_names(self.attr_prefix + x.name for x in attributes))
        known_names.add(self.text_key.casefold())
        for key in value:
            if key.casefold() not in known_names:
                msg = _('Unknown property "{}" not declared in schema for element "{}".')
                yield ValidationIssue(f'{path}.{key}', msg.format(key, element.name))

    def validate(self, obj: Any, root_element: Optional[str] = None) -> None:
        """
        Validates a JSON value, raising an error with all the issues found.

        :raises SchemaValidationError: if the JSON value is not valid.
        """
        issues = list(self.iter_issues(obj, root_element))
        if issues:
            logger.debug("Found %d validation issues", len(issues))
            raise SchemaValidationError(issues)

    def is_valid(self, obj: Any, root_element: Optional[str] = None) -> bool:
        return next(self.iter_issues(obj, root_element), None) is None
