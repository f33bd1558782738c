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
This module contains the builder that maps JSON data to an ElementTree
structure, using a schema walker for the structural decisions.
"""
import logging
from collections.abc import Mapping
from typing import Any, Optional
from xml.etree.ElementTree import Element, SubElement

from jsonxsd.exceptions import MappingError
from jsonxsd.models import ElementDef
from jsonxsd.translation import gettext as _
from jsonxsd.utils.mappings import lookup_key, folded_names, is_json_array, \
    is_json_object, text_value
from jsonxsd.walker import SchemaWalker

logger = logging.getLogger('jsonxsd')


class ElementBuilder:
    """
    Builds ElementTree elements from JSON data. Object keys that start with the
    attribute prefix are mapped to attributes, the text key is mapped to the
    element's text and the other keys are mapped to child elements. Key lookups
    are case-insensitive, emitted names always follow the schema.

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

    def __repr__(self) -> str:
        return '%s(attr_prefix=%r, text_key=%r)' % (
            self.__class__.__name__, self.attr_prefix, self.text_key
        )

    def build(self, obj: Any, root_element: Optional[str] = None) -> Element:
        """
        Builds the XML tree of a JSON value.

        :param obj: the JSON value, the root content or a single-key object \
        wrapping the root content.
        :param root_element: an optional explicit name for the root element.
        :raises MappingError: if the root element is not declared in the schema \
        or if an array is found where the schema doesn't allow multiple occurrences.
        """
        name, element, value = self.walker.select_root(obj, root_element)
        if element is None:
            msg = _('Root element "{}" not found in schema.').format(name)
            raise MappingError('$', msg)
        elif is_json_array(value):
            msg = _('Root element "{}" does not allow an array value.').format(element.name)
            raise MappingError(f'$.{element.name}', msg)

        logger.debug("Build XML tree for root element %r", element.name)
        root = Element(element.name)
        if self.walker.target_namespace:
            root.set('xmlns', self.walker.target_namespace)
        if value is not None:
            self.fill_element(root, element, value, f'$.{element.name}')
        return root

    def build_element(self, parent: Element, element: ElementDef, value: Any, path: str) -> None:
        """Appends to a parent the elements built for the value of a declared child."""
        if value is None:
            return
        elif is_json_array(value):
            if not element.is_array:
                msg = _('Element "{}" does not allow multiple occurrences (maxOccurs={}), '
                        'but an array was provided.').format(element.name, element.max_occurs)
                raise MappingError(path, msg)

            for k, item in enumerate(value):
                if is_json_array(item):
                    msg = _('Element "{}" does not allow nested arrays.').format(element.name)
                    raise MappingError(f'{path}[{k}]', msg)
                elif item is not None:
                    child = SubElement(parent, element.name)
                    self.fill_element(child, element, item, f'{path}[{k}]')
        else:
            child = SubElement(parent, element.name)
            self.fill_element(child, element, value, path)

    def fill_element(self, elem: Element, element: ElementDef, value: Any, path: str) -> None:
        """Fills an element with the attributes, the text and the children of a value."""
        complex_type = self.walker.resolve_complex_type(element)
        if complex_type is None or not is_json_object(value):
            elem.text = text_value(value)
            return

        for attribute in self.walker.resolve_attributes(element):
            key = lookup_key(value, self.attr_prefix + attribute.name)
            if key is not None and value[key] is not None:
                elem.set(attribute.name, text_value(value[key]))
            elif attribute.default is not None:
                elem.set(attribute.name, attribute.default)
            elif attribute.fixed is not None:
                elem.set(attribute.name, attribute.fixed)

        text_key = lookup_key(value, self.text_key)
        if text_key is not None and value[text_key] is not None:
            if self.walker.has_text_content(element):
                elem.text = text_value(value[text_key])
                return
            elif self.walker.is_mixed(element):
                elem.text = text_value(value[text_key])

        children = self.walker.resolve_children(element)
        for child in children:
            key = lookup_key(value, child.name)
            if key is not None:
                self.build_element(elem, child, value[key], f'{path}.{child.name}')

        if self.walker.has_wildcard(element):
            consumed = folded_names(x.name for x in children)
            for key, item in value.items():
                if key == self.text_key or key.startswith(self.attr_prefix) \
                        or key.casefold() in consumed:
                    continue
                elif is_json_array(item):
                    for sub_item in item:
                        self.build_any(elem, key, sub_item)
                else:
                    self.build_any(elem, key, item)

    def build_any(self, parent: Element, name: str, value: Any) -> None:
        """Appends to a parent an element built from wildcard content, without any check."""
        if value is None:
            return

        elem = SubElement(parent, name)
        if not isinstance(value, Mapping):
            elem.text = text_value(value)
            return

        for key, item in value.items():
            if item is None:
                continue
            elif key == self.text_key:
                elem.text = text_value(item)
            elif key.startswith(self.attr_prefix):
                elem.set(key[len(self.attr_prefix):], text_value(item))
            elif is_json_array(item):
                for sub_item in item:
                    self.build_any(elem, key, sub_item)
            else:
                self.build_any(elem, key, item)
