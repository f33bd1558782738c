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
This module contains the schema walker, the read-only query layer shared
by the XML builder and by the JSON validator.
"""
from collections.abc import Mapping
from typing import Any, NamedTuple, Optional

from jsonxsd.names import XSD_BUILTIN_TYPES
from jsonxsd.models import AttributeDef, ElementDef, ComplexTypeDef, SchemaModel
from jsonxsd.utils.mappings import lookup_key
from jsonxsd.utils.qnames import local_name


class RootSelection(NamedTuple):
    """The root element chosen for a JSON value, and the value of its content."""
    name: str
    element: Optional[ElementDef]
    value: Any


class SchemaWalker:
    """
    Queries a schema model about the content of its elements. Inherited
    attributes and children are resolved following the chain of base types,
    always listing the base type's declarations before the derived ones.

    :param model: the schema model, that is referenced and never changed.
    """
    def __init__(self, model: SchemaModel) -> None:
        self.model = model

    def __repr__(self) -> str:
        return '%s(%r)' % (self.__class__.__name__, self.model)

    @property
    def root_element(self) -> str:
        return self.model.root_element

    @property
    def target_namespace(self) -> Optional[str]:
        return self.model.target_namespace

    def lookup_element(self, name: str) -> Optional[ElementDef]:
        """Returns a global element by name, or by the local part of a prefixed name."""
        try:
            return self.model.elements[name]
        except KeyError:
            return self.model.elements.get(local_name(name))

    def resolve_complex_type(self, element: ElementDef) -> Optional[ComplexTypeDef]:
        """
        Returns the complex type of an element: its inline type or the named
        type it refers to. Returns `None` for simple content elements.
        """
        if element.inline_complex_type is not None:
            return element.inline_complex_type
        elif element.type_name:
            return self.model.complex_types.get(element.type_name)
        elif element.ref:
            target = self.lookup_element(element.ref)
            if target is not None and target is not element and not target.ref:
                return self.resolve_complex_type(target)
        return None

    def is_simple_type(self, type_name: Optional[str]) -> bool:
        """
        Returns `True` if a type name doesn't refer to a complex type: missing
        and unknown names, XSD builtins and named simple types.
        """
        if not type_name or type_name in XSD_BUILTIN_TYPES:
            return True
        elif type_name in self.model.simple_types:
            return True
        return type_name not in self.model.complex_types

    def iter_type_chain(self, complex_type: ComplexTypeDef) -> list[ComplexTypeDef]:
        """
        Returns the inheritance chain of a complex type, base types first.
        The walk stops at a type without base or at an already visited type.
        """
        chain: list[ComplexTypeDef] = []
        visited: set[int] = set()
        current: Optional[ComplexTypeDef] = complex_type
        while current is not None and id(current) not in visited:
            visited.add(id(current))
            chain.append(current)
            if not current.extends:
                break
            current = self.model.complex_types.get(current.extends)

        chain.reverse()
        return chain

    def resolve_attributes(self, element: ElementDef) -> list[AttributeDef]:
        complex_type = self.resolve_complex_type(element)
        if complex_type is None:
            return []
        return [a for ct in self.iter_type_chain(complex_type) for a in ct.attributes]

    def resolve_children(self, element: ElementDef) -> list[ElementDef]:
        complex_type = self.resolve_complex_type(element)
        if complex_type is None:
            return []
        return [e for ct in self.iter_type_chain(complex_type) for e in ct.elements]

    def has_wildcard(self, element: ElementDef) -> bool:
        complex_type = self.resolve_complex_type(element)
        if complex_type is None:
            return False
        elif complex_type.has_wildcard:
            return True
        return any(ct.has_wildcard for ct in self.iter_type_chain(complex_type))

    def has_text_content(self, element: ElementDef) -> bool:
        """Returns `True` if the element's type, or a base type, has simple content."""
        complex_type = self.resolve_complex_type(element)
        if complex_type is None:
            return False
        return any(ct.has_text_content for ct in self.iter_type_chain(complex_type))

    def is_mixed(self, element: ElementDef) -> bool:
        """Returns `True` if the element's type, or a base type, has mixed content."""
        complex_type = self.resolve_complex_type(element)
        if complex_type is None:
            return False
        return any(ct.mixed for ct in self.iter_type_chain(complex_type))

    def select_root(self, obj: Any, root_element: Optional[str] = None) -> RootSelection:
        """
        Selects the root element for a JSON value. A single-key object whose
        key names a global element (the explicit root element, if provided)
        is a wrapper, and its value is the root content. Otherwise the JSON
        value is the root content of the explicit root element or of the
        schema's root element.

        :param obj: the JSON value.
        :param root_element: an optional name of the root element to use.
        """
        if isinstance(obj, Mapping) and len(obj) == 1:
            key = next(iter(obj))
            if isinstance(key, str):
                if root_element is None:
                    element = self.lookup_element(key)
                    if element is not None:
                        return RootSelection(element.name, element, obj[key])
                elif lookup_key(obj, root_element) is not None:
                    return RootSelection(
                        root_element, self.lookup_element(root_element), obj[key]
                    )

        name = self.model.root_element if root_element is None else root_element
        return RootSelection(name, self.lookup_element(name) if name else None, obj)
