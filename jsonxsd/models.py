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
This module contains the classes of schema models, the flat representation
of a schema after the merge of its inclusions and imports.
"""
import dataclasses as dc
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Literal, Optional, TypeVar, Union

from jsonxsd.names import XSD_STRING

UNBOUNDED = 'unbounded'

CompositorType = Literal['sequence', 'all', 'choice']
AttributeUseType = Literal['required', 'optional', 'prohibited']
MaxOccursType = Union[int, Literal['unbounded']]


@dc.dataclass
class AttributeDef:
    """An attribute declaration."""
    name: str
    type: str = XSD_STRING
    use: AttributeUseType = 'optional'
    default: Optional[str] = None
    fixed: Optional[str] = None

    @property
    def is_required(self) -> bool:
        return self.use == 'required'

    @property
    def is_prohibited(self) -> bool:
        return self.use == 'prohibited'


@dc.dataclass
class ElementDef:
    """
    An element declaration. The element type is a reference to a named type
    (*type_name*), or an anonymous complex type declared in place
    (*inline_complex_type*), or a reference to a global element (*ref*).
    An element without any of them is a simple content leaf.
    """
    name: str
    type_name: Optional[str] = None
    inline_complex_type: Optional['ComplexTypeDef'] = None
    min_occurs: int = 1
    max_occurs: MaxOccursType = 1
    ref: Optional[str] = None
    choice_branch: bool = False

    @property
    def is_array(self) -> bool:
        return self.max_occurs == UNBOUNDED or \
            isinstance(self.max_occurs, int) and self.max_occurs > 1

    @property
    def is_required(self) -> bool:
        return self.min_occurs > 0 and not self.choice_branch

    @property
    def children(self) -> list['ElementDef']:
        """Directly declared children of an inline complex type."""
        if self.inline_complex_type is None:
            return []
        return self.inline_complex_type.elements


@dc.dataclass
class ComplexTypeDef:
    """
    A complex type definition. Elements and attributes are the ones declared
    by the type itself, inherited ones are resolved by the schema walker.
    """
    name: str
    compositor: CompositorType = 'sequence'
    elements: list[ElementDef] = dc.field(default_factory=list)
    attributes: list[AttributeDef] = dc.field(default_factory=list)
    has_text_content: bool = False
    extends: Optional[str] = None
    has_wildcard: bool = False
    mixed: bool = False


@dc.dataclass
class SimpleTypeDef:
    """A simple type definition. Only the base type is kept, facets are ignored."""
    name: str
    base: str = XSD_STRING


T = TypeVar('T')


def merge_definitions(target: MutableMapping[str, T],
                      source: Mapping[str, T],
                      prefixes: Iterable[str] = ()) -> None:
    """
    Merges a registry of definitions into another, without overwriting any
    existing key. Each definition is registered under its name and, for each
    of the provided prefixes, under the prefixed name.

    :param target: the registry to update.
    :param source: the registry with the definitions to add, processed in order.
    :param prefixes: optional prefixes for registering the definitions also \
    with prefixed names.
    """
    prefixes = tuple(prefixes)
    for name, item in source.items():
        target.setdefault(name, item)
        if ':' not in name:
            for prefix in prefixes:
                target.setdefault(f'{prefix}:{name}', item)


@dc.dataclass
class SchemaModel:
    """The resolved model of a schema, including its inclusions and imports."""
    root_element: str = ''
    elements: dict[str, ElementDef] = dc.field(default_factory=dict)
    complex_types: dict[str, ComplexTypeDef] = dc.field(default_factory=dict)
    simple_types: dict[str, SimpleTypeDef] = dc.field(default_factory=dict)
    target_namespace: Optional[str] = None

    def __repr__(self) -> str:
        return '%s(root_element=%r, elements=%d, complex_types=%d, simple_types=%d)' % (
            self.__class__.__name__, self.root_element, len(self.elements),
            len(self.complex_types), len(self.simple_types)
        )

    def is_empty(self) -> bool:
        return not self.elements and not self.complex_types and not self.simple_types

    def merge(self, other: 'SchemaModel', prefixes: Iterable[str] = ()) -> None:
        """
        Merges another model into this model. Existing definitions are never
        overwritten. Types are registered also under the provided prefixes,
        elements are always merged with unprefixed names.
        """
        prefixes = tuple(prefixes)
        merge_definitions(self.elements, other.elements)
        merge_definitions(self.complex_types, other.complex_types, prefixes)
        merge_definitions(self.simple_types, other.simple_types, prefixes)
