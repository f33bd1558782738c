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
This module contains the parser that builds schema models from XSD sources
and from the schemas embedded into WSDL documents.
"""
import logging
import warnings
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional, Union
from xml.etree.ElementTree import Element

import elementpath

import jsonxsd.names as nm
from jsonxsd.exceptions import SchemaParseError, SchemaSyntaxError, \
    SchemaIncludeWarning, SchemaImportWarning
from jsonxsd.models import UNBOUNDED, AttributeDef, ElementDef, ComplexTypeDef, \
    SimpleTypeDef, SchemaModel, MaxOccursType, merge_definitions
from jsonxsd.resources import NsmapType, SchemaResource, normalize_location
from jsonxsd.translation import gettext as _
from jsonxsd.utils.logger import logged
from jsonxsd.utils.qnames import local_name, canonical_type_name, get_namespace_prefixes

logger = logging.getLogger('jsonxsd')

# Registry of the sources processed by a top-level parse: a source that is
# still being resolved is mapped to `None`.
VisitedType = dict[str, Optional[SchemaModel]]

WSDL_NAMESPACES = {
    'xs': nm.XSD_NAMESPACE,
    'wsdl': nm.WSDL_NAMESPACE,
    'wsdl2': nm.WSDL2_NAMESPACE,
}

ATTRIBUTE_USES = frozenset(('required', 'optional', 'prohibited'))


def parse_min_occurs(value: Optional[str]) -> int:
    """Parses a minOccurs value, falling back to 1 for a missing or invalid value."""
    if value is None:
        return 1
    try:
        min_occurs = int(value.strip())
    except ValueError:
        return 1
    return min_occurs if min_occurs >= 0 else 1


def parse_max_occurs(value: Optional[str]) -> MaxOccursType:
    """Parses a maxOccurs value, falling back to 1 for a missing or invalid value."""
    if value is None:
        return 1
    elif value.strip() == UNBOUNDED:
        return UNBOUNDED
    try:
        max_occurs = int(value.strip())
    except ValueError:
        return 1
    return max_occurs if max_occurs >= 0 else 1


def is_true(value: Optional[str]) -> bool:
    return value is not None and value.strip() in ('true', '1')


def get_schema_elements(resource: SchemaResource) -> list[Element]:
    """
    Returns the XSD schema elements of a source document: the root itself
    for an XSD source, the embedded schemas for a WSDL document.
    """
    root = resource.root
    namespace = resource.namespace
    if namespace == nm.XSD_NAMESPACE:
        if root.tag == nm.XSD_SCHEMA:
            return [root]
    elif namespace in (nm.WSDL_NAMESPACE, nm.WSDL2_NAMESPACE):
        if root.tag not in (nm.WSDL_DEFINITIONS, nm.WSDL2_DESCRIPTION):
            msg = _("Invalid WSDL: unexpected root element {!r} in {!r}")
            raise SchemaSyntaxError(msg.format(root.tag, resource.path))

        schemas = elementpath.select(
            root, '(wsdl:types | wsdl2:types)/xs:schema', namespaces=WSDL_NAMESPACES
        )
        if not schemas:
            msg = _("Invalid WSDL: no embedded <xs:schema> found in {!r}")
            raise SchemaSyntaxError(msg.format(resource.path))
        return [e for e in schemas if isinstance(e, Element)]
    elif not namespace and root.tag == 'schema':
        # XSD vocabulary without namespace declaration
        for elem in root.iter():
            if isinstance(elem.tag, str) and elem.tag in nm.XSD_VOCABULARY:
                elem.tag = f'{{{nm.XSD_NAMESPACE}}}{elem.tag}'
        return [root]

    msg = _("Invalid XSD: root element <xs:schema> not found in {!r}")
    raise SchemaSyntaxError(msg.format(resource.path))


class SchemaParser:
    """
    Parser of the declarations of an XSD schema element. The names of the
    type references are normalized to a canonical form, using the namespace
    map in scope of each declaration.

    :param resource: the schema source document.
    :param schema_elem: the XSD schema element, the root of the resource \
    or a schema embedded into a WSDL document.
    :param unqualified: provide `True` if the schema source uses the XSD \
    vocabulary without namespace.
    """
    def __init__(self, resource: SchemaResource,
                 schema_elem: Element,
                 unqualified: bool = False) -> None:
        self.resource = resource
        self.schema_elem = schema_elem
        self.unqualified = unqualified
        self.namespaces = self.get_namespaces(schema_elem)
        self.target_namespace = schema_elem.get('targetNamespace') or None

    def __repr__(self) -> str:
        return '%s(%r)' % (self.__class__.__name__, self.resource.path)

    def get_namespaces(self, elem: Element) -> NsmapType:
        namespaces = self.resource.get_namespaces(elem)
        if self.unqualified and '' not in namespaces:
            return {**namespaces, '': nm.XSD_NAMESPACE}
        return namespaces

    def get_type_name(self, elem: Element, attr: str) -> Optional[str]:
        value = elem.get(attr)
        if not value or not value.strip():
            return None
        return canonical_type_name(value, self.get_namespaces(elem))

    @property
    def schema_prefixes(self) -> list[str]:
        """Prefixes bound to the target namespace, excluded the XSD namespace ones."""
        return get_namespace_prefixes(self.namespaces, self.target_namespace)

    def parse_declarations(self) -> SchemaModel:
        """Builds a model with the global declarations of the schema element."""
        model = SchemaModel(target_namespace=self.target_namespace)
        logger.debug("Schema targetNamespace is %r", self.target_namespace)
        logger.debug("Schema namespaces: %r", self.namespaces)

        for child in self.schema_elem:
            name = child.get('name')
            if not name:
                continue
            elif child.tag == nm.XSD_ELEMENT:
                model.elements.setdefault(name, self.parse_element(child))
            elif child.tag == nm.XSD_COMPLEX_TYPE:
                model.complex_types.setdefault(name, self.parse_complex_type(child, name))
            elif child.tag == nm.XSD_SIMPLE_TYPE:
                model.simple_types.setdefault(name, self.parse_simple_type(child, name))

        model.root_element = next(iter(model.elements), '')
        return model

    def parse_element(self, elem: Element, choice_branch: bool = False) -> ElementDef:
        name = elem.get('name')
        ref = self.get_type_name(elem, 'ref')
        if not name:
            name = local_name(ref) if ref else ''

        ct_elem = elem.find(nm.XSD_COMPLEX_TYPE)
        return ElementDef(
            name=name,
            type_name=self.get_type_name(elem, 'type'),
            inline_complex_type=None if ct_elem is None else
            self.parse_complex_type(ct_elem, name),
            min_occurs=parse_min_occurs(elem.get('minOccurs')),
            max_occurs=parse_max_occurs(elem.get('maxOccurs')),
            ref=None if elem.get('name') else ref,
            choice_branch=choice_branch,
        )

    def parse_attribute(self, elem: Element) -> Optional[AttributeDef]:
        name = elem.get('name')
        if not name:
            ref = elem.get('ref')
            if not ref:
                return None
            name = local_name(ref.strip())

        use = (elem.get('use') or 'optional').strip()
        return AttributeDef(
            name=name,
            type=self.get_type_name(elem, 'type') or nm.XSD_STRING,
            use=use if use in ATTRIBUTE_USES else 'optional',  # type: ignore[arg-type]
            default=elem.get('default'),
            fixed=elem.get('fixed'),
        )

    def parse_attributes(self, elem: Element) -> list[AttributeDef]:
        attributes = []
        for child in elem.iterfind(nm.XSD_ATTRIBUTE):
            attribute = self.parse_attribute(child)
            if attribute is not None:
                attributes.append(attribute)
        return attributes

    def parse_complex_type(self, elem: Element, name: str) -> ComplexTypeDef:
        complex_type = ComplexTypeDef(name=name, mixed=is_true(elem.get('mixed')))
        content = elem

        for child in elem:
            if child.tag == nm.XSD_COMPLEX_CONTENT:
                if is_true(child.get('mixed')):
                    complex_type.mixed = True
                for derivation in child:
                    if derivation.tag == nm.XSD_EXTENSION:
                        complex_type.extends = self.get_type_name(derivation, 'base')
                        content = derivation
                        break
                    elif derivation.tag == nm.XSD_RESTRICTION:
                        content = derivation
                        break
                break
            elif child.tag == nm.XSD_SIMPLE_CONTENT:
                complex_type.has_text_content = True
                for derivation in child:
                    if derivation.tag in (nm.XSD_EXTENSION, nm.XSD_RESTRICTION):
                        complex_type.attributes = self.parse_attributes(derivation)
                        break
                return complex_type

        compositor = None
        for child in content:
            if child.tag in nm.XSD_COMPOSITORS:
                if compositor is None:
                    compositor = nm.XSD_COMPOSITORS[child.tag]
                    complex_type.compositor = compositor  # type: ignore[assignment]
                    self.parse_particles(child, complex_type, child.tag == nm.XSD_CHOICE)
            elif child.tag == nm.XSD_ATTRIBUTE:
                attribute = self.parse_attribute(child)
                if attribute is not None:
                    complex_type.attributes.append(attribute)
            elif child.tag == nm.XSD_GROUP:
                logger.debug("Model group reference %r of %r is skipped", child.get('ref'), name)

        return complex_type

    def parse_particles(self, group: Element,
                        complex_type: ComplexTypeDef,
                        choice_branch: bool) -> None:
        """Collects the elements of a compositor, flattening nested compositors."""
        for child in group:
            if child.tag == nm.XSD_ELEMENT:
                complex_type.elements.append(self.parse_element(child, choice_branch))
            elif child.tag == nm.XSD_ANY:
                complex_type.has_wildcard = True
            elif child.tag in nm.XSD_COMPOSITORS:
                self.parse_particles(
                    child, complex_type, choice_branch or child.tag == nm.XSD_CHOICE
                )

    def parse_simple_type(self, elem: Element, name: str) -> SimpleTypeDef:
        restriction = elem.find(nm.XSD_RESTRICTION)
        if restriction is None:
            return SimpleTypeDef(name)
        return SimpleTypeDef(name, self.get_type_name(restriction, 'base') or nm.XSD_STRING)

    def iter_references(self, *tags: str) -> Iterator[Element]:
        for child in self.schema_elem:
            if child.tag in tags:
                yield child

    def build_model(self, visited: VisitedType) -> SchemaModel:
        """
        Builds the model of the schema element, merging the models of
        included and imported schemas, in declaration order.
        """
        model = self.parse_declarations()
        base_dir = self.resource.base_dir

        logger.debug("Processes inclusions and imports of schema %r", self)
        for elem in self.iter_references(nm.XSD_INCLUDE, nm.XSD_REDEFINE):
            location = elem.get('schemaLocation')
            if not location:
                continue

            operation = local_name(elem.tag)
            logger.info("Process xs:%s schema from %s", operation, location)
            try:
                other = load_schema(location, base_dir, visited)
            except SchemaParseError as err:
                msg = _("Include schema failed: {}").format(err)
                logger.debug(msg)
                warnings.warn(msg, SchemaIncludeWarning, stacklevel=3)
            else:
                model.merge(other)

        prefixes = self.schema_prefixes
        if prefixes:
            merge_definitions(model.complex_types, dict(model.complex_types), prefixes)
            merge_definitions(model.simple_types, dict(model.simple_types), prefixes)

        for elem in self.iter_references(nm.XSD_IMPORT):
            namespace = elem.get('namespace')
            location = elem.get('schemaLocation')
            if not location:
                logger.debug("Import of namespace %r without a location is skipped", namespace)
                continue

            logger.info("Import namespace %r from %r", namespace, location)
            try:
                other = load_schema(location, base_dir, visited)
            except SchemaParseError as err:
                msg = _("Import of namespace {!r} from {!r} failed: {}")
                msg = msg.format(namespace, location, err)
                logger.debug(msg)
                warnings.warn(msg, SchemaImportWarning, stacklevel=3)
            else:
                if namespace is None:
                    namespace = other.target_namespace
                model.merge(other, get_namespace_prefixes(self.namespaces, namespace))

        logger.debug("Inclusions and imports of schema %r processed", self)
        return model


def load_schema(location: Union[str, Path],
                base_dir: Optional[str],
                visited: VisitedType) -> SchemaModel:
    """
    Loads the model of a schema source, using a registry of the sources
    processed by the current top-level parse. A source that is still being
    resolved produces an empty model, a source already resolved is reused.
    """
    path = normalize_location(location, base_dir)
    if path in visited:
        model = visited[path]
        if model is None:
            logger.debug("Schema %r is already being processed", path)
            return SchemaModel()
        logger.info("Resource %r is already loaded", path)
        return model

    visited[path] = None
    resource = SchemaResource(path)
    unqualified = resource.root.tag == 'schema'

    model = None
    for schema_elem in get_schema_elements(resource):
        parser = SchemaParser(resource, schema_elem, unqualified)
        schema_model = parser.build_model(visited)
        if model is None:
            model = schema_model
        else:
            model.merge(schema_model)
            if not model.root_element:
                model.root_element = schema_model.root_element

    assert model is not None
    visited[path] = model
    return model


@logged
def parse_schema(location: Union[str, Path],
                 base_dir: Optional[str] = None,
                 **kwargs: Any) -> SchemaModel:
    """
    Parses a schema source into a schema model, resolving inclusions and imports.
    When the schema doesn't declare any global element the first element merged
    from other sources is used as root element.

    :param location: the path or the file URL of an XSD schema or a WSDL document.
    :param base_dir: the directory used for resolving a relative location.
    :param kwargs: other options, `loglevel` sets the logging level for the call.
    :raises SchemaReadError: if a source cannot be located or decoded.
    :raises SchemaSyntaxError: if a source is not an XSD schema or a WSDL document \
    with embedded schemas.
    """
    visited: VisitedType = {}
    model = load_schema(location, base_dir, visited)

    if not model.root_element and model.elements:
        model.root_element = next(iter(model.elements))
        logger.warning(
            "Schema %r has no global elements, %r from merged schemas is used "
            "as root element", str(location), model.root_element
        )
    return model
