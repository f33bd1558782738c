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
This module contains namespace definitions and the XSD names used
for building schema models.
"""

###
# Namespace URIs
XSD_NAMESPACE = 'http://www.w3.org/2001/XMLSchema'
"URI of the XML Schema Definition namespace (xs|xsd)"

WSDL_NAMESPACE = 'http://schemas.xmlsoap.org/wsdl/'
"URI of the WSDL 1.1 namespace (wsdl)"

WSDL2_NAMESPACE = 'http://www.w3.org/ns/wsdl'
"URI of the WSDL 2.0 namespace"

XSD_PREFIX = 'xs'
"The canonical prefix of XSD names used in schema models (eg. 'xs:string')"


###
# XSD tags
XSD_SCHEMA = f'{{{XSD_NAMESPACE}}}schema'
XSD_INCLUDE = f'{{{XSD_NAMESPACE}}}include'
XSD_IMPORT = f'{{{XSD_NAMESPACE}}}import'
XSD_REDEFINE = f'{{{XSD_NAMESPACE}}}redefine'
XSD_ANNOTATION = f'{{{XSD_NAMESPACE}}}annotation'

XSD_ELEMENT = f'{{{XSD_NAMESPACE}}}element'
XSD_ATTRIBUTE = f'{{{XSD_NAMESPACE}}}attribute'
XSD_ANY_ATTRIBUTE = f'{{{XSD_NAMESPACE}}}anyAttribute'
XSD_COMPLEX_TYPE = f'{{{XSD_NAMESPACE}}}complexType'
XSD_SIMPLE_TYPE = f'{{{XSD_NAMESPACE}}}simpleType'
XSD_COMPLEX_CONTENT = f'{{{XSD_NAMESPACE}}}complexContent'
XSD_SIMPLE_CONTENT = f'{{{XSD_NAMESPACE}}}simpleContent'
XSD_EXTENSION = f'{{{XSD_NAMESPACE}}}extension'
XSD_RESTRICTION = f'{{{XSD_NAMESPACE}}}restriction'
XSD_LIST = f'{{{XSD_NAMESPACE}}}list'
XSD_UNION = f'{{{XSD_NAMESPACE}}}union'

XSD_SEQUENCE = f'{{{XSD_NAMESPACE}}}sequence'
XSD_CHOICE = f'{{{XSD_NAMESPACE}}}choice'
XSD_ALL = f'{{{XSD_NAMESPACE}}}all'
XSD_GROUP = f'{{{XSD_NAMESPACE}}}group'
XSD_ANY = f'{{{XSD_NAMESPACE}}}any'

XSD_COMPOSITORS = {
    XSD_SEQUENCE: 'sequence',
    XSD_ALL: 'all',
    XSD_CHOICE: 'choice',
}

# Local names of the XSD vocabulary recognized in schema sources without namespace
XSD_VOCABULARY = frozenset((
    'schema', 'include', 'import', 'redefine', 'annotation', 'documentation',
    'appinfo', 'element', 'attribute', 'attributeGroup', 'anyAttribute',
    'complexType', 'simpleType', 'complexContent', 'simpleContent', 'extension',
    'restriction', 'list', 'union', 'sequence', 'choice', 'all', 'group', 'any',
    'enumeration', 'pattern', 'length', 'minLength', 'maxLength', 'minInclusive',
    'maxInclusive', 'minExclusive', 'maxExclusive', 'totalDigits', 'fractionDigits',
    'whiteSpace', 'key', 'keyref', 'unique', 'selector', 'field', 'notation',
))


###
# WSDL tags
WSDL_DEFINITIONS = f'{{{WSDL_NAMESPACE}}}definitions'
WSDL_TYPES = f'{{{WSDL_NAMESPACE}}}types'
WSDL2_DESCRIPTION = f'{{{WSDL2_NAMESPACE}}}description'
WSDL2_TYPES = f'{{{WSDL2_NAMESPACE}}}types'


###
# Built-in XSD types, in the canonical prefixed form
XSD_STRING = 'xs:string'
XSD_ANY_TYPE = 'xs:anyType'

XSD_BUILTIN_TYPES = frozenset(f'{XSD_PREFIX}:{name}' for name in (
    # primitive types
    'string', 'boolean', 'decimal', 'float', 'double', 'duration', 'dateTime',
    'time', 'date', 'gYearMonth', 'gYear', 'gMonthDay', 'gDay', 'gMonth',
    'hexBinary', 'base64Binary', 'anyURI', 'QName', 'NOTATION',
    # derived types
    'normalizedString', 'token', 'language', 'NMTOKEN', 'NMTOKENS', 'Name',
    'NCName', 'ID', 'IDREF', 'IDREFS', 'ENTITY', 'ENTITIES', 'integer',
    'nonPositiveInteger', 'negativeInteger', 'long', 'int', 'short', 'byte',
    'nonNegativeInteger', 'unsignedLong', 'unsignedInt', 'unsignedShort',
    'unsignedByte', 'positiveInteger',
    # XSD 1.1 additions
    'dateTimeStamp', 'dayTimeDuration', 'yearMonthDuration',
    # special types
    'anyType', 'anySimpleType', 'anyAtomicType',
))
