#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from elementpath.etree import etree_tostring

from . import translation
from .exceptions import JsonXsdException, JsonXsdTypeError, JsonXsdValueError, \
    JsonXsdAttributeError, SchemaParseError, SchemaReadError, SchemaSyntaxError, \
    SchemaValidationError, ValidationIssue, MappingError, JsonXsdWarning, \
    SchemaIncludeWarning, SchemaImportWarning
from .models import AttributeDef, ElementDef, ComplexTypeDef, SimpleTypeDef, \
    SchemaModel, merge_definitions
from .resources import SchemaResource
from .parser import SchemaParser, parse_schema
from .walker import SchemaWalker
from .builder import ElementBuilder
from .validation import JsonValidator
from .settings import ConverterSettings
from .utils.logger import set_logging_level
from .documents import json2xml, from_json, to_etree, validate, is_valid, iter_issues

__version__ = '1.0.0'
__author__ = "Davide Brunato"
__contact__ = "brunato@sissa.it"
__copyright__ = "Copyright 2016-2025, SISSA"
__license__ = "MIT"
__status__ = "Production/Stable"

__all__ = [
    'translation', 'etree_tostring', 'JsonXsdException', 'JsonXsdTypeError',
    'JsonXsdValueError', 'JsonXsdAttributeError', 'SchemaParseError', 'SchemaReadError',
    'SchemaSyntaxError', 'SchemaValidationError', 'ValidationIssue', 'MappingError',
    'JsonXsdWarning', 'SchemaIncludeWarning', 'SchemaImportWarning',
    'AttributeDef', 'ElementDef', 'ComplexTypeDef', 'SimpleTypeDef', 'SchemaModel',
    'merge_definitions', 'SchemaResource', 'SchemaParser', 'parse_schema',
    'SchemaWalker', 'ElementBuilder', 'JsonValidator', 'ConverterSettings',
    'set_logging_level', 'json2xml', 'from_json', 'to_etree', 'validate', 'is_valid',
    'iter_issues',
]
