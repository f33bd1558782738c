#!/usr/bin/env python
#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Tests of the XML builder."""
import unittest
import pathlib
import warnings
from xml.etree.ElementTree import Element

from jsonxsd import ElementBuilder, MappingError, SchemaModel, SchemaWalker, \
    etree_tostring, parse_schema

TEST_CASES_DIR = str(pathlib.Path(__file__).absolute().parent.joinpath('test_cases'))


def casepath(relative_path):
    return str(pathlib.Path(TEST_CASES_DIR).joinpath(relative_path))


def get_builder(filename, **kwargs):
    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        return ElementBuilder(SchemaWalker(parse_schema(casepath(filename))), **kwargs)


class TestElementBuilder(unittest.TestCase):

    def check_build(self, builder, obj, expected, root_element=None):
        root = builder.build(obj, root_element)
        self.assertIsInstance(root, Element)
        self.assertEqual(etree_tostring(root), expected)

    def test_simple_schema(self):
        builder = get_builder('simple.xsd')
        self.assertEqual(repr(builder), "ElementBuilder(attr_prefix='@', text_key='#text')")

        self.check_build(
            builder, {'name': 'Ann', 'age': 30, '@id': '7'},
            '<person id="7" active="true"><name>Ann</name><age>30</age></person>'
        )
        self.check_build(
            builder, {'person': {'name': 'Ann', 'age': 30, '@id': '7', 'email': 'a@b.c'}},
            '<person id="7" active="true"><name>Ann</name><age>30</age>'
            '<email>a@b.c</email></person>'
        )

    def test_schema_order(self):
        builder = get_builder('simple.xsd')
        self.check_build(
            builder, {'email': 'a@b.c', 'age': 30, '@active': False, 'name': 'Ann', '@id': 1},
            '<person id="1" active="false"><name>Ann</name><age>30</age>'
            '<email>a@b.c</email></person>'
        )

    def test_case_insensitive_keys(self):
        builder = get_builder('simple.xsd')
        self.check_build(
            builder, {'NAME': 'Ann', 'Age': 3, '@ID': 'x'},
            '<person id="x" active="true"><name>Ann</name><age>3</age></person>'
        )
        self.check_build(
            builder, {'name': 'Ann', 'Name': 'Bob'},
            '<person active="true"><name>Ann</name></person>'
        )

    def test_null_values(self):
        builder = get_builder('simple.xsd')
        self.check_build(
            builder, {'name': None, 'age': 1, '@id': None, '@active': None},
            '<person active="true"><age>1</age></person>'
        )

    def test_value_rendering(self):
        builder = get_builder('simple.xsd')
        self.check_build(
            builder, {'name': True, 'age': 1.5, 'email': {'home': 'a@b.c', 'tags': [1, 2]}},
            '<person active="true"><name>true</name><age>1.5</age>'
            '<email>{"home":"a@b.c","tags":[1,2]}</email></person>'
        )
        self.check_build(
            builder, {'name': 'Zoë & <Ann>', 'age': 0},
            '<person active="true"><name>Zoë &amp; &lt;Ann&gt;</name><age>0</age></person>'
        )

    def test_nested_types_and_arrays(self):
        builder = get_builder('nested.xsd')
        obj = {
            '@orderId': 'A1',
            'customer': {'firstName': 'Jo', 'lastName': 'Doe'},
            'item': [
                {'@sku': 'S1', 'description': 'Pen', 'quantity': 2, 'price': 1.5},
                None,
                {'@sku': 'S2', 'description': 'Ink', 'quantity': 1, 'price': 10},
            ]
        }
        self.check_build(
            builder, obj,
            '<order orderId="A1"><customer><firstName>Jo</firstName><lastName>Doe</lastName>'
            '</customer><item sku="S1"><description>Pen</description><quantity>2</quantity>'
            '<price>1.5</price></item><item sku="S2"><description>Ink</description>'
            '<quantity>1</quantity><price>10</price></item></order>'
        )

        self.check_build(
            builder, {'@orderId': 'A2', 'customer': 'Jo', 'item': {'@sku': 'S3'}},
            '<order orderId="A2"><customer>Jo</customer><item sku="S3" /></order>'
        )

    def test_inline_complex_types(self):
        builder = get_builder('inline.xsd')
        obj = {'catalog': {'product': [
            {'@id': 'p1', 'title': 'Book', 'price': 9.9, 'inStock': True},
            {'@id': 'p2', 'title': 'Pen', 'price': 1},
        ]}}
        self.check_build(
            builder, obj,
            '<catalog><product id="p1"><title>Book</title><price>9.9</price>'
            '<inStock>true</inStock></product><product id="p2"><title>Pen</title>'
            '<price>1</price></product></catalog>'
        )

    def test_array_errors(self):
        builder = get_builder('simple.xsd')
        with self.assertRaises(MappingError) as ctx:
            builder.build({'name': ['Ann', 'Bob'], 'age': 30})

        self.assertEqual(ctx.exception.path, '$.person.name')
        self.assertEqual(
            ctx.exception.reason,
            'Element "name" does not allow multiple occurrences (maxOccurs=1), '
            'but an array was provided.'
        )
        self.assertEqual(
            str(ctx.exception),
            'mapping error at [$.person.name]: Element "name" does not allow '
            'multiple occurrences (maxOccurs=1), but an array was provided.'
        )

        builder = get_builder('nested.xsd')
        with self.assertRaises(MappingError) as ctx:
            builder.build({'item': [{'@sku': 'S1', 'description': ['a', 'b']}]})
        self.assertEqual(ctx.exception.path, '$.order.item[0].description')

        with self.assertRaises(MappingError) as ctx:
            builder.build([{'@orderId': 'A1'}])
        self.assertEqual(ctx.exception.path, '$.order')
        self.assertIn('"order" does not allow an array value', str(ctx.exception))

        with self.assertRaises(MappingError) as ctx:
            builder.build({'@orderId': 'A1', 'item': [[{'@sku': 'S1'}, {'@sku': 'S2'}]]})
        self.assertEqual(ctx.exception.path, '$.order.item[0]')
        self.assertEqual(ctx.exception.reason, 'Element "item" does not allow nested arrays.')

        with self.assertRaises(MappingError) as ctx:
            builder.build({'item': [{'@sku': 'S1'}, None, []]})
        self.assertEqual(ctx.exception.path, '$.order.item[2]')

    def test_null_root_value(self):
        builder = get_builder('simple.xsd')
        self.check_build(builder, {'person': None}, '<person />')
        self.check_build(builder, None, '<person />')
        self.check_build(builder, None, '<person />', root_element='person')

        builder = get_builder('person-with-import.xsd')
        self.check_build(builder, {'pessoa': None}, '<pessoa />')

    def test_root_element_errors(self):
        builder = get_builder('simple.xsd')
        with self.assertRaises(MappingError) as ctx:
            builder.build({'name': 'Ann'}, 'missing')
        self.assertEqual(ctx.exception.path, '$')
        self.assertEqual(str(ctx.exception),
                         'mapping error at [$]: Root element "missing" not found in schema.')

        builder = ElementBuilder(SchemaWalker(SchemaModel()))
        with self.assertRaises(MappingError) as ctx:
            builder.build({'name': 'Ann'})
        self.assertEqual(ctx.exception.reason, 'Root element "" not found in schema.')

    def test_explicit_root_element(self):
        builder = get_builder('tiss-mensagem.xsd')
        obj = {
            '@ativo': True,
            'identificacaoPrestador': {'CNPJ': '123'},
            'nomeFantasia': 'Clinica',
            'especialidade': ['cardiologia', 'pediatria'],
        }
        expected = (
            '<prestadorEstendido ativo="true"><identificacaoPrestador><CNPJ>123</CNPJ>'
            '</identificacaoPrestador><nomeFantasia>Clinica</nomeFantasia>'
            '<especialidade>cardiologia</especialidade><especialidade>pediatria'
            '</especialidade></prestadorEstendido>'
        )
        self.check_build(builder, obj, expected, root_element='prestadorEstendido')
        self.check_build(builder, {'prestadorEstendido': obj}, expected)

    def test_choice_content(self):
        builder = get_builder('tiss-mensagem.xsd')
        obj = {
            'cabecalho': {
                'identificacaoTransacao': {
                    'tipoTransacao': 'SOLICITACAO_PROCEDIMENTOS',
                    'sequencialTransacao': '1',
                    'dataRegistroTransacao': '2024-01-01',
                    'horaRegistroTransacao': '10:00:00',
                },
                'origem': {'identificacaoPrestador': {'codigoPrestadorNaOperadora': '99'}},
                'destino': {'registroANS': '123456'},
                'Padrao': '4.01.00',
            },
            'situacaoAutorizacao': {
                'mensagemErro': {'codigoGlosa': '1001', 'descricaoGlosa': 'Erro'},
            },
            'hash': 'abc',
        }
        self.check_build(
            builder, obj,
            '<mensagemTISS><cabecalho><identificacaoTransacao>'
            '<tipoTransacao>SOLICITACAO_PROCEDIMENTOS</tipoTransacao>'
            '<sequencialTransacao>1</sequencialTransacao>'
            '<dataRegistroTransacao>2024-01-01</dataRegistroTransacao>'
            '<horaRegistroTransacao>10:00:00</horaRegistroTransacao>'
            '</identificacaoTransacao><origem><identificacaoPrestador>'
            '<codigoPrestadorNaOperadora>99</codigoPrestadorNaOperadora>'
            '</identificacaoPrestador></origem><destino><registroANS>123456</registroANS>'
            '</destino><Padrao>4.01.00</Padrao></cabecalho><situacaoAutorizacao>'
            '<mensagemErro><codigoGlosa>1001</codigoGlosa><descricaoGlosa>Erro'
            '</descricaoGlosa></mensagemErro></situacaoAutorizacao><hash>abc</hash>'
            '</mensagemTISS>'
        )

    def test_schema_features(self):
        builder = get_builder('features.xsd')
        obj = {
            'note': 'n',
            'price': [{'@currency': 'EUR', '#text': 9.5}],
            'paragraph': {'#text': 'Hello', 'bold': 'b'},
            'shelf': 'S1',
            'open': True,
            'code': 'C1',
            'summary': {'#text': 'ignored', 'title': 'T'},
        }
        self.check_build(
            builder, obj,
            '<library xmlns="http://example.com/features" version="2.0"><note>n</note>'
            '<price currency="EUR">9.5</price><paragraph>Hello<bold>b</bold></paragraph>'
            '<shelf>S1</shelf><open>true</open><code>C1</code>'
            '<summary><title>T</title></summary></library>'
        )

    def test_explicit_fixed_attribute(self):
        builder = get_builder('features.xsd')
        self.check_build(
            builder, {'@version': '3.0', '@legacy': 'yes', 'shelf': 'S1'},
            '<library xmlns="http://example.com/features" version="3.0" legacy="yes">'
            '<shelf>S1</shelf></library>'
        )

    def test_imported_types(self):
        builder = get_builder('person-with-import.xsd')
        obj = {
            'nome': 'Ana',
            'contato': {
                'email': 'ana@example.com',
                'telefone': [{'@tipo': 'cel', 'ddd': '11', 'numero': '99999-0000'}],
            },
        }
        self.check_build(
            builder, obj,
            '<pessoa><nome>Ana</nome><contato><email>ana@example.com</email>'
            '<telefone tipo="cel"><ddd>11</ddd><numero>99999-0000</numero></telefone>'
            '</contato></pessoa>'
        )

    def test_included_types(self):
        builder = get_builder('tiss-with-include.xsd')
        obj = {
            'nome': 'Clinica',
            'endereco': {'logradouro': 'Rua A', 'numero': '10',
                         'cidade': 'Recife', 'UF': 'PE'},
        }
        self.check_build(
            builder, obj,
            '<prestadorCompleto><nome>Clinica</nome><endereco><logradouro>Rua A'
            '</logradouro><numero>10</numero><cidade>Recife</cidade><UF>PE</UF>'
            '</endereco></prestadorCompleto>'
        )

    def test_wildcard_content(self):
        builder = get_builder('any-envelope.xsd')
        obj = {
            '@versao': '1',
            'cabecalho': 'c',
            'extra': {'@id': 'x', 'sub': [1, 2], '#text': 't', 'none': None},
            'tags': ['a', None, 'b'],
            'matrix': [[1, 2]],
            'skip': None,
        }
        self.check_build(
            builder, obj,
            '<envelope versao="1"><cabecalho>c</cabecalho><extra id="x">t<sub>1</sub>'
            '<sub>2</sub></extra><tags>a</tags><tags>b</tags><matrix>[1,2]</matrix>'
            '</envelope>'
        )

        self.check_build(
            builder, {'CABECALHO': 'c', '@other': 'ignored'},
            '<envelope><cabecalho>c</cabecalho></envelope>'
        )

    def test_wildcard_with_imported_types(self):
        builder = get_builder('mutual-a.xsd')
        obj = {
            'dados': {'valor': 'v'},
            'Signature': {
                'SignedInfo': {
                    'CanonicalizationMethod': 'c14n',
                    'Reference': {'@URI': '#doc'},
                },
                'SignatureValue': 'abc',
                'KeyInfo': {'X509Data': 'cert'},
            }
        }
        self.check_build(
            builder, obj,
            '<documento><dados><valor>v</valor></dados><Signature><SignedInfo>'
            '<CanonicalizationMethod>c14n</CanonicalizationMethod><Reference URI="#doc" />'
            '</SignedInfo><SignatureValue>abc</SignatureValue><KeyInfo><X509Data>cert'
            '</X509Data></KeyInfo></Signature></documento>'
        )

    def test_custom_keys(self):
        builder = get_builder('features.xsd', attr_prefix='_', text_key='$')
        self.check_build(
            builder, {'_version': '1', 'price': {'_currency': 'BRL', '$': 3}, 'shelf': 'S1'},
            '<library xmlns="http://example.com/features" version="1">'
            '<price currency="BRL">3</price><shelf>S1</shelf></library>'
        )

    def test_wrapper_key_case(self):
        builder = get_builder('simple.xsd')
        self.check_build(
            builder, {'PERSON': {'name': 'Ann'}},
            '<person active="true"><name>Ann</name></person>',
            root_element='person'
        )


if __name__ == '__main__':
    import platform
    header_template = "Test jsonxsd XML builder with Python {} on {}"
    header = header_template.format(platform.python_version(), platform.platform())
    print('{0}\n{1}\n{0}'.format("*" * len(header), header))

    unittest.main()
