#  Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import copy
import json
import os
import tempfile

import pytest
import yaml
from structlog.testing import capture_logs

from thrift_schema.conf.settings import CodecSettings
from thrift_schema.exception import MethodNotFound, SchemaError
from thrift_schema.schema import SchemaModel, build_schema, load_schema_dict
from thrift_schema.types import ListTypeRef, MapTypeRef, Presence
from thrift_schema_tests import unittest
from thrift_schema_tests.utils import TUTORIAL_SCHEMA


def _tutorial() -> dict:
    return copy.deepcopy(TUTORIAL_SCHEMA)


class BuildSchemaTestCase(unittest.TestCase):
    def test_tables(self) -> None:
        schema = self.codec.schema
        self.assertEqual(set(schema.typedefs), {'MyInteger', 'Alias1', 'Alias2', 'Alias3', 'PointList', 'OpAlias',
                                                'Label'})
        self.assertEqual(schema.typedefs['PointList'], ListTypeRef('Point'))
        self.assertEqual(set(schema.structs), {'Point', 'Work', 'Shape'})
        self.assertEqual(set(schema.exceptions), {'InvalidOperation'})
        self.assertEqual(schema.enums['Operation'], frozenset({'ADD', 'SUBTRACT', 'MULTIPLY', 'DIVIDE'}))
        self.assertEqual(set(schema.services), {'Calculator', 'SharedService'})
        self.assertEqual(set(schema.service), {'ping', 'add', 'calculate', 'zip', 'getStruct'})

    def test_fields(self) -> None:
        work = self.codec.schema.structs['Work']
        self.assertEqual([(i.id, i.name) for i in work], [(1, 'num1'), (2, 'num2'), (3, 'op'), (4, 'comment')])
        self.assertEqual([i.presence for i in work],
                         [Presence.DEFAULT, Presence.REQUIRED, Presence.REQUIRED, Presence.OPTIONAL])
        labels = self.codec.schema.structs['Shape'][2]
        self.assertEqual(labels.type, MapTypeRef('Point', 'Label'))

    def test_get_fields(self) -> None:
        schema = self.codec.schema
        self.assertEqual(schema.get_fields('Point'), schema.structs['Point'])
        self.assertEqual(schema.get_fields('InvalidOperation'), schema.exceptions['InvalidOperation'])
        self.assertIsNone(schema.get_fields('Operation'))

    def test_struct_takes_precedence_over_exception(self) -> None:
        parsed = _tutorial()
        parsed['exception']['Point'] = [{'id': '1', 'name': 'message', 'type': 'string'}]
        schema = build_schema(parsed, settings=self.settings)
        self.assertEqual([i.name for i in schema.get_fields('Point')], ['x', 'y'])

    def test_immutable(self) -> None:
        schema = self.codec.schema
        with self.assertRaises(TypeError):
            schema.structs['Other'] = ()  # type: ignore[index]
        with self.assertRaises(TypeError):
            schema.service['other'] = schema.service['ping']  # type: ignore[index]
        with self.assertRaises(AttributeError):
            schema.typedefs = {}  # type: ignore[misc]

    def test_input_is_not_kept(self) -> None:
        parsed = _tutorial()
        schema = build_schema(parsed, settings=self.settings)
        parsed['struct']['Point'].append({'id': '3', 'name': 'z', 'type': 'i32'})
        del parsed['typedef']['Label']
        self.assertEqual(len(schema.structs['Point']), 2)
        self.assertIn('Label', schema.typedefs)

    def test_empty_model(self) -> None:
        schema = SchemaModel()
        for table in (schema.typedefs, schema.structs, schema.exceptions, schema.enums, schema.services,
                      schema.service):
            self.assertEqual(len(table), 0)
        self.assertIsNone(schema.get_fields('Point'))
        with self.assertRaises(MethodNotFound):
            schema.get_method('ping')
        with self.assertRaises(TypeError):
            schema.structs['Point'] = ()  # type: ignore[index]
        # every instance gets its own empty tables
        self.assertIsNot(SchemaModel().typedefs, schema.typedefs)

    def test_missing_service(self) -> None:
        for service in (None, {}):
            parsed = _tutorial()
            parsed['service'] = service
            with self.assertRaises(SchemaError) as cm:
                build_schema(parsed, settings=self.settings)
            self.assertEqual(str(cm.exception), 'Service not found')

    def test_missing_service_allowed(self) -> None:
        parsed = _tutorial()
        del parsed['service']
        schema = build_schema(parsed, settings=CodecSettings(REQUIRE_SERVICE=False))
        self.assertEqual(len(schema.service), 0)
        self.assertEqual(len(schema.structs), 3)

    def test_not_a_mapping(self) -> None:
        with self.assertRaises(SchemaError):
            build_schema([], settings=self.settings)  # type: ignore[arg-type]
        parsed = _tutorial()
        parsed['struct'] = ['Point']
        with self.assertRaises(SchemaError):
            build_schema(parsed, settings=self.settings)

    def test_duplicated_field_id(self) -> None:
        parsed = _tutorial()
        parsed['struct']['Point'][1]['id'] = '1'
        with self.assertRaises(SchemaError):
            build_schema(parsed, settings=self.settings)

    def test_enum_as_plain_names(self) -> None:
        parsed = _tutorial()
        parsed['enum']['Color'] = ['RED', 'GREEN']
        schema = build_schema(parsed, settings=self.settings)
        self.assertEqual(schema.enums['Color'], frozenset({'RED', 'GREEN'}))

    def test_invalid_enum(self) -> None:
        parsed = _tutorial()
        parsed['enum']['Color'] = {'items': [{'value': 1}]}
        with self.assertRaises(SchemaError):
            build_schema(parsed, settings=self.settings)


class ServiceMergeTestCase(unittest.TestCase):
    def _parsed_with_collision(self) -> dict:
        parsed = _tutorial()
        parsed['service']['SharedService']['add'] = {
            'type': 'i64',
            'name': 'add',
            'args': [{'id': '1', 'name': 'values', 'type': 'list<i64>'}],
            'throws': [],
        }
        return parsed

    def test_later_service_wins(self) -> None:
        with capture_logs() as log_list:
            schema = build_schema(self._parsed_with_collision(), settings=self.settings)
        self.assertEqual(schema.service['add'].return_type, 'i64')
        # the per service table keeps both
        self.assertEqual(schema.services['Calculator']['add'].return_type, 'i32')
        self.assertEqual(schema.services['SharedService']['add'].return_type, 'i64')
        warnings = [i for i in log_list if i['log_level'] == 'warning']
        self.assertEqual(len(warnings), 1)
        self.assertEqual(warnings[0]['method'], 'add')
        self.assertEqual(warnings[0]['service'], 'SharedService')

    def test_override_not_allowed(self) -> None:
        with self.assertRaises(SchemaError):
            build_schema(self._parsed_with_collision(), settings=CodecSettings(ALLOW_METHOD_OVERRIDE=False))

    def test_no_warning_without_collision(self) -> None:
        with capture_logs() as log_list:
            build_schema(_tutorial(), settings=self.settings)
        self.assertFalse([i for i in log_list if i['log_level'] == 'warning'])

    def test_get_method(self) -> None:
        schema = self.codec.schema
        self.assertEqual(schema.get_method('getStruct').return_type, 'Point')
        self.assertEqual(schema.get_method('add', service='Calculator').name, 'add')
        with self.assertRaises(MethodNotFound) as cm:
            schema.get_method('divide')
        self.assertEqual(str(cm.exception), 'Method "divide" not found')
        with self.assertRaises(MethodNotFound) as cm:
            schema.get_method('add', service='Missing')
        self.assertEqual(str(cm.exception), 'Service "Missing" not found')
        with self.assertRaises(MethodNotFound):
            schema.get_method('add', service='SharedService')


@pytest.mark.parametrize('suffix', ['.json', '.yml', '.yaml'])
def test_load_schema_dict(suffix: str) -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = os.path.join(tmpdir, f'tutorial{suffix}')
        with open(filepath, 'w') as file:
            if suffix == '.json':
                json.dump(TUTORIAL_SCHEMA, file)
            else:
                yaml.safe_dump(TUTORIAL_SCHEMA, file)
        assert load_schema_dict(filepath=filepath) == TUTORIAL_SCHEMA


def test_load_schema_dict_not_a_dict() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = os.path.join(tmpdir, 'schema.json')
        with open(filepath, 'w') as file:
            json.dump(['struct'], file)
        with pytest.raises(ValueError):
            load_schema_dict(filepath=filepath)


def test_load_schema_dict_missing_file() -> None:
    with pytest.raises(ValueError):
        load_schema_dict(filepath='/does/not/exist.yml')
