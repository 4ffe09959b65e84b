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
from typing import Any

import pytest

from thrift_schema import ThriftSchema
from thrift_schema.conf.settings import CodecSettings
from thrift_schema.values import ThriftValue
from thrift_schema_tests import unittest
from thrift_schema_tests.utils import TUTORIAL_SCHEMA


class RoundTripTestCase(unittest.TestCase):
    def test_scalars(self) -> None:
        self.assertRoundTrip(True, 'bool')
        self.assertRoundTrip(-128, 'byte')
        self.assertRoundTrip(2**63 - 1, 'i64')
        self.assertRoundTrip(0.25, 'double')
        self.assertRoundTrip('ação', 'string')

    def test_struct_with_all_fields(self) -> None:
        self.assertRoundTrip({'num1': 1, 'num2': 2, 'op': 3, 'comment': 'x'}, 'Work')

    def test_struct_with_absent_optional_fields(self) -> None:
        self.assertRoundTrip({'num2': 2, 'op': 3}, 'Work')

    def test_nested(self) -> None:
        shape = {
            'name': 'square',
            'points': [{'x': 0, 'y': 0}, {'x': 0, 'y': 1}, {'x': 1, 'y': 1}, {'x': 1, 'y': 0}],
            'labels': {'{"x":0,"y":0}': 'origin', '{"x":1,"y":1}': 'far'},
            'tags': ['closed', 'convex'],
        }
        self.assertRoundTrip(shape, 'Shape')

    def test_containers(self) -> None:
        self.assertRoundTrip({'x': 1, 'y': 2}, 'map<string,i32>')
        self.assertRoundTrip([], 'list<string>')
        self.assertRoundTrip([[1, 2], [], [3]], 'list<list<i32>>')
        self.assertRoundTrip({1: [True], 2: []}, 'map<i16,list<bool>>')
        self.assertRoundTrip({'a': {'b': 1.0}}, 'map<string,map<string,double>>')
        self.assertRoundTrip({'[1,2]': 'x'}, 'map<list<i32>,string>')

    def test_through_json(self) -> None:
        value = {'name': 'dot', 'points': [{'x': 5, 'y': 6}], 'labels': {'{"x":5,"y":6}': 'p'}, 'tags': []}
        encoded = self.codec.encode_value(value, 'Shape')
        restored = ThriftValue.from_json(encoded.to_json())
        self.assertEqual(restored, encoded)
        self.assertEqual(self.codec.decode_value(restored, 'Shape'), value)


@pytest.mark.parametrize('type_ref,value', [
    ('MyInteger', 42),
    ('Alias1', -1),
    ('OpAlias', 4),
    ('InvalidOperation', {'whatOp': 4, 'why': 'division by zero'}),
    ('PointList', [{'x': 1, 'y': 2}]),
    ({'name': 'set', 'valueType': 'Label'}, ['a', 'b', 'a']),
    ('map<string,Point>', {'o': {'x': 0, 'y': 0}}),
])
@pytest.mark.parametrize('strict_kinds', [True, False])
def test_round_trip(type_ref: Any, value: Any, strict_kinds: bool) -> None:
    settings = CodecSettings(STRICT_KINDS=strict_kinds)
    codec = ThriftSchema.from_parsed(copy.deepcopy(TUTORIAL_SCHEMA), settings=settings)
    assert codec.decode_value(codec.encode_value(value, type_ref), type_ref) == value
