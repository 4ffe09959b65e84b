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

from typing import Any

# Parser output for a tutorial-like IDL:
#
#   typedef i32 MyInteger
#   typedef Alias2 Alias1
#   typedef Alias3 Alias2
#   typedef i32 Alias3
#   typedef list<Point> PointList
#   typedef Operation OpAlias
#   typedef string Label
#   enum Operation { ADD = 1, SUBTRACT = 2, MULTIPLY = 3, DIVIDE = 4 }
#   struct Point { 1: required i32 x, 2: required i32 y }
#   struct Work { 1: i32 num1 = 0, 2: required i32 num2, 3: required Operation op, 4: optional string comment }
#   struct Shape { 1: required string name, 5: PointList points, 7: map<Point, Label> labels, 9: set<string> tags }
#   exception InvalidOperation { 1: i32 whatOp, 2: string why }
#   service Calculator { void ping(), i32 add(1: i32 num1, 2: i32 num2),
#                        i32 calculate(1: i32 logid, 2: Work w) throws (1: InvalidOperation ouch),
#                        oneway void zip() }
#   service SharedService { Point getStruct(1: i32 key) }
TUTORIAL_SCHEMA: dict[str, Any] = {
    'typedef': {
        'MyInteger': {'type': 'i32'},
        'Alias1': {'type': 'Alias2'},
        'Alias2': {'type': 'Alias3'},
        'Alias3': {'type': 'i32'},
        'PointList': {'type': {'name': 'list', 'valueType': 'Point'}},
        'OpAlias': {'type': 'Operation'},
        'Label': {'type': 'string'},
    },
    'enum': {
        'Operation': {
            'items': [
                {'name': 'ADD', 'value': 1},
                {'name': 'SUBTRACT', 'value': 2},
                {'name': 'MULTIPLY', 'value': 3},
                {'name': 'DIVIDE', 'value': 4},
            ],
        },
    },
    'struct': {
        'Point': [
            {'id': '1', 'name': 'x', 'type': 'i32', 'option': 'required'},
            {'id': '2', 'name': 'y', 'type': 'i32', 'option': 'required'},
        ],
        'Work': [
            {'id': '1', 'name': 'num1', 'type': 'i32', 'defaultValue': 0},
            {'id': '2', 'name': 'num2', 'type': 'i32', 'option': 'required'},
            {'id': '3', 'name': 'op', 'type': 'Operation', 'option': 'required'},
            {'id': '4', 'name': 'comment', 'type': 'string', 'option': 'optional'},
        ],
        'Shape': [
            {'id': '1', 'name': 'name', 'type': 'string', 'option': 'required'},
            {'id': '5', 'name': 'points', 'type': 'PointList'},
            {'id': '7', 'name': 'labels', 'type': {'name': 'map', 'keyType': 'Point', 'valueType': 'Label'}},
            {'id': '9', 'name': 'tags', 'type': {'name': 'set', 'valueType': 'string'}},
        ],
    },
    'exception': {
        'InvalidOperation': [
            {'id': '1', 'name': 'whatOp', 'type': 'i32'},
            {'id': '2', 'name': 'why', 'type': 'string'},
        ],
    },
    'service': {
        'Calculator': {
            'ping': {'type': 'void', 'name': 'ping', 'args': [], 'throws': []},
            'add': {
                'type': 'i32',
                'name': 'add',
                'args': [
                    {'id': '1', 'name': 'num1', 'type': 'i32'},
                    {'id': '2', 'name': 'num2', 'type': 'i32'},
                ],
                'throws': [],
            },
            'calculate': {
                'type': 'i32',
                'name': 'calculate',
                'args': [
                    {'id': '1', 'name': 'logid', 'type': 'i32'},
                    {'id': '2', 'name': 'w', 'type': 'Work'},
                ],
                'throws': [
                    {'id': '1', 'name': 'ouch', 'type': 'InvalidOperation'},
                ],
            },
            'zip': {'type': 'void', 'name': 'zip', 'args': [], 'throws': [], 'oneway': True},
        },
        'SharedService': {
            'getStruct': {
                'type': 'Point',
                'name': 'getStruct',
                'args': [{'id': '1', 'name': 'key', 'type': 'i32'}],
                'throws': [],
            },
        },
    },
}
