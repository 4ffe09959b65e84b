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

import pytest

from thrift_schema.exception import SchemaError
from thrift_schema.types import (
    FieldDef,
    ListTypeRef,
    MapTypeRef,
    Presence,
    ServiceMethod,
    SetTypeRef,
    TType,
    parse_type_ref,
)


def test_parse_bare_name() -> None:
    assert parse_type_ref('i32') == 'i32'
    assert parse_type_ref('  Work ') == 'Work'


def test_parse_parser_dicts() -> None:
    assert parse_type_ref({'name': 'list', 'valueType': 'i64'}) == ListTypeRef('i64')
    assert parse_type_ref({'name': 'set', 'valueType': 'Point'}) == SetTypeRef('Point')
    assert parse_type_ref({
        'name': 'map',
        'keyType': 'Point',
        'valueType': {'name': 'list', 'valueType': 'string'},
    }) == MapTypeRef('Point', ListTypeRef('string'))


def test_parse_text() -> None:
    assert parse_type_ref('list<i32>') == ListTypeRef('i32')
    assert parse_type_ref('SET<string>') == SetTypeRef('string')
    assert parse_type_ref('map<string, map<i32, list<Point>>>') == MapTypeRef(
        'string',
        MapTypeRef('i32', ListTypeRef('Point')),
    )


def test_parse_keeps_type_refs() -> None:
    type_ref = MapTypeRef('string', 'i32')
    assert parse_type_ref(type_ref) is type_ref


def test_str_is_parseable() -> None:
    type_ref = MapTypeRef(ListTypeRef('i32'), SetTypeRef('Point'))
    assert str(type_ref) == 'map<list<i32>,set<Point>>'
    assert parse_type_ref(str(type_ref)) == type_ref


@pytest.mark.parametrize('raw', [
    '',
    'list<i32',
    'list<i32>>',
    'map<i32>',
    'map<i32, i32, i32>',
    'list<i32, i32>',
    'vector<i32>',
    'a,b',
    {'name': 'map', 'valueType': 'i32'},
    {'valueType': 'i32'},
    42,
    None,
])
def test_parse_invalid(raw: object) -> None:
    with pytest.raises(SchemaError):
        parse_type_ref(raw)


def test_ttype_scalar() -> None:
    assert TType.I32.is_scalar()
    assert TType.STRING.is_scalar()
    assert not TType.I32.is_composite()
    for ttype in (TType.STRUCT, TType.LIST, TType.SET, TType.MAP):
        assert ttype.is_composite()
    assert str(TType.DOUBLE) == 'DOUBLE'


def test_presence_from_option() -> None:
    assert Presence.from_option('required') is Presence.REQUIRED
    assert Presence.from_option('optional') is Presence.OPTIONAL
    assert Presence.from_option(None) is Presence.DEFAULT
    assert Presence.from_option('') is Presence.DEFAULT
    with pytest.raises(SchemaError):
        Presence.from_option('mandatory')


def test_field_def_from_parsed() -> None:
    field_def = FieldDef.from_parsed({'id': '3', 'name': 'op', 'type': 'Operation', 'option': 'required'})
    assert field_def == FieldDef(id=3, name='op', type='Operation', presence=Presence.REQUIRED)
    assert field_def.is_required

    field_def = FieldDef.from_parsed({'id': 7, 'name': 'xs', 'type': {'name': 'list', 'valueType': 'i16'}})
    assert field_def.type == ListTypeRef('i16')
    assert field_def.presence is Presence.DEFAULT
    assert not field_def.is_required


@pytest.mark.parametrize('raw', [
    {'name': 'x', 'type': 'i32'},
    {'id': 'one', 'name': 'x', 'type': 'i32'},
    {'id': 1, 'type': 'i32'},
    {'id': 1, 'name': 2, 'type': 'i32'},
    ['id', 'name', 'type'],
])
def test_field_def_invalid(raw: object) -> None:
    with pytest.raises(SchemaError):
        FieldDef.from_parsed(raw)  # type: ignore[arg-type]


def test_service_method_from_parsed() -> None:
    method = ServiceMethod.from_parsed('calculate', {
        'type': 'i32',
        'name': 'calculate',
        'args': [{'id': '1', 'name': 'logid', 'type': 'i32'}],
        'throws': [{'id': '1', 'name': 'ouch', 'type': 'InvalidOperation'}],
    })
    assert method.name == 'calculate'
    assert method.return_type == 'i32'
    assert method.args == (FieldDef(id=1, name='logid', type='i32'),)
    assert not method.oneway
    assert method.result_fields == (
        FieldDef(id=0, name='success', type='i32', presence=Presence.OPTIONAL),
        FieldDef(id=1, name='ouch', type='InvalidOperation', presence=Presence.OPTIONAL),
    )


def test_void_method_has_no_success_field() -> None:
    method = ServiceMethod.from_parsed('zip', {'type': 'void', 'oneway': True})
    assert method.return_type is None
    assert method.oneway
    assert method.args == ()
    assert method.result_fields == ()
