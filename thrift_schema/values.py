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

"""
The canonical value tree exchanged with wire serializers.

A tagged value carries its kind and a payload. Scalar payloads are the host scalar itself, the compound payloads are
the classes below. Items of containers are stored as bare payloads because containers are homogeneous and the kind of
every item is recorded once in the container (`value_type`, `key_type`).

The JSON form is the contract with downstream writers/readers:

    tagged value:  {"type": <kind>, "value": <payload>}
    STRUCT:        {"fields": [{"id": <int>, "type": <kind>, "value": <payload>}, ...]}
    LIST and SET:  {"valueType": <kind>, "data": [<payload>, ...]}
    MAP:           {"keyType": <kind>, "valueType": <kind>, "data": [{"key": <payload>, "value": <payload>}, ...]}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias, Union

from thrift_schema.types import TType

Json: TypeAlias = dict | list | str | int | float | bool | None


@dataclass(slots=True, frozen=True)
class ThriftField:
    """ One entry of a struct payload, duplicated or out of order ids are allowed here.
    """
    id: int
    type: TType
    value: Payload

    def to_json(self) -> dict[str, Any]:
        return {'id': self.id, 'type': self.type.name, 'value': payload_to_json(self.type, self.value)}


@dataclass(slots=True, frozen=True)
class StructPayload:
    fields: tuple[ThriftField, ...] = ()

    def to_json(self) -> dict[str, Any]:
        return {'fields': [i.to_json() for i in self.fields]}


@dataclass(slots=True, frozen=True)
class ListPayload:
    """ Payload of LIST and SET values.
    """
    value_type: TType
    data: tuple[Payload, ...] = ()

    def to_json(self) -> dict[str, Any]:
        return {
            'valueType': self.value_type.name,
            'data': [payload_to_json(self.value_type, i) for i in self.data],
        }


@dataclass(slots=True, frozen=True)
class MapEntry:
    key: Payload
    value: Payload


@dataclass(slots=True, frozen=True)
class MapPayload:
    key_type: TType
    value_type: TType
    data: tuple[MapEntry, ...] = ()

    def to_json(self) -> dict[str, Any]:
        return {
            'keyType': self.key_type.name,
            'valueType': self.value_type.name,
            'data': [
                {
                    'key': payload_to_json(self.key_type, i.key),
                    'value': payload_to_json(self.value_type, i.value),
                } for i in self.data
            ],
        }


Payload: TypeAlias = Union[StructPayload, ListPayload, MapPayload, bool, int, float, str, bytes]


@dataclass(slots=True, frozen=True)
class ThriftValue:
    """ A tagged value of the canonical tree.
    """
    type: TType
    value: Payload

    def to_json(self) -> dict[str, Any]:
        """ Convert to an object compatible with `json.dump`.
        """
        return {'type': self.type.name, 'value': payload_to_json(self.type, self.value)}

    @classmethod
    def from_json(cls, json_value: Json) -> ThriftValue:
        """ Inverse of `ThriftValue.to_json`, will raise a ValueError if the object does not have the expected shape.
        """
        if not isinstance(json_value, dict):
            raise ValueError('expected dict')
        try:
            raw_type = json_value['type']
            raw_value = json_value['value']
        except KeyError as e:
            raise ValueError(f'missing key {e}') from e
        type_ = ttype_from_json(raw_type)
        return cls(type_, payload_from_json(type_, raw_value))


def ttype_from_json(json_value: Json) -> TType:
    if not isinstance(json_value, str):
        raise ValueError(f'expected kind name, got {json_value!r}')
    try:
        return TType[json_value.upper()]
    except KeyError as e:
        raise ValueError(f'unknown kind {json_value!r}') from e


def payload_to_json(type_: TType, payload: Payload) -> Json:
    """ Will raise a ValueError if the payload does not have the shape its kind requires.
    """
    match type_:
        case TType.STRUCT:
            if not isinstance(payload, StructPayload):
                raise ValueError(f'expected a struct payload for {type_}, got {type(payload).__name__}')
            return payload.to_json()
        case TType.LIST | TType.SET:
            if not isinstance(payload, ListPayload):
                raise ValueError(f'expected a list payload for {type_}, got {type(payload).__name__}')
            return payload.to_json()
        case TType.MAP:
            if not isinstance(payload, MapPayload):
                raise ValueError(f'expected a map payload for {type_}, got {type(payload).__name__}')
            return payload.to_json()
        case _:
            if isinstance(payload, (StructPayload, ListPayload, MapPayload)):
                raise ValueError(f'expected a scalar for {type_}, got {type(payload).__name__}')
            return payload  # type: ignore[return-value]


def payload_from_json(type_: TType, json_value: Json) -> Payload:
    match type_:
        case TType.STRUCT:
            fields_json = _expect_key(json_value, 'fields')
            if not isinstance(fields_json, list):
                raise ValueError('expected list of fields')
            return StructPayload(tuple(_field_from_json(i) for i in fields_json))
        case TType.LIST | TType.SET:
            value_type = ttype_from_json(_expect_key(json_value, 'valueType'))
            data = _expect_key(json_value, 'data')
            if not isinstance(data, list):
                raise ValueError('expected list of items')
            return ListPayload(value_type, tuple(payload_from_json(value_type, i) for i in data))
        case TType.MAP:
            key_type = ttype_from_json(_expect_key(json_value, 'keyType'))
            value_type = ttype_from_json(_expect_key(json_value, 'valueType'))
            data = _expect_key(json_value, 'data')
            if not isinstance(data, list):
                raise ValueError('expected list of entries')
            return MapPayload(key_type, value_type, tuple(
                MapEntry(
                    payload_from_json(key_type, _expect_key(i, 'key')),
                    payload_from_json(value_type, _expect_key(i, 'value')),
                ) for i in data
            ))
        case _:
            if isinstance(json_value, (dict, list)):
                raise ValueError(f'expected a scalar for {type_}')
            return json_value  # type: ignore[return-value]


def _field_from_json(json_value: Json) -> ThriftField:
    field_id = _expect_key(json_value, 'id')
    if not isinstance(field_id, int) or isinstance(field_id, bool):
        raise ValueError(f'expected int field id, got {field_id!r}')
    type_ = ttype_from_json(_expect_key(json_value, 'type'))
    return ThriftField(field_id, type_, payload_from_json(type_, _expect_key(json_value, 'value')))


def _expect_key(json_value: Json, key: str) -> Json:
    if not isinstance(json_value, Mapping):
        raise ValueError('expected dict')
    if key not in json_value:
        raise ValueError(f'missing key {key!r}')
    return json_value[key]
