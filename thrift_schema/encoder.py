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

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from json import JSONDecodeError
from typing import Any

from thrift_schema.exception import TypeMismatch, UnknownType
from thrift_schema.resolver import TypeResolver
from thrift_schema.types import SCALAR_TTYPES, FieldDef, ListTypeRef, MapTypeRef, SetTypeRef, TType
from thrift_schema.utils.json import json_loads
from thrift_schema.values import ListPayload, MapEntry, MapPayload, Payload, StructPayload, ThriftField, ThriftValue


class Encoder:
    """ Converts host values into the canonical value tree.

    Encoding is permissive: absent fields are omitted even when they are required (presence is only enforced when
    decoding), keys of a record that are not declared fields are ignored and scalars are not range checked.
    """

    __slots__ = ('_resolver',)

    def __init__(self, resolver: TypeResolver) -> None:
        self._resolver = resolver

    def encode_struct(self, fields: Sequence[FieldDef], record: Mapping[str, Any]) -> ThriftValue:
        return ThriftValue(TType.STRUCT, self._encode_struct(fields, record))

    def encode_value(self, value: Any, type_ref: Any) -> ThriftValue:
        kind, payload = self._encode(value, type_ref)
        return ThriftValue(kind, payload)

    def _encode_struct(self, fields: Sequence[FieldDef], record: Mapping[str, Any]) -> StructPayload:
        if not isinstance(record, Mapping):
            raise TypeMismatch(f'expected a mapping for struct, got {type(record).__name__}')
        encoded: list[ThriftField] = []
        for field_def in fields:
            if field_def.name not in record:
                continue
            kind, payload = self._encode(record[field_def.name], field_def.type)
            encoded.append(ThriftField(field_def.id, kind, payload))
        return StructPayload(tuple(encoded))

    def _encode(self, value: Any, type_ref: Any) -> tuple[TType, Payload]:
        kind, resolved = self._resolver.resolve(type_ref)
        if kind in SCALAR_TTYPES:
            return kind, value

        match kind:
            case TType.STRUCT:
                fields = self._resolver.get_struct_fields(resolved)
                return kind, self._encode_struct(fields, value)
            case TType.LIST | TType.SET:
                assert isinstance(resolved, (ListTypeRef, SetTypeRef))
                return kind, self._encode_items(value, resolved.value_type)
            case TType.MAP:
                assert isinstance(resolved, MapTypeRef)
                return kind, self._encode_map(value, resolved)
            case _:
                raise UnknownType(type_ref)

    def _encode_items(self, value: Any, value_type: Any) -> ListPayload:
        if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
            raise TypeMismatch(f'expected a sequence, got {type(value).__name__}')
        # the item kind is taken from the schema, so an empty container still records it
        item_kind = self._resolver.kind_of(value_type)
        data = tuple(self._encode(i, value_type)[1] for i in value)
        return ListPayload(item_kind, data)

    def _encode_map(self, value: Any, type_ref: MapTypeRef) -> MapPayload:
        if not isinstance(value, Mapping):
            raise TypeMismatch(f'expected a mapping, got {type(value).__name__}')
        key_kind = self._resolver.kind_of(type_ref.key_type)
        value_kind = self._resolver.kind_of(type_ref.value_type)
        entries: list[MapEntry] = []
        for k, v in value.items():
            if key_kind.is_composite():
                k = _parse_composite_key(k)
            entries.append(MapEntry(
                self._encode(k, type_ref.key_type)[1],
                self._encode(v, type_ref.value_type)[1],
            ))
        return MapPayload(key_kind, value_kind, tuple(entries))


def _parse_composite_key(key: Any) -> Any:
    """ Host mappings hold struct and container keys as their JSON text, turn it back into a structured value.
    """
    if not isinstance(key, str):
        raise TypeMismatch(f'expected JSON text for a composite map key, got {type(key).__name__}')
    try:
        return json_loads(key)
    except JSONDecodeError as e:
        raise TypeMismatch(f'invalid JSON text for a composite map key: {key!r}') from e
