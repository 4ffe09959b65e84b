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

from collections.abc import Sequence
from typing import Any, Optional

from thrift_schema.exception import RequiredFieldMissing, TypeMismatch, UnknownType
from thrift_schema.resolver import TypeResolver
from thrift_schema.types import SCALAR_TTYPES, FieldDef, ListTypeRef, MapTypeRef, SetTypeRef, TType
from thrift_schema.utils.json import json_dumps
from thrift_schema.values import ListPayload, MapPayload, Payload, StructPayload, ThriftField, ThriftValue


class Decoder:
    """ Converts canonical value trees back into host values.

    Decoding is strict about presence: a required field without an entry fails the whole call. Optional and default
    fields that are absent are left out of the resulting record, no default value is filled in.

    Host representation of the results:

    - STRUCT: a `dict` keyed by field name, in field declaration order;
    - LIST and SET: a `list` in the order of the canonical value;
    - MAP: a `dict`, composite keys (structs and containers) become their JSON text;
    - scalars: the payload unchanged.
    """

    __slots__ = ('_resolver', '_strict_kinds', '_sort_keys')

    def __init__(self, resolver: TypeResolver, *, strict_kinds: bool = True, canonical_map_keys: bool = True) -> None:
        self._resolver = resolver
        self._strict_kinds = strict_kinds
        self._sort_keys = canonical_map_keys

    def decode_struct(self, value: ThriftValue, fields: Sequence[FieldDef]) -> dict[str, Any]:
        if not isinstance(value, ThriftValue) or value.type is not TType.STRUCT:
            raise TypeMismatch('expected a STRUCT value')
        return self._decode_struct(value.value, fields)

    def decode_value(self, value: ThriftValue, type_ref: Any) -> Any:
        if not isinstance(value, ThriftValue):
            raise TypeMismatch(f'expected a ThriftValue, got {type(value).__name__}')
        return self._decode(value.type, value.value, type_ref)

    def _decode_struct(
        self,
        payload: Payload,
        fields: Sequence[FieldDef],
        struct_name: Optional[str] = None,
    ) -> dict[str, Any]:
        if not isinstance(payload, StructPayload):
            raise TypeMismatch('expected a struct payload')
        # XXX: on duplicated ids the last entry wins
        by_id: dict[int, ThriftField] = {i.id: i for i in payload.fields}
        record: dict[str, Any] = {}
        for field_def in fields:
            entry = by_id.get(field_def.id)
            if entry is None:
                if field_def.is_required:
                    raise RequiredFieldMissing(field_def.name, struct_name)
                continue
            record[field_def.name] = self._decode(entry.type, entry.value, field_def.type)
        return record

    def _decode(self, stored_kind: TType, payload: Payload, type_ref: Any) -> Any:
        kind, resolved = self._resolver.resolve(type_ref)
        self._check_kind(stored_kind, kind, type_ref)
        if kind in SCALAR_TTYPES:
            return payload

        match kind:
            case TType.STRUCT:
                assert isinstance(resolved, str)
                fields = self._resolver.get_struct_fields(resolved)
                return self._decode_struct(payload, fields, resolved)
            case TType.LIST | TType.SET:
                assert isinstance(resolved, (ListTypeRef, SetTypeRef))
                if not isinstance(payload, ListPayload):
                    raise TypeMismatch(f'expected a {kind} payload')
                return [self._decode(payload.value_type, i, resolved.value_type) for i in payload.data]
            case TType.MAP:
                assert isinstance(resolved, MapTypeRef)
                return self._decode_map(payload, resolved)
            case _:
                raise UnknownType(type_ref)

    def _decode_map(self, payload: Payload, type_ref: MapTypeRef) -> dict[Any, Any]:
        if not isinstance(payload, MapPayload):
            raise TypeMismatch('expected a MAP payload')
        composite_key = self._resolver.is_composite(type_ref.key_type)
        record: dict[Any, Any] = {}
        for entry in payload.data:
            key = self._decode(payload.key_type, entry.key, type_ref.key_type)
            value = self._decode(payload.value_type, entry.value, type_ref.value_type)
            if composite_key:
                key = self._dump_composite_key(key)
            record[key] = value
        return record

    def _dump_composite_key(self, key: Any) -> str:
        try:
            return json_dumps(key, sort_keys=self._sort_keys)
        except (TypeError, ValueError) as e:
            raise TypeMismatch(f'map key cannot be represented as JSON text: {key!r}') from e

    def _check_kind(self, stored_kind: TType, expected_kind: TType, type_ref: Any) -> None:
        if self._strict_kinds and stored_kind is not expected_kind:
            raise TypeMismatch(f'expected {expected_kind} for "{type_ref}", got {stored_kind}')
