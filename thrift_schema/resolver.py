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

from typing import Any, NamedTuple

from thrift_schema.exception import CyclicTypedef, UnknownType
from thrift_schema.schema import SchemaModel
from thrift_schema.types import (
    SCALAR_ALIASES,
    SCALAR_TTYPES,
    FieldDef,
    ListTypeRef,
    MapTypeRef,
    SetTypeRef,
    TType,
    TypeRef,
    parse_type_ref,
)


class ResolvedType(NamedTuple):
    """ Outcome of resolving a type reference.

    `type_ref` is what is left after following typedefs: a struct/exception name for STRUCT, the container reference
    (with its parameters still unresolved) for LIST/SET/MAP, and the last name seen for scalars.
    """
    kind: TType
    type_ref: TypeRef


class TypeResolver:
    """ Resolves type references through typedef, enum and struct aliasing to a canonical kind.
    """

    __slots__ = ('_schema',)

    def __init__(self, schema: SchemaModel) -> None:
        self._schema = schema

    @property
    def schema(self) -> SchemaModel:
        return self._schema

    def resolve(self, type_ref: Any) -> ResolvedType:
        type_ref = parse_type_ref(type_ref)
        type_ref = self._follow_typedefs(type_ref)

        match type_ref:
            case ListTypeRef():
                return ResolvedType(TType.LIST, type_ref)
            case SetTypeRef():
                return ResolvedType(TType.SET, type_ref)
            case MapTypeRef():
                return ResolvedType(TType.MAP, type_ref)

        assert isinstance(type_ref, str)
        schema = self._schema
        if type_ref in schema.enums:
            # enum values travel as their underlying integer
            return ResolvedType(TType.I32, type_ref)
        if type_ref in schema.structs or type_ref in schema.exceptions:
            return ResolvedType(TType.STRUCT, type_ref)

        name = type_ref.upper()
        if name in SCALAR_ALIASES:
            return ResolvedType(SCALAR_ALIASES[name], type_ref)
        kind = TType.__members__.get(name)
        if kind is None or kind not in SCALAR_TTYPES:
            raise UnknownType(type_ref)
        return ResolvedType(kind, type_ref)

    def kind_of(self, type_ref: Any) -> TType:
        return self.resolve(type_ref).kind

    def is_composite(self, type_ref: Any) -> bool:
        """ Whether values of this type have to be bridged as JSON text when used as keys of a host mapping.
        """
        return self.kind_of(type_ref).is_composite()

    def get_struct_fields(self, type_ref: Any) -> tuple[FieldDef, ...]:
        """ Field layout of a type reference that resolves to a struct or exception.
        """
        kind, name = self.resolve(type_ref)
        if kind is not TType.STRUCT:
            raise UnknownType(type_ref)
        assert isinstance(name, str)
        fields = self._schema.get_fields(name)
        assert fields is not None, 'a STRUCT kind always comes from a declared struct or exception'
        return fields

    def _follow_typedefs(self, type_ref: TypeRef) -> TypeRef:
        typedefs = self._schema.typedefs
        visited: list[str] = []
        while isinstance(type_ref, str) and type_ref in typedefs:
            if type_ref in visited:
                raise CyclicTypedef(visited + [type_ref])
            visited.append(type_ref)
            type_ref = typedefs[type_ref]
        return type_ref

    def check(self) -> None:
        """ Resolve every typedef and every field/argument type of the schema, failing on the first bad reference.
        """
        schema = self._schema
        for name in schema.typedefs:
            self._check_type_ref(name)
        for fields in (*schema.structs.values(), *schema.exceptions.values()):
            for field_def in fields:
                self._check_type_ref(field_def.type)
        for method in (m for methods in schema.services.values() for m in methods.values()):
            if method.return_type is not None:
                self._check_type_ref(method.return_type)
            for field_def in (*method.args, *method.throws):
                self._check_type_ref(field_def.type)

    def _check_type_ref(self, type_ref: TypeRef, expanding: tuple[str, ...] = ()) -> None:
        # `expanding` holds the aliases whose target is being checked, an alias reached again through a container
        # parameter would expand forever
        typedefs = self._schema.typedefs
        name = type_ref
        while isinstance(name, str) and name in typedefs:
            if name in expanding:
                raise CyclicTypedef(expanding + (name,))
            expanding = expanding + (name,)
            name = typedefs[name]

        _, resolved = self.resolve(type_ref)
        match resolved:
            case ListTypeRef(value_type) | SetTypeRef(value_type):
                self._check_type_ref(value_type, expanding)
            case MapTypeRef(key_type, value_type):
                self._check_type_ref(key_type, expanding)
                self._check_type_ref(value_type, expanding)
