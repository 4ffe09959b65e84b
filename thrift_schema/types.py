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

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Optional, TypeAlias, Union

from thrift_schema.exception import SchemaError


@unique
class TType(Enum):
    """ Canonical kinds of the Thrift type system, every type reference resolves to exactly one of these.
    """
    BOOL = 'BOOL'
    BYTE = 'BYTE'
    I16 = 'I16'
    I32 = 'I32'
    I64 = 'I64'
    DOUBLE = 'DOUBLE'
    STRING = 'STRING'
    STRUCT = 'STRUCT'
    LIST = 'LIST'
    SET = 'SET'
    MAP = 'MAP'

    def __str__(self) -> str:
        return self.name

    def is_scalar(self) -> bool:
        return self in SCALAR_TTYPES

    def is_composite(self) -> bool:
        """ Composite kinds cannot be used directly as keys of a host mapping.
        """
        return not self.is_scalar()


SCALAR_TTYPES: frozenset[TType] = frozenset({
    TType.BOOL,
    TType.BYTE,
    TType.I16,
    TType.I32,
    TType.I64,
    TType.DOUBLE,
    TType.STRING,
})

# IDL spellings that are not a kind name by themselves
SCALAR_ALIASES: Mapping[str, TType] = {
    'I8': TType.BYTE,
    'BINARY': TType.STRING,
}


class Presence(Enum):
    REQUIRED = 'required'
    OPTIONAL = 'optional'
    DEFAULT = 'default'

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_option(cls, option: Optional[str]) -> Presence:
        """ Maps the `option` value of a parsed field (`'required'`, `'optional'` or nothing) to a Presence.
        """
        if not option:
            return cls.DEFAULT
        try:
            return cls(str(option).lower())
        except ValueError as e:
            raise SchemaError(f'invalid field option: {option!r}') from e


@dataclass(slots=True, frozen=True)
class ListTypeRef:
    value_type: TypeRef

    def __str__(self) -> str:
        return f'list<{self.value_type}>'


@dataclass(slots=True, frozen=True)
class SetTypeRef:
    value_type: TypeRef

    def __str__(self) -> str:
        return f'set<{self.value_type}>'


@dataclass(slots=True, frozen=True)
class MapTypeRef:
    key_type: TypeRef
    value_type: TypeRef

    def __str__(self) -> str:
        return f'map<{self.key_type},{self.value_type}>'


# A bare name is either a scalar kind name, a typedef alias or a struct/exception/enum name, the containers carry
# their (still unresolved) parameters.
TypeRef: TypeAlias = Union[str, ListTypeRef, SetTypeRef, MapTypeRef]
ContainerTypeRef: TypeAlias = Union[ListTypeRef, SetTypeRef, MapTypeRef]


@dataclass(slots=True, frozen=True, kw_only=True)
class FieldDef:
    """ A field of a struct or exception, or an argument of a service method.

    Field ids are only unique inside their struct, they need not be contiguous nor follow declaration order.
    """
    id: int
    name: str
    type: TypeRef
    presence: Presence = Presence.DEFAULT

    @property
    def is_required(self) -> bool:
        return self.presence is Presence.REQUIRED

    @classmethod
    def from_parsed(cls, raw: Mapping[str, Any]) -> FieldDef:
        """ Build a FieldDef from a parser output entry like `{'id': '1', 'name': 'x', 'type': 'i32'}`.
        """
        if not isinstance(raw, Mapping):
            raise SchemaError(f'invalid field entry: {raw!r}')
        try:
            field_id = int(raw['id'])
            name = raw['name']
            type_ = raw['type']
        except (KeyError, TypeError, ValueError) as e:
            raise SchemaError(f'invalid field entry: {raw!r}') from e
        if not isinstance(name, str):
            raise SchemaError(f'invalid field name: {name!r}')
        return cls(id=field_id, name=name, type=parse_type_ref(type_), presence=Presence.from_option(raw.get('option')))


@dataclass(slots=True, frozen=True, kw_only=True)
class ServiceMethod:
    """ Signature of a service method, `return_type` is None for `void` methods.
    """
    name: str
    return_type: Optional[TypeRef]
    args: tuple[FieldDef, ...] = ()
    throws: tuple[FieldDef, ...] = ()
    oneway: bool = False

    @property
    def result_fields(self) -> tuple[FieldDef, ...]:
        """ Field layout of the method's result struct.

        A non-void return value travels as the optional field 0 named `success`, declared exceptions follow as
        optional fields with their own ids.
        """
        fields: list[FieldDef] = []
        if self.return_type is not None:
            fields.append(FieldDef(id=0, name='success', type=self.return_type, presence=Presence.OPTIONAL))
        for exc in self.throws:
            fields.append(FieldDef(id=exc.id, name=exc.name, type=exc.type, presence=Presence.OPTIONAL))
        return tuple(fields)

    @classmethod
    def from_parsed(cls, name: str, raw: Mapping[str, Any]) -> ServiceMethod:
        if not isinstance(raw, Mapping):
            raise SchemaError(f'invalid method entry for {name!r}: {raw!r}')
        return_type_raw = raw.get('type', 'void')
        return_type: Optional[TypeRef]
        if isinstance(return_type_raw, str) and return_type_raw.lower() == 'void':
            return_type = None
        else:
            return_type = parse_type_ref(return_type_raw)
        return cls(
            name=raw.get('name', name),
            return_type=return_type,
            args=tuple(FieldDef.from_parsed(i) for i in raw.get('args') or ()),
            throws=tuple(FieldDef.from_parsed(i) for i in raw.get('throws') or ()),
            oneway=bool(raw.get('oneway', False)),
        )


_CONTAINER_NAMES = ('list', 'set', 'map')


def parse_type_ref(raw: Any) -> TypeRef:
    """ Normalize any accepted type reference form into a TypeRef.

    Accepted forms are bare names, the dicts produced by the IDL parser for containers, the textual container syntax
    and TypeRef instances (returned as is).

    >>> parse_type_ref('i32')
    'i32'
    >>> parse_type_ref({'name': 'list', 'valueType': 'string'})
    ListTypeRef(value_type='string')
    >>> parse_type_ref('map<string, list<Point>>')
    MapTypeRef(key_type='string', value_type=ListTypeRef(value_type='Point'))
    >>> str(parse_type_ref({'name': 'set', 'valueType': {'name': 'map', 'keyType': 'i8', 'valueType': 'binary'}}))
    'set<map<i8,binary>>'
    """
    if isinstance(raw, (ListTypeRef, SetTypeRef, MapTypeRef)):
        return raw
    if isinstance(raw, str):
        return _parse_type_text(raw)
    if isinstance(raw, Mapping):
        name = raw.get('name')
        if not isinstance(name, str):
            raise SchemaError(f'invalid type reference: {raw!r}')
        container = name.lower()
        try:
            if container == 'list':
                return ListTypeRef(parse_type_ref(raw['valueType']))
            if container == 'set':
                return SetTypeRef(parse_type_ref(raw['valueType']))
            if container == 'map':
                return MapTypeRef(parse_type_ref(raw['keyType']), parse_type_ref(raw['valueType']))
        except KeyError as e:
            raise SchemaError(f'invalid type reference: {raw!r}') from e
        # XXX: the parser uses the same shape for named references in some contexts
        return _parse_type_text(name)
    raise SchemaError(f'invalid type reference: {raw!r}')


def _parse_type_text(text: str) -> TypeRef:
    text = text.strip()
    if not text:
        raise SchemaError('empty type reference')
    if '<' not in text:
        if '>' in text or ',' in text:
            raise SchemaError(f'invalid type reference: {text!r}')
        return text
    if not text.endswith('>'):
        raise SchemaError(f'invalid type reference: {text!r}')
    head, _, inner = text[:-1].partition('<')
    container = head.strip().lower()
    if container not in _CONTAINER_NAMES:
        raise SchemaError(f'invalid type reference: {text!r}')
    params = [_parse_type_text(i) for i in _split_params(inner, text)]
    if container == 'map':
        if len(params) != 2:
            raise SchemaError(f'expected map<<key type>, <value type>>, got {text!r}')
        return MapTypeRef(params[0], params[1])
    if len(params) != 1:
        raise SchemaError(f'expected {container}<<type>>, got {text!r}')
    if container == 'list':
        return ListTypeRef(params[0])
    return SetTypeRef(params[0])


def _split_params(inner: str, text: str) -> list[str]:
    """ Split the parameters of a container on the top-level commas only.

    >>> _split_params('string, map<i32, i64>', '')
    ['string', ' map<i32, i64>']
    """
    params: list[str] = []
    depth = 0
    start = 0
    for i, char in enumerate(inner):
        if char == '<':
            depth += 1
        elif char == '>':
            depth -= 1
            if depth < 0:
                raise SchemaError(f'unbalanced brackets in type reference: {text!r}')
        elif char == ',' and depth == 0:
            params.append(inner[start:i])
            start = i + 1
    if depth != 0:
        raise SchemaError(f'unbalanced brackets in type reference: {text!r}')
    params.append(inner[start:])
    return params
