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

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType as mappingproxy
from typing import TYPE_CHECKING, Any, Optional, Union

from structlog import get_logger

from thrift_schema.exception import MethodNotFound, SchemaError
from thrift_schema.types import FieldDef, ServiceMethod, TypeRef, parse_type_ref
from thrift_schema.utils.yaml import dict_from_yaml

if TYPE_CHECKING:
    from thrift_schema.conf.settings import CodecSettings

logger = get_logger()


def _empty_table() -> Mapping[Any, Any]:
    return mappingproxy({})


@dataclass(slots=True, frozen=True, kw_only=True)
class SchemaModel:
    """ Immutable tables of a parsed Thrift IDL document.

    Use `build_schema` to create one from the parser output. After construction nothing in it can change, so a single
    instance can be shared by any number of threads encoding and decoding at the same time.
    """
    typedefs: Mapping[str, TypeRef] = field(default_factory=_empty_table)
    structs: Mapping[str, tuple[FieldDef, ...]] = field(default_factory=_empty_table)
    exceptions: Mapping[str, tuple[FieldDef, ...]] = field(default_factory=_empty_table)
    enums: Mapping[str, frozenset[str]] = field(default_factory=_empty_table)
    # methods of each service block, keyed by service name
    services: Mapping[str, Mapping[str, ServiceMethod]] = field(default_factory=_empty_table)
    # all service blocks merged into one table, later blocks overwrite same-named methods of earlier ones
    service: Mapping[str, ServiceMethod] = field(default_factory=_empty_table)

    def get_fields(self, name: str) -> Optional[tuple[FieldDef, ...]]:
        """ Field layout of the struct or exception with the given name, structs take precedence.
        """
        fields = self.structs.get(name)
        if fields is None:
            fields = self.exceptions.get(name)
        return fields

    def get_method(self, name: str, *, service: Optional[str] = None) -> ServiceMethod:
        if service is None:
            methods = self.service
        else:
            if service not in self.services:
                raise MethodNotFound(f'Service "{service}" not found')
            methods = self.services[service]
        if name not in methods:
            raise MethodNotFound(f'Method "{name}" not found')
        return methods[name]


def build_schema(parsed: Mapping[str, Any], *, settings: Optional[CodecSettings] = None) -> SchemaModel:
    """ Build a SchemaModel from the output of the IDL parser.

    The expected input has the optional keys `typedef`, `struct`, `exception`, `enum` and `service`, each one mapping a
    declared name to its definition, like:

        {
            'typedef': {'MyInteger': {'type': 'i32'}},
            'struct': {'Work': [{'id': '1', 'name': 'num1', 'type': 'i32', 'option': 'required'}]},
            'enum': {'Operation': {'items': [{'name': 'ADD', 'value': 1}]}},
            'service': {'Calculator': {'add': {'type': 'i32', 'name': 'add', 'args': [...], 'throws': [...]}}},
        }
    """
    if settings is None:
        from thrift_schema.conf.get_settings import get_global_settings
        settings = get_global_settings()

    if not isinstance(parsed, Mapping):
        raise SchemaError('parsed schema must be a mapping')

    raw_services = parsed.get('service')
    if not raw_services and settings.REQUIRE_SERVICE:
        raise SchemaError('Service not found')

    typedefs = {name: _parse_typedef(name, raw) for name, raw in _section(parsed, 'typedef').items()}
    structs = {name: _parse_fields(name, raw) for name, raw in _section(parsed, 'struct').items()}
    exceptions = {name: _parse_fields(name, raw) for name, raw in _section(parsed, 'exception').items()}
    enums = {name: _parse_enum(name, raw) for name, raw in _section(parsed, 'enum').items()}

    services: dict[str, Mapping[str, ServiceMethod]] = {}
    service: dict[str, ServiceMethod] = {}
    for service_name, raw_methods in _section(parsed, 'service').items():
        methods = _parse_service(service_name, raw_methods)
        for method_name, method in methods.items():
            if method_name in service:
                if not settings.ALLOW_METHOD_OVERRIDE:
                    raise SchemaError(f'method "{method_name}" of service "{service_name}" is already declared')
                logger.warning('method overridden by a later service', method=method_name, service=service_name)
            service[method_name] = method
        services[service_name] = mappingproxy(methods)

    logger.debug(
        'schema built',
        typedefs=len(typedefs),
        structs=len(structs),
        exceptions=len(exceptions),
        enums=len(enums),
        services=len(services),
        methods=len(service),
    )

    return SchemaModel(
        typedefs=mappingproxy(typedefs),
        structs=mappingproxy(structs),
        exceptions=mappingproxy(exceptions),
        enums=mappingproxy(enums),
        services=mappingproxy(services),
        service=mappingproxy(service),
    )


def load_schema_dict(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """ Read a parser output previously stored as JSON (`.json`) or YAML (anything else).
    """
    if Path(filepath).suffix.lower() == '.json':
        with open(filepath, 'r') as file:
            contents = json.load(file)
        if not isinstance(contents, dict):
            raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")
        return contents
    return dict_from_yaml(filepath=filepath)


def _section(parsed: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = parsed.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise SchemaError(f'"{key}" section must be a mapping')
    return section


def _parse_typedef(name: str, raw: Any) -> TypeRef:
    # XXX: the parser wraps the target as {'type': ...}, but a bare target is also accepted
    if isinstance(raw, Mapping) and 'type' in raw:
        raw = raw['type']
    return parse_type_ref(raw)


def _parse_fields(name: str, raw: Any) -> tuple[FieldDef, ...]:
    if not isinstance(raw, (list, tuple)):
        raise SchemaError(f'fields of "{name}" must be a list')
    fields = tuple(FieldDef.from_parsed(i) for i in raw)
    seen: set[int] = set()
    for field_def in fields:
        if field_def.id in seen:
            raise SchemaError(f'duplicated field id {field_def.id} in "{name}"')
        seen.add(field_def.id)
    return fields


def _parse_enum(name: str, raw: Any) -> frozenset[str]:
    if isinstance(raw, Mapping):
        raw = raw.get('items', ())
    members: set[str] = set()
    for item in raw:
        if isinstance(item, Mapping):
            item = item.get('name')
        if not isinstance(item, str):
            raise SchemaError(f'invalid member of enum "{name}": {item!r}')
        members.add(item)
    return frozenset(members)


def _parse_service(name: str, raw: Any) -> dict[str, ServiceMethod]:
    if not isinstance(raw, Mapping):
        raise SchemaError(f'service "{name}" must be a mapping of methods')
    methods: dict[str, ServiceMethod] = {}
    for method_name, raw_method in raw.items():
        methods[method_name] = ServiceMethod.from_parsed(method_name, raw_method)
    return methods
