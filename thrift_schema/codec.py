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

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

from structlog import get_logger

from thrift_schema.decoder import Decoder
from thrift_schema.encoder import Encoder
from thrift_schema.resolver import ResolvedType, TypeResolver
from thrift_schema.schema import SchemaModel, build_schema, load_schema_dict
from thrift_schema.types import FieldDef, ServiceMethod
from thrift_schema.values import ThriftValue

if TYPE_CHECKING:
    from thrift_schema.conf.settings import CodecSettings

logger = get_logger()


class ThriftSchema:
    """ Schema-driven codec between host values and the canonical value tree.

    It is built once from the parser output and then only read, every method is a pure transformation of its
    arguments, so one instance can be shared freely.
    """

    def __init__(self, schema: SchemaModel, *, settings: Optional[CodecSettings] = None) -> None:
        if settings is None:
            from thrift_schema.conf.get_settings import get_global_settings
            settings = get_global_settings()
        self.log = logger.new()
        self._settings = settings
        self._schema = schema
        self._resolver = TypeResolver(schema)
        self._encoder = Encoder(self._resolver)
        self._decoder = Decoder(
            self._resolver,
            strict_kinds=settings.STRICT_KINDS,
            canonical_map_keys=settings.CANONICAL_MAP_KEYS,
        )

    @classmethod
    def from_parsed(cls, parsed: Mapping[str, Any], *, settings: Optional[CodecSettings] = None) -> ThriftSchema:
        """ Build the schema from the IDL parser output and wrap it.
        """
        if settings is None:
            from thrift_schema.conf.get_settings import get_global_settings
            settings = get_global_settings()
        return cls(build_schema(parsed, settings=settings), settings=settings)

    @classmethod
    def from_file(cls, filepath: Union[Path, str], *, settings: Optional[CodecSettings] = None) -> ThriftSchema:
        """ Like `from_parsed`, reading the parser output stored in a JSON or YAML file.
        """
        return cls.from_parsed(load_schema_dict(filepath=filepath), settings=settings)

    @property
    def schema(self) -> SchemaModel:
        return self._schema

    @property
    def settings(self) -> CodecSettings:
        return self._settings

    def resolve(self, type_ref: Any) -> ResolvedType:
        return self._resolver.resolve(type_ref)

    def check(self) -> None:
        """ Make sure every type reference in the schema resolves.
        """
        self._resolver.check()
        self.log.debug('all type references resolved')

    def encode_struct(self, fields: Sequence[FieldDef], record: Mapping[str, Any]) -> ThriftValue:
        return self._encoder.encode_struct(fields, record)

    def encode_value(self, value: Any, type_ref: Any) -> ThriftValue:
        return self._encoder.encode_value(value, type_ref)

    def decode_struct(self, value: ThriftValue, fields: Sequence[FieldDef]) -> dict[str, Any]:
        return self._decoder.decode_struct(value, fields)

    def decode_value(self, value: ThriftValue, type_ref: Any) -> Any:
        return self._decoder.decode_value(value, type_ref)

    def get_method(self, name: str, *, service: Optional[str] = None) -> ServiceMethod:
        return self._schema.get_method(name, service=service)

    def encode_args(self, method: str, params: Mapping[str, Any], *, service: Optional[str] = None) -> ThriftValue:
        """ Encode the arguments of a call as the method's argument struct.
        """
        return self.encode_struct(self.get_method(method, service=service).args, params)

    def decode_args(self, method: str, value: ThriftValue, *, service: Optional[str] = None) -> dict[str, Any]:
        return self.decode_struct(value, self.get_method(method, service=service).args)

    def encode_result(self, method: str, result: Mapping[str, Any], *, service: Optional[str] = None) -> ThriftValue:
        """ Encode the reply of a call, `result` is either `{'success': <value>}` or `{<exception field>: <record>}`.
        """
        return self.encode_struct(self.get_method(method, service=service).result_fields, result)

    def decode_result(self, method: str, value: ThriftValue, *, service: Optional[str] = None) -> dict[str, Any]:
        return self.decode_struct(value, self.get_method(method, service=service).result_fields)
