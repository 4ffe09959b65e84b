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
Schema-driven codec between host values and the canonical value tree of the Thrift type system.
"""

from thrift_schema.codec import ThriftSchema
from thrift_schema.decoder import Decoder
from thrift_schema.encoder import Encoder
from thrift_schema.exception import (
    CyclicTypedef,
    MethodNotFound,
    RequiredFieldMissing,
    SchemaError,
    ThriftSchemaError,
    TypeMismatch,
    UnknownType,
)
from thrift_schema.resolver import ResolvedType, TypeResolver
from thrift_schema.schema import SchemaModel, build_schema, load_schema_dict
from thrift_schema.types import (
    FieldDef,
    ListTypeRef,
    MapTypeRef,
    Presence,
    ServiceMethod,
    SetTypeRef,
    TType,
    TypeRef,
    parse_type_ref,
)
from thrift_schema.values import ListPayload, MapEntry, MapPayload, StructPayload, ThriftField, ThriftValue
from thrift_schema.version import __version__

__all__ = [
    'ThriftSchema',
    'Decoder',
    'Encoder',
    'CyclicTypedef',
    'MethodNotFound',
    'RequiredFieldMissing',
    'SchemaError',
    'ThriftSchemaError',
    'TypeMismatch',
    'UnknownType',
    'ResolvedType',
    'TypeResolver',
    'SchemaModel',
    'build_schema',
    'load_schema_dict',
    'FieldDef',
    'ListTypeRef',
    'MapTypeRef',
    'Presence',
    'ServiceMethod',
    'SetTypeRef',
    'TType',
    'TypeRef',
    'parse_type_ref',
    'ListPayload',
    'MapEntry',
    'MapPayload',
    'StructPayload',
    'ThriftField',
    'ThriftValue',
    '__version__',
]
