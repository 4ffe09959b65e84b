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
This module contains the exceptions raised by the schema model and by the encoder/decoder.

Every failure is synchronous and final for the current call: nothing partially built is returned to the caller, a
failure always means the given value does not match the given schema (or the schema itself is malformed).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class ThriftSchemaError(Exception):
    """Base class for exceptions in thrift_schema."""
    pass


class SchemaError(ThriftSchemaError):
    """Raised when the parsed IDL cannot be turned into a schema model."""
    pass


class CyclicTypedef(SchemaError):
    """Raised when following a typedef chain comes back to an alias that was already visited."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__('cyclic typedef: {}'.format(' -> '.join(self.chain)))


class UnknownType(ThriftSchemaError):
    """Raised when a type reference does not resolve to any known kind."""

    def __init__(self, type_ref: Any) -> None:
        self.type_ref = type_ref
        super().__init__(f'Error Type "{type_ref}"')


class RequiredFieldMissing(ThriftSchemaError):
    """Raised when decoding a struct that has no entry for a required field."""

    def __init__(self, field_name: str, struct_name: str | None = None) -> None:
        self.field_name = field_name
        self.struct_name = struct_name
        super().__init__(f'Required field "{field_name}" not found')


class TypeMismatch(ThriftSchemaError):
    """Raised when a value (host or canonical) does not have the shape its type reference requires."""
    pass


class MethodNotFound(ThriftSchemaError):
    """Raised when a service method is not declared in the schema."""
    pass
