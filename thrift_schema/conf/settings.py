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

from pathlib import Path
from typing import Union

from thrift_schema.utils.pydantic import BaseModel
from thrift_schema.utils.yaml import dict_from_extended_yaml


class CodecSettings(BaseModel):
    # Re-serialize composite map keys with sorted object keys, otherwise the decoded field order is kept.
    CANONICAL_MAP_KEYS: bool = True

    # Whether a method redeclared by a later service block silently replaces the earlier one in the flat table.
    ALLOW_METHOD_OVERRIDE: bool = True

    # Whether the parsed IDL must contain at least one service block.
    REQUIRE_SERVICE: bool = True

    # Whether the decoder checks the kind tags of canonical values against the kinds resolved from the schema.
    STRICT_KINDS: bool = True

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)

        return cls.model_validate(settings_dict)
