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

import copy
import unittest
from typing import Any, Optional

from structlog import get_logger

from thrift_schema import ThriftSchema
from thrift_schema.conf.settings import CodecSettings
from thrift_schema_tests.utils import TUTORIAL_SCHEMA

logger = get_logger()


class TestCase(unittest.TestCase):
    """ Base class for the tests that need a codec, `self.codec` is built from the tutorial schema.
    """

    def setUp(self) -> None:
        self.log = logger.new()
        self.settings = CodecSettings()
        self.codec = self.create_codec()

    def create_codec(self, parsed: Optional[dict[str, Any]] = None, **settings: Any) -> ThriftSchema:
        """ Build a codec, `settings` override the defaults, like `create_codec(STRICT_KINDS=False)`.
        """
        if parsed is None:
            parsed = copy.deepcopy(TUTORIAL_SCHEMA)
        return ThriftSchema.from_parsed(parsed, settings=CodecSettings(**settings))

    def assertRoundTrip(self, value: Any, type_ref: Any) -> None:
        encoded = self.codec.encode_value(value, type_ref)
        self.assertEqual(self.codec.decode_value(encoded, type_ref), value)
