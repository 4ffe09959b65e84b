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

import json
from argparse import ArgumentParser, Namespace

from structlog import get_logger

logger = get_logger()


def create_parser() -> ArgumentParser:
    from thrift_schema_cli.util import add_io_arguments, add_schema_arguments, create_parser
    parser = create_parser()
    add_schema_arguments(parser)
    add_io_arguments(parser)
    return parser


def execute(args: Namespace) -> int:
    from thrift_schema import ThriftSchemaError, ThriftValue
    from thrift_schema_cli.util import check_or_exit, load_codec, print_json

    log = logger.new()
    codec = load_codec(args)
    document = json.load(args.input)
    check_or_exit(isinstance(document, dict), 'expected a JSON object with "type" and "value"')
    try:
        value = ThriftValue.from_json(document)
    except ValueError as e:
        log.error('invalid canonical value', error=str(e))
        return 1
    try:
        decoded = codec.decode_value(value, args.type)
    except ThriftSchemaError as e:
        log.error('cannot decode value', type=args.type, error=str(e))
        return 1
    print_json(decoded, indent=args.indent)
    return 0


def main():
    parser = create_parser()
    args = parser.parse_args()
    return execute(args)
