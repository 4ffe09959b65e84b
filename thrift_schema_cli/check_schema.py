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

from argparse import ArgumentParser, Namespace

from structlog import get_logger

logger = get_logger()


def create_parser() -> ArgumentParser:
    from thrift_schema_cli.util import add_schema_arguments, create_parser
    parser = create_parser()
    add_schema_arguments(parser)
    return parser


def execute(args: Namespace) -> int:
    from thrift_schema import ThriftSchemaError
    from thrift_schema_cli.util import load_codec

    log = logger.new()
    try:
        codec = load_codec(args)
        codec.check()
    except ThriftSchemaError as e:
        log.error('invalid schema', schema=args.schema, error=str(e))
        return 1

    schema = codec.schema
    print('typedefs:   {}'.format(len(schema.typedefs)))
    print('structs:    {}'.format(len(schema.structs)))
    print('exceptions: {}'.format(len(schema.exceptions)))
    print('enums:      {}'.format(len(schema.enums)))
    for service_name, methods in schema.services.items():
        print('service {}: {}'.format(service_name, ', '.join(methods.keys())))
    return 0


def main():
    parser = create_parser()
    args = parser.parse_args()
    return execute(args)
