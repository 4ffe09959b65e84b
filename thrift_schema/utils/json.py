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
from typing import Any


def json_dumps(obj: object, *, sort_keys: bool = False) -> str:
    """Compact formating obj as JSON to UTF-8 encoded string.

    >>> json_dumps({'b': 1, 'a': [1, 2]})
    '{"b":1,"a":[1,2]}'
    >>> json_dumps({'b': 1, 'a': [1, 2]}, sort_keys=True)
    '{"a":[1,2],"b":1}'
    """
    return json.dumps(obj, separators=(',', ':'), ensure_ascii=False, sort_keys=sort_keys)


def json_loads(raw: str) -> Any:
    return json.loads(raw)
