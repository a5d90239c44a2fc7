"""Structured (JSON) renderer for demo results."""

import json
from typing import Union

from ..hashing.demo import Sha256DemoResult
from ..rsa.demo import RsaDemoResult


def render_json(result: Union[RsaDemoResult, Sha256DemoResult], indent: int = 2) -> str:
    """
    Serialize a demo result, steps included, to JSON.

    Integers are emitted as JSON numbers at full precision.
    """
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)
