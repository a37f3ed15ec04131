"""
ID generation for playground results.

Generation results get a process-unique id; comparison summaries share a
single fixed id so collaborators can recognise them.
"""

import itertools
import time
import uuid


SUMMARY_RESULT_ID = "summary"

_sequence = itertools.count()


def generate_result_id() -> str:
    """
    Generate a process-unique result id.

    The id combines the wall clock in milliseconds, a process-local
    sequence number and a short random suffix, e.g.
    ``1718000000000-3-9f2c1a7e``.

    Returns:
        Result id string
    """
    millis = int(time.time() * 1000)
    return f"{millis}-{next(_sequence)}-{uuid.uuid4().hex[:8]}"


def is_summary_id(result_id: str) -> bool:
    """Check whether an id marks a comparison summary."""
    return result_id == SUMMARY_RESULT_ID
