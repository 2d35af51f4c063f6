"""Unique id generation for purchases and approvals."""

import time
import uuid


def generate_id() -> str:
    """
    Return '<epoch-ms>-<32 hex chars>'. The millisecond prefix keeps ids
    roughly time-ordered; the uuid4 suffix keeps ids generated within the
    same millisecond distinct.
    """
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}"
