"""
Recording handlers for monitored events.

Exports:
- HandlerAdapter: Exact-signature recording handler bound to one recorder
- build_recording_handler: Arity dispatch producing recording closures
- get_handler_name: Utility to get a handler's name for logging
"""

from eventmonitor.handlers.adapter import (
    HandlerAdapter,
    RecordFunc,
    SupportsRecord,
    build_recording_handler,
    get_handler_name,
)

__all__ = [
    "HandlerAdapter",
    "RecordFunc",
    "SupportsRecord",
    "build_recording_handler",
    "get_handler_name",
]
