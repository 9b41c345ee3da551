from __future__ import annotations
import logging
from collections import deque
from datetime import datetime
from typing import List, Dict, Optional

_buffer = deque(maxlen=5000)


class _MemoryHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        _buffer.append({
            "time": datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S"),
            "level": record.levelname, "name": record.name, "message": record.getMessage(),
        })


_handler: Optional[_MemoryHandler] = None


def get_logger(name: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """Logger med minnebuffer (for loggvisning). Bufferen henger på rot-loggeren,
    slik at modul-loggere (``logging.getLogger(__name__)``) også havner der."""
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = _MemoryHandler()
        root.addHandler(_handler)
        if root.level == logging.NOTSET or root.level > level:
            root.setLevel(level)
    return logging.getLogger(name)


def get_buffer() -> List[Dict]: return list(_buffer)
def clear_buffer() -> None: _buffer.clear()
