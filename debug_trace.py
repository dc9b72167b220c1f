"""
debug_trace.py

Debug instrumentation for layout and hit-testing.
Enable by setting GLYPHLAYOUT_TRACE=1 in the environment.
"""

import atexit
import os
import sys
import traceback
from datetime import datetime
from functools import wraps

# Set GLYPHLAYOUT_TRACE=1 to enable debug tracing
DEBUG_TRACE = os.environ.get("GLYPHLAYOUT_TRACE", "") == "1"

# Set GLYPHLAYOUT_TRACE_GEOM=1 to trace every geometry computation (very verbose)
TRACE_GEOM = os.environ.get("GLYPHLAYOUT_TRACE_GEOM", "") == "1"

# Log file (None for stderr only)
LOG_FILE = os.environ.get("GLYPHLAYOUT_TRACE_FILE", "glyphlayout_debug.log") or None

_log_file = None


def _get_log_file():
    global _log_file
    if LOG_FILE and _log_file is None:
        try:
            _log_file = open(LOG_FILE, "w", encoding="utf-8")
            atexit.register(close_log)
        except OSError:
            print(f"[trace] cannot open {LOG_FILE}, tracing to stderr only", file=sys.stderr)
    return _log_file


def trace(msg: str, category: str = "INFO"):
    """Print a trace message with timestamp."""
    if not DEBUG_TRACE:
        return
    if category == "GEOM" and not TRACE_GEOM:
        return

    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    line = f"[{timestamp}] [{category}] {msg}"

    print(line, file=sys.stderr, flush=True)

    log_file = _get_log_file()
    if log_file:
        log_file.write(line + "\n")
        log_file.flush()


def trace_exception(msg: str = "Exception"):
    """Print exception info."""
    if not DEBUG_TRACE:
        return
    trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def trace_call(category: str = "CALL"):
    """Decorator to trace function calls."""
    def decorator(func):
        if not DEBUG_TRACE:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__qualname__
            trace(f">>> {func_name}", category)
            try:
                result = func(*args, **kwargs)
                trace(f"<<< {func_name}", category)
                return result
            except Exception as e:
                trace(f"!!! {func_name} raised {type(e).__name__}: {e}", "ERROR")
                raise
        return wrapper
    return decorator


def close_log():
    """Close log file."""
    global _log_file
    if _log_file:
        _log_file.close()
        _log_file = None
