"""Get the source location an exception was raised from."""

import traceback

__all__ = ["get_error_path"]


def get_error_path(err: BaseException) -> str:
    """Extract a short source location from an exception's traceback.

    Paths inside the taskhub package are shortened to start at ``taskhub``.

    Args:
        err: The exception carrying traceback information

    Returns:
        A string in the format ``filename:line (fn:function_name)``, or
        ``unknown`` when the exception was never raised.
    """
    frames = traceback.extract_tb(err.__traceback__)
    if not frames:
        return "unknown"

    filename, line, func, _ = frames[-1]
    if "taskhub" in filename:
        filename = "taskhub" + filename.split("taskhub")[-1]
    return f"{filename}:{line} (fn:{func})"
