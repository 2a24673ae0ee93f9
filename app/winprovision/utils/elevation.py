"""Administrative privilege detection."""

import ctypes
import os


def is_admin() -> bool:
    """Check whether the current process runs with administrative rights.

    Returns:
        True when elevated on Windows; always False elsewhere.
    """
    if os.name != "nt":
        return False
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
    except (AttributeError, OSError):
        return False
