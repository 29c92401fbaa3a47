"""
Command Line Interface for PyFastResample

Command line utilities for resampling image files without writing Python
scripts.

Available Commands:
- resample: Resample an image file with a chosen filter (pfr-resample)
- filters: List the recognised filter strings (pfr-filters)

Author: B.G.
"""

_CLI_SUBMODULES = {
    "resample": (".resample_commands", "resample"),
    "filters": (".resample_commands", "filters"),
}

__all__ = list(_CLI_SUBMODULES.keys())


def __getattr__(name):
    info = _CLI_SUBMODULES.get(name)
    if info is None:
        raise AttributeError(name)
    pkg, attr = info
    import importlib
    mod = importlib.import_module(pkg, __package__)
    obj = getattr(mod, attr)
    globals()[name] = obj
    return obj
