"""Top-level package for the FileFinch format detector."""

from importlib import metadata as _metadata

from .detection import FileType, detect, detect_from_path

__all__ = ["FileType", "detect", "detect_from_path", "__version__"]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("filefinch")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
