"""reflectkit - cached reflection and dynamic invocation for Python classes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("reflectkit")
except PackageNotFoundError:
    __version__ = "(local)"
