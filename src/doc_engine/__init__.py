"""doc-engine: documentation compliance scanner and spec toolkit."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("doc-engine")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

TOOL_NAME = "doc-engine"
