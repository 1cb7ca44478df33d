"""Azure Resource Manager REST client."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("az-arm-client")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
