"""Bearer token issuing service.

Exposes the installed distribution version as ``__version__`` when the
project is installed; falls back to a placeholder in a bare checkout.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("token_issuer")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
