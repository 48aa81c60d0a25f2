"""Ember: LLVM code generation for a small fixed-width integer language."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ember-lang")
except PackageNotFoundError:
    # Running from a source checkout without an install
    __version__ = "0.0.0+local"
