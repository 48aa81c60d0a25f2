"""Runtime support declarations for generated modules."""
from ember_lang.backend.runtime.core import LLVMRuntime

__all__ = ["LLVMRuntime"]
