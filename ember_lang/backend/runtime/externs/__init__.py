"""External C library declarations."""
from ember_lang.backend.runtime.externs.libc_stdio import LibCStdio

__all__ = ["LibCStdio"]
