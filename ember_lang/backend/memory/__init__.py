"""Scope and storage management for code generation."""
from ember_lang.backend.memory.scopes import (
    Binding,
    Frame,
    FunctionSymbol,
    ScopeManager,
    StorageSlot,
)

__all__ = ['Binding', 'Frame', 'FunctionSymbol', 'ScopeManager', 'StorageSlot']
