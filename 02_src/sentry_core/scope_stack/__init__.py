"""ScopeStack module."""

from .stack import IScopeHandle, NoOpScopeHandle, ScopeHandle, ScopeStack

__all__ = ["IScopeHandle", "NoOpScopeHandle", "ScopeHandle", "ScopeStack"]
