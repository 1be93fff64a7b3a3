"""Model routing package."""

from .router import ModelRouter, resolve_credential, resolve_target, split_model

__all__ = ["ModelRouter", "resolve_target", "resolve_credential", "split_model"]
