"""Provider-agnostic helper functions."""
