from .stats import StatsMaintainer

__all__ = ["StatsMaintainer"]
