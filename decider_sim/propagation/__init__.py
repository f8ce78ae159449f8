from .interference import InterferenceAccumulator

__all__ = ["InterferenceAccumulator"]
