"""Language detection over the signature pattern catalog."""

from .classifier import detect, rank, score

__all__ = ["detect", "rank", "score"]
