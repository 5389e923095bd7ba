from .normalize import coerce_values, split_interleaved

__all__ = ["coerce_values", "split_interleaved"]
