from .purchase import Purchase

__all__ = ["Purchase"]
