from .sale import Sale

__all__ = ["Sale"]
