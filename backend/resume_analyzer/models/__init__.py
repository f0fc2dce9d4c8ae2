from .resume import Resume

__all__ = ["Resume"]
