from . import states

__all__ = ["states"]
