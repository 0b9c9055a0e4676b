from .provider import AccessProvider

__all__ = ["AccessProvider"]
