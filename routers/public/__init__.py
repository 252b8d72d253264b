from .interests import router as interests_router

__all__ = ['interests_router']
