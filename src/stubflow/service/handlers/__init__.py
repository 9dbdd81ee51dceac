from .http_operations import router as operations_router

__all__ = ["operations_router"]
