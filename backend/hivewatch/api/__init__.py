from hivewatch.api.routes import router

__all__ = ["router"]
