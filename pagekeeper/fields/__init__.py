from pagekeeper.fields.base import PyObjectId

__all__ = ["PyObjectId"]
