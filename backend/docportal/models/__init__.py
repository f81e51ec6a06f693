from docportal.models.document import Document

__all__ = ["Document"]
