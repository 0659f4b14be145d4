from pdfchat.boundary.db.models.document_model import DocumentModel, DocumentStatus

__all__ = ["DocumentModel", "DocumentStatus"]
