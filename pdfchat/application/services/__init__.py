from pdfchat.application.services.chat_service import ChatService
from pdfchat.application.services.document_service import DeletionReport, DocumentService

__all__ = ["ChatService", "DeletionReport", "DocumentService"]
