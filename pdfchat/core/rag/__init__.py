"""Retrieval-augmented answering and question suggestions."""

from pdfchat.core.rag.answer_assembler import AnswerAssembler
from pdfchat.core.rag.suggestions import SuggestionService

__all__ = ["AnswerAssembler", "SuggestionService"]
