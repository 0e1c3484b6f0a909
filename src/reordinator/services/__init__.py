from reordinator.services.document_service import DocumentService

__all__ = ["DocumentService"]
