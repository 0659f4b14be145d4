from .error_handling import error_response, handle_api_errors
from .ingestion_utils import run_ingestion_background

__all__ = ["error_response", "handle_api_errors", "run_ingestion_background"]
