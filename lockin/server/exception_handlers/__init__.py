"""
Exception handlers for the Lock In server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from .domain_handler import lockin_error_handler
from .global_handler import global_exception_handler, setup_exception_handlers

__all__ = ["global_exception_handler", "lockin_error_handler", "setup_exception_handlers"]
