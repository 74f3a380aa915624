"""
Programs API Module
===================

Radio program API organized by concern:
- schedule.py: Read-only schedule views (day, now, weekly, station, conflicts)
- programs.py: Program lookup, search, stats and write operations
"""

from flask import Blueprint

from app.utils.http import error_response

# Create blueprint here to avoid circular imports
programs_api = Blueprint("programs_api", __name__)


# Error handlers
@programs_api.errorhandler(404)
def not_found(error):
    """Handle 404 errors"""
    return error_response("Resource not found", 404)


@programs_api.errorhandler(500)
def internal_error(error):
    """Handle 500 errors"""
    return error_response("Internal server error", 500)


# Import submodules to register routes (must be after blueprint creation)
from . import programs, schedule  # noqa: E402

__all__ = ["programs_api"]
