"""
Shared OpenAPI response documentation for v1 routers.
"""
from app.api.v1.models.responses import ErrorResponse

RATE_LIMITED = {
    429: {
        "description": "Rate limit exceeded",
    }
}

NOT_FOUND = {
    404: {
        "model": ErrorResponse,
        "description": "Record not found",
    }
}

SERVER_ERROR = {
    500: {
        "model": ErrorResponse,
        "description": "Internal server error or field-data API failure",
    }
}
