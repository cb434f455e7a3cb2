"""Error codes and user-facing messages.

Each entry in the catalog has:
- code: Unique identifier
- message: Message returned to the caller in the ``error`` field
- retry_allowed: Whether the caller may retry the same request
"""

ERROR_CATALOG: dict[str, dict] = {
    # Authentication
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Invalid credentials",
        "retry_allowed": True,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Missing or invalid Authorization header",
        "retry_allowed": False,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "Invalid or expired token",
        "retry_allowed": False,
    },
    "OTP_001": {
        "code": "OTP_001",
        "message": "Invalid OTP",
        "retry_allowed": True,
    },
    "IDP_001": {
        "code": "IDP_001",
        "message": "Invalid identity token",
        "retry_allowed": False,
    },
    # Resources (ownership mismatches are reported as not found)
    "RES_001": {
        "code": "RES_001",
        "message": "Subscription not found",
        "retry_allowed": False,
    },
    "RES_002": {
        "code": "RES_002",
        "message": "Category not found or cannot be modified",
        "retry_allowed": False,
    },
    "RES_003": {
        "code": "RES_003",
        "message": "Preferences not found",
        "retry_allowed": False,
    },
    "RES_004": {
        "code": "RES_004",
        "message": "User not found",
        "retry_allowed": False,
    },
    "RES_005": {
        "code": "RES_005",
        "message": "Subscription template not found",
        "retry_allowed": False,
    },
    "RES_006": {
        "code": "RES_006",
        "message": "Device not found",
        "retry_allowed": False,
    },
    # Uploads
    "UPL_001": {
        "code": "UPL_001",
        "message": "No file provided",
        "retry_allowed": False,
    },
    "UPL_002": {
        "code": "UPL_002",
        "message": "Invalid file type",
        "retry_allowed": False,
    },
    "UPL_003": {
        "code": "UPL_003",
        "message": "File size exceeds limit",
        "retry_allowed": False,
    },
    # Upstream providers
    "UPS_001": {
        "code": "UPS_001",
        "message": "Failed to send OTP",
        "retry_allowed": True,
    },
    "UPS_002": {
        "code": "UPS_002",
        "message": "Failed to verify OTP",
        "retry_allowed": True,
    },
    "UPS_003": {
        "code": "UPS_003",
        "message": "Failed to create checkout session",
        "retry_allowed": True,
    },
    "UPS_004": {
        "code": "UPS_004",
        "message": "Failed to store file",
        "retry_allowed": True,
    },
    "UPS_005": {
        "code": "UPS_005",
        "message": "Identity provider unavailable",
        "retry_allowed": True,
    },
    # Generic
    "VAL_001": {
        "code": "VAL_001",
        "message": "Invalid input data",
        "retry_allowed": True,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic definition instead of raising.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_message(error_code: str) -> str:
    return get_error(error_code)["message"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]
