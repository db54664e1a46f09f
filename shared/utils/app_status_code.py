class AppStatusCode:
    """Machine readable codes carried in every response envelope."""

    # success
    OPERATION_SUCCESSFUL = "100"
    DATA_RETRIEVED_SUCCESSFULLY = "101"
    CREATED_SUCCESSFULLY = "102"
    UPDATED_SUCCESSFULLY = "103"
    DELETED_SUCCESSFULLY = "104"

    # generic failures
    OPERATION_FAILED = "200"
    OPERATION_ERROR = "201"
    INVALID_INPUT = "202"
    DATA_NOT_FOUND = "203"
    DUPLICATE_ADD_ERROR = "204"
    INVALID_STATE = "205"
    CONFLICT = "206"

    # authentication / authorization
    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    AUTHENTICATION_USER_INVALID = "302"
    AUTHENTICATION_USER_INACTIVE = "303"
    AUTHENTICATION_INVALID_CREDENTIALS = "304"
    AUTHORIZATION_FORBIDDEN = "305"
