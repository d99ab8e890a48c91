class ErrorCode:
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"

    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    CANNOT_DELETE_SELF = "CANNOT_DELETE_SELF"

    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    COURSE_ACCESS_DENIED = "COURSE_ACCESS_DENIED"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    INVALID_FILE = "INVALID_FILE"

    CART_ITEM_EXISTS = "CART_ITEM_EXISTS"

    COURSE_CONTENT_NOT_FOUND = "COURSE_CONTENT_NOT_FOUND"
    COURSE_CONTENT_EXISTS = "COURSE_CONTENT_EXISTS"

    ACCESS_KEY_NOT_FOUND = "ACCESS_KEY_NOT_FOUND"
    ACCESS_KEY_EXISTS = "ACCESS_KEY_EXISTS"
    ACCESS_KEY_INACTIVE = "ACCESS_KEY_INACTIVE"
    ACCESS_KEY_EXPIRED = "ACCESS_KEY_EXPIRED"
    ACCESS_KEY_USAGE_EXCEEDED = "ACCESS_KEY_USAGE_EXCEEDED"

    NOTICE_NOT_FOUND = "NOTICE_NOT_FOUND"
