"""
Application status codes embedded in JSON response bodies.

Legacy media library clients read ``statusCode`` from the payload instead of
the HTTP status, so these values travel alongside a plain 200 response.
"""


class StatusCode:
    OK = 200
    NOT_FOUND = 404
    INVALID_FILE = 505
    MEDIA_LIB_PACKAGE_NOT_FOUND = 523
    MEDIA_LIB_CATEGORY_NOT_FOUND = 524
