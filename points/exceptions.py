from rest_framework.exceptions import APIException


class ConfigurationError(Exception):
    """
    Raised when a points configuration cannot produce a valid ranking: a
    category is missing or unknown, positions have gaps, or points increase
    with position.
    """
    pass


class InvalidPointsConfigError(APIException):

    def __init__(self, detail):
        self.status_code = 400
        self.detail = detail
