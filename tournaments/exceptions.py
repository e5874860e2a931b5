from rest_framework.exceptions import APIException


class UploadError(Exception):
    """A results file or row could not be read"""
    pass


class InvalidUploadError(APIException):

    def __init__(self, detail):
        self.status_code = 400
        self.detail = detail


class ManualPointsError(APIException):

    def __init__(self):
        self.status_code = 400
        self.detail = "Manually assigned points must be supplied for every player, with a position"
