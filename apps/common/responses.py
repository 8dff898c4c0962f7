from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(data=None, message=None, status=http_status.HTTP_200_OK):
    """
    Build a success response in the uniform envelope.

    Shape: ``{"success": true, "message"?: str, "data"?: object}``.
    """
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return Response(body, status=status)
