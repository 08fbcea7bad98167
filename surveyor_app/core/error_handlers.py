"""JSON error handler views for Django error pages."""

from django.http import HttpRequest, JsonResponse


def json_page_not_found_view(request: HttpRequest, exception=None) -> JsonResponse:
    """Custom 404 error handler."""
    return JsonResponse({"message": "Not found"}, status=404)


def json_server_error_view(request: HttpRequest) -> JsonResponse:
    """Custom 500 error handler."""
    return JsonResponse({"message": "Internal server error"}, status=500)
