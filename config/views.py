from django.http import JsonResponse
from django.utils import timezone


def health_check(request):
    """Liveness probe."""
    return JsonResponse({
        'success': True,
        'message': 'Server is running',
        'data': {'timestamp': timezone.now().isoformat()},
    })


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'success': False,
        'message': 'Route not found',
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'success': False,
        'message': 'Internal server error',
    }, status=500)
