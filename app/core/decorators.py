# medhub/app/core/decorators.py
from functools import wraps

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse


def staff_required(view_func):
    """ Decorator to ensure the user is logged in AND is a staff member. """
    @login_required
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_staff:
            return JsonResponse(
                {'success': False, 'error': 'You do not have permission to access this resource.'},
                status=403
            )
        return view_func(request, *args, **kwargs)
    return _wrapped_view
