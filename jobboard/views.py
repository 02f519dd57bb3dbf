"""
Project-level views.
"""
from rest_framework.decorators import api_view
from rest_framework.response import Response

from jobs.models import JobPosting, JobPreference
from profiles.models import ProfileUpdateRequest


@api_view(['GET'])
def dashboard(request):
    """Main dashboard view."""
    user = request.user
    pending = ProfileUpdateRequest.objects.filter(status=ProfileUpdateRequest.Status.PENDING)

    data = {
        'message': f"Welcome {user.name or user.username}, Role: {user.role}",
        'role': user.role,
        'job_count': JobPosting.objects.filter(user=user).count(),
        'preference_count': JobPreference.objects.filter(user=user).count(),
        'pending_request_count': pending.filter(user=user).count(),
    }
    if user.is_admin:
        data['review_queue_count'] = pending.count()

    return Response(data)
