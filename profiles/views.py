"""
Profiles app views

Profile editing for users and the admin review queue.
"""
from django.core.exceptions import ValidationError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminRole

from .serializers import ProfileSerializer, ProfileUpdateRequestSerializer
from .services import (
    ProfileRequestNotFound,
    ProfileUpdateService,
    ProfileWorkflowError,
)


class ProfileView(APIView):
    """
    The authenticated user's own profile.

    GET /api/users/profile/ - Profile plus whether an edit awaits review
    PUT /api/users/profile/ - Submit name/state/profile_pic for approval
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        pending = ProfileUpdateService.latest_pending(request.user)
        serializer = ProfileSerializer(request.user, context={'pending_request': pending})
        return Response(serializer.data)

    def put(self, request):
        try:
            ProfileUpdateService.submit_update(request.user, request.data)
        except PermissionError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ValidationError as e:
            return Response({'message': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)
        except ProfileWorkflowError as e:
            return Response({'message': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({'message': 'Profile update submitted for admin approval.'})


class ProfilePictureView(APIView):
    """
    DELETE /api/users/profile/picture/
    """

    permission_classes = [IsAuthenticated]

    def delete(self, request):
        try:
            ProfileUpdateService.delete_profile_picture(request.user)
        except PermissionError as e:
            return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ProfileWorkflowError as e:
            return Response({'message': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({'message': 'Profile picture deleted.'})


class ProfileUpdateRequestViewSet(viewsets.GenericViewSet):
    """
    Admin review queue for profile updates.

    - GET: Pending requests with the owning user's profile
    - PUT {id}/approve/: Apply the staged changes
    - PUT {id}/decline/: Discard the staged changes, with optional reason
    """

    serializer_class = ProfileUpdateRequestSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        return ProfileUpdateService.list_pending()

    def list(self, request):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['put'])
    def approve(self, request, pk=None):
        """
        PUT /api/admin/profile-requests/{id}/approve/
        """
        try:
            ProfileUpdateService.approve(pk, request.user)
        except ProfileRequestNotFound as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ProfileWorkflowError as e:
            return Response({'message': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({'message': 'Profile update approved and applied.'})

    @action(detail=True, methods=['put'])
    def decline(self, request, pk=None):
        """
        PUT /api/admin/profile-requests/{id}/decline/  {"reason": "..."}
        """
        reason = request.data.get('reason') or ''
        try:
            ProfileUpdateService.decline(pk, request.user, reason=reason)
        except ProfileRequestNotFound as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ProfileWorkflowError as e:
            return Response({'message': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({'message': 'Profile update declined.'})
