"""
Accounts app views

ViewSet and endpoints for user management and authentication.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from rest_framework import viewsets, status
from rest_framework.authtoken.models import Token
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from .models import User
from .permissions import IsAdminOrSelf, IsAdminRole
from .serializers import (
    IdListSerializer,
    SelfUserSerializer,
    UserActiveSerializer,
    UserSerializer,
)
from .services import AccountExistsError, AccountService

logger = logging.getLogger(__name__)


class UserViewSet(viewsets.ModelViewSet):
    """
    ViewSet for User management.

    - List/create/delete/activate/bulk-delete: Admin role only
    - Retrieve/update: Admin or self only
    - Special 'me' endpoint for current user
    """

    queryset = User.objects.all()
    serializer_class = UserSerializer

    def get_permissions(self):
        """
        Instantiate and return the list of permissions that this view requires.
        """
        if self.action in ['list', 'create', 'destroy', 'active', 'bulk_delete']:
            permission_classes = [IsAuthenticated, IsAdminRole]
        elif self.action == 'me':
            permission_classes = [IsAuthenticated]
        else:
            permission_classes = [IsAuthenticated, IsAdminOrSelf]
        return [permission() for permission in permission_classes]

    def get_serializer_class(self):
        if self.action in ['update', 'partial_update'] and not getattr(self.request.user, 'is_admin', False):
            return SelfUserSerializer
        return UserSerializer

    def get_queryset(self):
        """
        The admin user listing never includes other admins.
        """
        queryset = User.objects.all().order_by('date_joined')
        if self.action == 'list':
            return queryset.exclude(role=User.ADMIN)
        return queryset

    def list(self, request, *args, **kwargs):
        try:
            return super().list(request, *args, **kwargs)
        except DatabaseError:
            logger.exception("Failed to fetch users")
            return Response(
                {'message': 'Failed to fetch users.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def destroy(self, request, *args, **kwargs):
        """
        DELETE /api/users/{id}/
        """
        user = self.get_object()
        try:
            user.delete()
        except DatabaseError:
            logger.exception("Failed to delete user %s", user.pk)
            return Response(
                {'message': 'Failed to delete user.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'message': 'User deleted.'})

    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        Return the current authenticated user's data.

        GET /api/users/me/
        """
        serializer = self.get_serializer(request.user)
        return Response(serializer.data)

    @action(detail=True, methods=['patch'])
    def active(self, request, pk=None):
        """
        Activate or deactivate a user.

        PATCH /api/users/{id}/active/  {"active": false}
        """
        payload = UserActiveSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {'message': 'Invalid value for active'},
                status=status.HTTP_400_BAD_REQUEST
            )

        user = self.get_object()
        user.is_active = payload.validated_data['active']
        try:
            user.save(update_fields=['is_active'])
        except DatabaseError:
            logger.exception("Failed to update status of user %s", user.pk)
            return Response(
                {'message': 'Failed to update user status.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'message': 'User status updated.'})

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        """
        Delete several users at once.

        POST /api/users/bulk-delete/  {"ids": [...]}
        """
        payload = IdListSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {'message': 'No user IDs provided.'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            User.objects.filter(
                pk__in=payload.validated_data['ids']
            ).exclude(role=User.ADMIN).delete()
        except DatabaseError:
            logger.exception("Bulk user delete failed")
            return Response(
                {'message': 'Failed to bulk delete users.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'message': 'Selected users deleted.'})


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """
    Self-service registration for employers and job seekers.

    POST /api/users/register/
    """
    try:
        AccountService.register(request.data)
    except ValidationError as e:
        return Response({'error': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)
    except PermissionError as e:
        return Response({'message': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except AccountExistsError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except DatabaseError:
        logger.exception("Registration failed")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(
        {'message': 'User registered successfully'},
        status=status.HTTP_201_CREATED
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Exchange email and password for an API token.

    POST /api/users/login/
    """
    email = request.data.get('email')
    password = request.data.get('password')
    if not email or not password:
        return Response(
            {'error': 'Email and password are required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    user = AccountService.authenticate_email(request, email, password)
    if user is None:
        return Response({'error': 'Invalid credentials'}, status=status.HTTP_401_UNAUTHORIZED)

    token, _ = Token.objects.get_or_create(user=user)
    return Response({'token': token.key, 'user': UserSerializer(user).data})
