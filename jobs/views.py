"""
Jobs app views

ViewSets for categories, job postings and job preferences.
"""
import logging

from django.db import DatabaseError
from django.db.models import Count, ProtectedError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import CanPostJobs, IsAdminRole, IsOwnerOrAdmin
from accounts.serializers import IdListSerializer

from .matching import CategoryId, JobMatchError, PreferenceMatcher, parse_category_ref
from .models import Category, JobPosting, JobPreference, normalize_location
from .serializers import (
    CategoryCountSerializer,
    CategorySerializer,
    JobPostingSerializer,
    JobPreferenceSerializer,
)

logger = logging.getLogger(__name__)


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Category.

    - GET: Any authenticated user
    - POST/PUT/PATCH/DELETE: Admin role only
    - GET counts/: Categories with their posting counts
    """

    queryset = Category.objects.all()
    serializer_class = CategorySerializer

    def get_permissions(self):
        if self.action in ['list', 'retrieve', 'counts']:
            permission_classes = [IsAuthenticated]
        else:
            permission_classes = [IsAuthenticated, IsAdminRole]
        return [permission() for permission in permission_classes]

    def destroy(self, request, *args, **kwargs):
        category = self.get_object()
        try:
            category.delete()
        except ProtectedError:
            return Response(
                {'message': 'Category is still used by job postings.'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def counts(self, request):
        """
        GET /api/categories/counts/
        """
        queryset = Category.objects.annotate(
            job_count=Count('job_postings')
        ).order_by('name')
        serializer = CategoryCountSerializer(queryset, many=True)
        return Response(serializer.data)


class JobPostingViewSet(viewsets.ModelViewSet):
    """
    ViewSet for JobPosting.

    - POST: Create job posting (employers and admins)
    - GET: List all postings, optionally filtered by ?category= and ?location=
    - GET {id}: Retrieve specific job posting
    - PUT/PATCH {id}: Update job posting (owner or admin)
    - DELETE {id}: Delete job posting (owner or admin)
    """

    serializer_class = JobPostingSerializer
    permission_classes = [IsAuthenticated, CanPostJobs, IsOwnerOrAdmin]

    def get_queryset(self):
        queryset = JobPosting.objects.select_related('category', 'user')

        category = self.request.query_params.get('category')
        if category:
            ref = parse_category_ref(category)
            if isinstance(ref, CategoryId):
                queryset = queryset.filter(category_id=ref.value)
            elif ref is not None:
                queryset = queryset.filter(category__name__iexact=ref.value)

        location = normalize_location(self.request.query_params.get('location'))
        if location:
            queryset = queryset.filter(location_lower=location)

        return queryset.order_by('-created_at')

    def perform_create(self, serializer):
        """Automatically set user from request."""
        serializer.save(user=self.request.user)


class JobPreferenceViewSet(viewsets.ModelViewSet):
    """
    ViewSet for JobPreference.

    Every route is scoped to the current user's own preferences.

    - GET match/: Postings matching the saved preferences
    - POST bulk-delete/: Delete several preferences
    """

    serializer_class = JobPreferenceSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return JobPreference.objects.filter(user=self.request.user).order_by('-created_at')

    def get_object(self):
        try:
            return self.get_queryset().get(pk=self.kwargs['pk'])
        except (JobPreference.DoesNotExist, ValueError):
            raise NotFound('Preference not found')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'message': self._first_error(serializer.errors), 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            serializer.save(user=request.user)
        except DatabaseError:
            logger.exception("Failed to create preference for user %s", request.user.pk)
            return Response(
                {'message': 'Failed to create preference'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Updates are always partial; omitted fields keep their values."""
        preference = self.get_object()
        serializer = self.get_serializer(preference, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(
                {'message': self._first_error(serializer.errors), 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            serializer.save()
        except DatabaseError:
            logger.exception("Failed to update preference %s", preference.pk)
            return Response(
                {'message': 'Failed to update preference'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response(serializer.data)

    def destroy(self, request, *args, **kwargs):
        preference = self.get_object()
        try:
            preference.delete()
        except DatabaseError:
            logger.exception("Failed to delete preference %s", preference.pk)
            return Response(
                {'message': 'Failed to delete preference'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'ok': True})

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        """
        POST /api/job-preferences/bulk-delete/  {"ids": [...]}
        """
        payload = IdListSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {'message': 'ids array required'},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            removed, _ = self.get_queryset().filter(
                pk__in=payload.validated_data['ids']
            ).delete()
        except DatabaseError:
            logger.exception("Bulk preference delete failed for user %s", request.user.pk)
            return Response(
                {'message': 'Failed to bulk delete'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'ok': True, 'removed': removed})

    @action(detail=False, methods=['get'])
    def match(self, request):
        """
        Match postings against the current user's preferences.

        GET /api/job-preferences/match/?limit=50&flex=true
        """
        allow_flex = str(request.query_params.get('flex', 'true')).lower() == 'true'
        try:
            result = PreferenceMatcher().match(
                request.user.id,
                limit=request.query_params.get('limit'),
                allow_flex=allow_flex,
            )
        except JobMatchError as e:
            return Response({'message': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            'strict': JobPostingSerializer(result.strict, many=True).data,
            'flex': JobPostingSerializer(result.flex, many=True).data,
            'usedPreferences': JobPreferenceSerializer(result.used_preferences, many=True).data,
        })

    @staticmethod
    def _first_error(errors) -> str:
        for messages in errors.values():
            if messages:
                return str(messages[0])
        return 'Invalid data'
