"""
Courses app views

ViewSet for CourseModule and its assets.
"""
import logging

from django.db import DatabaseError
from django.http import Http404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminRole
from accounts.serializers import IdListSerializer

from .models import CourseModule
from .serializers import (
    BulkArchiveSerializer,
    CourseModuleSerializer,
    ModuleAssetSerializer,
)

logger = logging.getLogger(__name__)


ARCHIVED_ONLY = ('only', 'true')
ARCHIVED_EXCLUDED = ('false', 'active')


class CourseModuleViewSet(viewsets.ModelViewSet):
    """
    ViewSet for CourseModule.

    - GET: List modules (?category=, ?search=, ?visibility=, ?archived=)
    - GET {id}: Module with assets; archived modules are admin-only
    - POST/PATCH/PUT/DELETE: Admin role only
    - POST {id}/assets/: Attach an asset
    - DELETE {id}/assets/{asset_id}/: Remove an asset
    - POST bulk-delete/, PATCH bulk-archive/: Bulk operations
    """

    serializer_class = CourseModuleSerializer

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            permission_classes = [IsAuthenticated]
        else:
            permission_classes = [IsAuthenticated, IsAdminRole]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        """
        Apply list filters and archive visibility rules.

        Non-admins only see archived modules when they ask for them with
        ?archived=only, and never through retrieve.
        """
        queryset = CourseModule.objects.prefetch_related('assets')
        params = self.request.query_params
        is_admin = self.request.user.role == 'ADMIN'

        if self.action == 'retrieve':
            return queryset if is_admin else queryset.filter(is_archived=False)
        if self.action != 'list':
            return queryset

        if params.get('category'):
            queryset = queryset.filter(category=params['category'])
        if params.get('visibility'):
            queryset = queryset.filter(visibility=params['visibility'])
        if params.get('search'):
            queryset = queryset.filter(title__icontains=params['search'])

        archived = params.get('archived')
        if archived is not None:
            archived = archived.lower()
            if archived in ARCHIVED_ONLY:
                queryset = queryset.filter(is_archived=True)
            elif archived in ARCHIVED_EXCLUDED:
                queryset = queryset.filter(is_archived=False)
        elif not is_admin:
            queryset = queryset.filter(is_archived=False)

        return queryset

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound('Module not found')

    def destroy(self, request, *args, **kwargs):
        module = self.get_object()
        module.delete()
        return Response({'message': 'Module deleted'})

    @action(detail=True, methods=['post'])
    def assets(self, request, pk=None):
        """
        POST /api/courses/modules/{id}/assets/
        """
        module = self.get_object()
        serializer = ModuleAssetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        asset = serializer.save(module=module)
        return Response(
            {'message': 'Asset uploaded', 'asset': ModuleAssetSerializer(asset).data},
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['delete'], url_path=r'assets/(?P<asset_id>\d+)')
    def delete_asset(self, request, pk=None, asset_id=None):
        """
        DELETE /api/courses/modules/{id}/assets/{asset_id}/
        """
        module = self.get_object()
        asset = module.assets.filter(pk=asset_id).first()
        if asset is None:
            raise NotFound('Asset not found')
        asset.delete()
        return Response({'message': 'Asset removed'})

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        """
        POST /api/courses/modules/bulk-delete/  {"ids": [...]}
        """
        payload = IdListSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {'error': 'Invalid or empty IDs array'},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            CourseModule.objects.filter(pk__in=payload.validated_data['ids']).delete()
        except DatabaseError:
            logger.exception("Bulk module delete failed")
            return Response(
                {'error': 'Failed to delete courses'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'message': 'Courses deleted successfully'})

    @action(detail=False, methods=['patch'], url_path='bulk-archive')
    def bulk_archive(self, request):
        """
        PATCH /api/courses/modules/bulk-archive/  {"ids": [...], "is_archived": true}
        """
        payload = BulkArchiveSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {'error': 'Invalid or empty IDs array'},
                status=status.HTTP_400_BAD_REQUEST
            )

        archive_state = payload.validated_data['is_archived']
        modules = CourseModule.objects.filter(pk__in=payload.validated_data['ids'])
        try:
            matched = modules.count()
            modified = modules.exclude(is_archived=archive_state).update(is_archived=archive_state)
        except DatabaseError:
            logger.exception("Bulk module archive failed")
            return Response(
                {'error': 'Failed to update courses'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        message = 'Courses archived successfully' if archive_state else 'Courses unarchived successfully'
        return Response({'message': message, 'matched': matched, 'modified': modified})
