"""
URL configuration for jobboard project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from accounts.views import UserViewSet
from courses.views import CourseModuleViewSet
from jobs.views import CategoryViewSet, JobPostingViewSet, JobPreferenceViewSet
from profiles.views import ProfileUpdateRequestViewSet
from jobboard.views import dashboard

# Create router and register viewsets
router = DefaultRouter()
router.register(r'users', UserViewSet, basename='user')
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'jobs', JobPostingViewSet, basename='job')
router.register(r'job-preferences', JobPreferenceViewSet, basename='job-preference')
router.register(r'admin/profile-requests', ProfileUpdateRequestViewSet, basename='profile-request')
router.register(r'courses/modules', CourseModuleViewSet, basename='course-module')

urlpatterns = [
    path('admin/', admin.site.urls),

    # Fixed user routes must resolve before the router's users/{pk}/
    path('api/users/profile/', include('profiles.urls')),
    path('api/users/', include('accounts.urls')),
    path('api/dashboard/', dashboard, name='dashboard'),
    path('api/', include(router.urls)),
    path('api-auth/', include('rest_framework.urls')),
]
