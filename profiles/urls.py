"""
Profiles app URLs
"""
from django.urls import path
from .views import ProfilePictureView, ProfileView

urlpatterns = [
    path('', ProfileView.as_view(), name='profile'),
    path('picture/', ProfilePictureView.as_view(), name='profile-picture'),
]
