"""
Courses app

Training modules published by admins, each carrying text, link and
document assets for job seekers.
"""
