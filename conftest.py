"""
Pytest configuration for Django tests.
"""
import os

# pytest-django performs django.setup() once the settings module is known.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'marketplace.settings')
