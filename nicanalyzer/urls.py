"""
URL configuration for the NIC Analyzer project.

    /                   Analyzer page (HTMX partials on keyup)
    /api/nic/decode/    JSON decode endpoint
    /health/            Health check
"""
from django.urls import path, include

urlpatterns = [
    path('', include('nic.urls')),
]
