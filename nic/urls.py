from django.urls import path
from . import views

app_name = "nic"

urlpatterns = [
    path('', views.analyzer, name='analyzer'),
    path('api/nic/decode/', views.NicDecodeAPIView.as_view(), name='decode'),
    path('health/', views.health, name='health'),
]
