from django.urls import path
from .views import populate_view, upload_view

urlpatterns = [
    path('games/populate', populate_view, name='populate_games'),
    path('upload', upload_view, name='upload'),
]
