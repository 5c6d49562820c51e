"""
URL configuration for config project.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # API : déclenchement du remplissage + endpoint d'upload des médias
    path('api/', include('catalog.urls')),
    path('admin/', admin.site.urls),
]

# Fichiers médias en mode développement
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
