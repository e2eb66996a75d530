# config/urls.py

from django.contrib import admin
from django.urls import path, include

from apps.core.views import health_check, openapi_schema

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API
    path('api/auth/', include('apps.core.urls')),
    path('api/tasks', include('apps.board.urls')),
    path('api/openapi.json', openapi_schema, name='openapi'),

    # Monitoramento
    path('health/', health_check, name='health'),
]

# Erros não tratados respondem JSON
handler500 = 'apps.core.views.server_error'

# Customizar títulos do admin
admin.site.site_header = 'Kanban Board Admin'
admin.site.site_title = 'Kanban Board'
admin.site.index_title = 'Administração do Sistema'
