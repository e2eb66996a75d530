# config/wsgi.py

"""
Ponto de entrada WSGI da API do Kanban Board

Usado por gunicorn/uwsgi em produção:
    gunicorn config.wsgi:application
"""

import os

from django.core.wsgi import get_wsgi_application

# Em produção; sobrescreva com DJANGO_SETTINGS_MODULE se necessário
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.production')

application = get_wsgi_application()
