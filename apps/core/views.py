# apps/core/views.py

import logging

from django.conf import settings
from django.db import DatabaseError
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .auth_service import auth_service  # Importando nosso serviço encapsulado
from .exceptions import KanbanError
from .middleware import error_response
from .models import User
from .openapi import build_schema
from .utils import read_json

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def register_view(request):
    """
    Registro de novo usuário

    A view só traduz HTTP; validação e criação ficam no serviço.
    """
    data = read_json(request)
    resposta = auth_service.register(
        name=data.get('name'),
        email=data.get('email'),
        password=data.get('password'),
    )
    return JsonResponse(resposta)


@csrf_exempt
@require_POST
def login_view(request):
    """Login por email e senha, devolve {token, username}"""
    data = read_json(request)
    resposta = auth_service.login(
        email=data.get('email'),
        password=data.get('password'),
    )
    return JsonResponse(resposta)


@require_GET
def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        # Verificar conexão com banco
        User.objects.exists()

        status = {
            'status': 'healthy',
            'database': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': settings.KANBAN_VERSION
        }

        return JsonResponse(status)

    except DatabaseError as e:
        logger.error("Health check falhou: %s", e)
        status = {
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': settings.KANBAN_VERSION
        }

        return JsonResponse(status, status=503)


@require_GET
def openapi_schema(request):
    """Documento OpenAPI 3 da API (bearer JWT, rotas de auth e de tarefas)"""
    return JsonResponse(build_schema())


def server_error(request):
    """handler500: erro inesperado também responde no formato JSON da API"""
    return error_response(KanbanError())
