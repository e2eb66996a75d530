# apps/core/middleware.py

import logging

from django.http import JsonResponse
from django.utils import timezone

from .exceptions import KanbanError, MethodNotAllowed

logger = logging.getLogger(__name__)

API_PREFIX = '/api/'


class ApiExceptionMiddleware:
    """
    Middleware que converte erros de domínio em respostas JSON

    Toda KanbanError levantada por uma view vira
    {status, error, message, timestamp} com o status HTTP correspondente.
    O 405 dos decoradores `require_http_methods` recebe o mesmo corpo nas
    rotas da API. Outras exceções seguem para o handler500.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if response.status_code == 405 and request.path.startswith(API_PREFIX):
            json_response = error_response(MethodNotAllowed())
            json_response['Allow'] = response.get('Allow', '')
            return json_response

        return response

    def process_exception(self, request, exception):
        if not isinstance(exception, KanbanError):
            return None  # Deixar o Django lidar com isso

        logger.warning(
            "%s %s -> %s: %s",
            request.method, request.path, exception.status_code, exception.message
        )
        return error_response(exception)


def error_response(exception):
    body = exception.as_dict()
    body['timestamp'] = timezone.now().isoformat()
    return JsonResponse(body, status=exception.status_code)
