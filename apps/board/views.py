# apps/board/views.py

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_POST

from apps.core.exceptions import ValidationError
from apps.core.permissions import token_required
from apps.core.utils import (
    optional_id,
    optional_number,
    optional_status,
    optional_text,
    read_json,
    task_to_dict,
)

from .services import task_service


@csrf_exempt
@require_http_methods(["GET", "POST"])
@token_required
def tasks_collection(request):
    """
    GET  - lista as tarefas do usuário (lista plana, ordem crescente)
    POST - cria tarefa {title, description?}
    """
    if request.method == 'GET':
        tasks = task_service.list_tasks(request.requester_id)
        return JsonResponse([task_to_dict(t) for t in tasks], safe=False)

    data = read_json(request)
    task = task_service.create_task(
        request.requester_id,
        title=data.get('title'),
        description=optional_text(data, 'description'),
    )
    return JsonResponse(task_to_dict(task))


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@token_required
def task_detail(request, task_id):
    """
    PUT    - atualização parcial {title?, description?, status?, order?}
    DELETE - remoção definitiva (200 sem corpo)
    """
    if request.method == 'DELETE':
        task_service.delete_task(request.requester_id, task_id)
        return HttpResponse(status=200)

    data = read_json(request)
    task = task_service.update_task(
        request.requester_id,
        task_id,
        title=optional_text(data, 'title'),
        description=optional_text(data, 'description'),
        status=optional_status(data),
        order=optional_number(data, 'order'),
    )
    return JsonResponse(task_to_dict(task))


@csrf_exempt
@require_POST
@token_required
def move_task(request, task_id):
    """
    Move a tarefa calculando a ordem no servidor

    Corpo: {status, beforeId?} - beforeId é a tarefa que ficará logo
    depois da movida; ausente ou null solta no fim da coluna.
    """
    data = read_json(request)
    if data.get('status') is None:
        raise ValidationError('Campo status é obrigatório')

    task = task_service.move_task(
        request.requester_id,
        task_id,
        target_status=optional_status(data),
        before_task_id=optional_id(data, 'beforeId'),
    )
    return JsonResponse(task_to_dict(task))
