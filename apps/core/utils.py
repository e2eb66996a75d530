# apps/core/utils.py

import json
import math
from typing import Dict, Optional

from .exceptions import ValidationError
from .choices import TaskStatus


def read_json(request) -> Dict:
    """
    Lê o corpo JSON da requisição

    Corpo vazio vira {}. Corpo que não é um objeto JSON é rejeitado.
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError('Corpo da requisição não é JSON válido')

    if not isinstance(data, dict):
        raise ValidationError('Corpo da requisição deve ser um objeto JSON')
    return data


def optional_text(data: Dict, field: str) -> Optional[str]:
    """Campo de texto opcional; ausente ou null retorna None"""
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'Campo {field} deve ser texto')
    return value


def optional_number(data: Dict, field: str) -> Optional[float]:
    """Campo numérico opcional e finito; ausente ou null retorna None"""
    value = data.get(field)
    if value is None:
        return None
    # bool é subclasse de int, mas não é uma posição
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f'Campo {field} deve ser numérico')
    if not math.isfinite(value):
        raise ValidationError(f'Campo {field} deve ser finito')
    return float(value)


def optional_id(data: Dict, field: str) -> Optional[int]:
    """Id opcional (inteiro positivo); ausente ou null retorna None"""
    value = data.get(field)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f'Campo {field} deve ser um id válido')
    return value


def optional_status(data: Dict, field: str = 'status') -> Optional[TaskStatus]:
    """Status opcional; valores desconhecidos são normalizados para TODO"""
    if data.get(field) is None:
        return None
    return TaskStatus.normalize(data[field])


def task_to_dict(task) -> Dict:
    """Representação JSON de uma tarefa"""
    return {
        'id': task.id,
        'title': task.title,
        'description': task.description,
        'status': task.column.value,
        'order': task.order,
        'creatorName': task.owner.name,
        'createdAt': task.created_at.isoformat() if task.created_at else None,
    }
