# apps/core/openapi.py

"""
Descrição OpenAPI 3 da API do quadro

Montada a partir dos status e códigos de erro do próprio projeto, para
que a documentação não divirja das exceções em apps.core.exceptions.
"""

from django.conf import settings

from .choices import TaskStatus
from .exceptions import (
    AuthenticationFailure,
    Conflict,
    MethodNotAllowed,
    NotFound,
    Unauthorized,
    ValidationError,
)

BEARER = [{'bearerAuth': []}]


def _ref(nome):
    return {'$ref': f'#/components/schemas/{nome}'}


def _json(schema, descricao):
    return {'description': descricao, 'content': {'application/json': {'schema': schema}}}


def _erro(exc):
    return _json(_ref('Error'), exc.default_message)


def _erros(*excecoes):
    return {str(exc.status_code): _erro(exc) for exc in excecoes}


def _corpo(nome):
    return {'required': True, 'content': {'application/json': {'schema': _ref(nome)}}}


TASK_ID = {
    'name': 'id',
    'in': 'path',
    'required': True,
    'schema': {'type': 'integer', 'format': 'int64'},
}


def _schemas():
    return {
        'Error': {
            'type': 'object',
            'properties': {
                'status': {'type': 'integer', 'example': 404},
                'error': {'type': 'string', 'example': 'Not Found'},
                'message': {'type': 'string'},
                'timestamp': {'type': 'string', 'format': 'date-time'},
            },
            'required': ['status', 'error', 'message', 'timestamp'],
        },
        'RegisterRequest': {
            'type': 'object',
            'properties': {
                'name': {'type': 'string'},
                'email': {'type': 'string', 'format': 'email'},
                'password': {'type': 'string', 'minLength': settings.KANBAN_PASSWORD_MIN_LENGTH},
            },
            'required': ['name', 'email', 'password'],
        },
        'LoginRequest': {
            'type': 'object',
            'properties': {
                'email': {'type': 'string', 'format': 'email'},
                'password': {'type': 'string'},
            },
            'required': ['email', 'password'],
        },
        'AuthResponse': {
            'type': 'object',
            'properties': {
                'token': {'type': 'string', 'description': 'JWT para o header Authorization'},
                'username': {'type': 'string', 'description': 'Nome de exibição'},
            },
        },
        'Status': {'type': 'string', 'enum': list(TaskStatus.values)},
        'Task': {
            'type': 'object',
            'properties': {
                'id': {'type': 'integer', 'format': 'int64'},
                'title': {'type': 'string'},
                'description': {'type': 'string', 'nullable': True},
                'status': _ref('Status'),
                'order': {'type': 'number', 'format': 'double'},
                'creatorName': {'type': 'string'},
                'createdAt': {'type': 'string', 'format': 'date-time'},
            },
        },
        'CreateTaskRequest': {
            'type': 'object',
            'properties': {
                'title': {'type': 'string', 'maxLength': 255},
                'description': {'type': 'string', 'nullable': True},
            },
            'required': ['title'],
        },
        'UpdateTaskRequest': {
            'type': 'object',
            'description': 'Campos ausentes ou null não são alterados',
            'properties': {
                'title': {'type': 'string', 'maxLength': 255},
                'description': {'type': 'string', 'nullable': True},
                'status': _ref('Status'),
                'order': {'type': 'number', 'format': 'double'},
            },
        },
        'MoveTaskRequest': {
            'type': 'object',
            'properties': {
                'status': _ref('Status'),
                'beforeId': {
                    'type': 'integer',
                    'format': 'int64',
                    'nullable': True,
                    'description': 'Tarefa que ficará logo depois; null solta no fim da coluna',
                },
            },
            'required': ['status'],
        },
    }


def build_schema():
    """Documento OpenAPI completo (dict pronto para JSON)"""
    task = _json(_ref('Task'), 'Tarefa')
    protegido = _erros(AuthenticationFailure, MethodNotAllowed)
    da_tarefa = _erros(ValidationError, Unauthorized, NotFound)

    paths = {
        '/api/auth/register': {
            'post': {
                'tags': ['auth'],
                'summary': 'Registrar usuário',
                'requestBody': _corpo('RegisterRequest'),
                'responses': {
                    '200': _json(_ref('AuthResponse'), 'Usuário criado'),
                    **_erros(ValidationError, Conflict, MethodNotAllowed),
                },
            },
        },
        '/api/auth/login': {
            'post': {
                'tags': ['auth'],
                'summary': 'Login por email e senha',
                'requestBody': _corpo('LoginRequest'),
                'responses': {
                    '200': _json(_ref('AuthResponse'), 'Autenticado'),
                    **_erros(ValidationError, AuthenticationFailure, MethodNotAllowed),
                },
            },
        },
        '/api/tasks': {
            'get': {
                'tags': ['tasks'],
                'summary': 'Listar tarefas do usuário',
                'security': BEARER,
                'responses': {
                    '200': _json({'type': 'array', 'items': _ref('Task')}, 'Tarefas em ordem crescente'),
                    **protegido,
                    **_erros(NotFound),
                },
            },
            'post': {
                'tags': ['tasks'],
                'summary': 'Criar tarefa (sempre em TODO)',
                'security': BEARER,
                'requestBody': _corpo('CreateTaskRequest'),
                'responses': {'200': task, **protegido, **_erros(ValidationError, NotFound)},
            },
        },
        '/api/tasks/{id}': {
            'parameters': [TASK_ID],
            'put': {
                'tags': ['tasks'],
                'summary': 'Atualização parcial',
                'security': BEARER,
                'requestBody': _corpo('UpdateTaskRequest'),
                'responses': {'200': task, **protegido, **da_tarefa},
            },
            'delete': {
                'tags': ['tasks'],
                'summary': 'Remover tarefa',
                'security': BEARER,
                'responses': {
                    '200': {'description': 'Removida (sem corpo)'},
                    **protegido,
                    **_erros(Unauthorized, NotFound),
                },
            },
        },
        '/api/tasks/{id}/move': {
            'parameters': [TASK_ID],
            'post': {
                'tags': ['tasks'],
                'summary': 'Mover tarefa com ordem calculada no servidor',
                'security': BEARER,
                'requestBody': _corpo('MoveTaskRequest'),
                'responses': {'200': task, **protegido, **da_tarefa},
            },
        },
    }

    return {
        'openapi': '3.0.3',
        'info': {
            'title': 'Kanban Board API',
            'version': settings.KANBAN_VERSION,
            'description': 'Quadro Kanban multiusuário com autenticação JWT',
        },
        'paths': paths,
        'components': {
            'securitySchemes': {
                'bearerAuth': {'type': 'http', 'scheme': 'bearer', 'bearerFormat': 'JWT'},
            },
            'schemas': _schemas(),
        },
    }
