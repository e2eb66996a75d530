# apps/core/exceptions.py

"""
Hierarquia de erros da API

Cada erro carrega o status HTTP e o rótulo usado no corpo
{status, error, message}. Os serviços levantam, o middleware converte.
"""


class KanbanError(Exception):
    """Erro base - nunca levantado diretamente"""

    status_code = 500
    error = 'Internal Server Error'
    default_message = 'Erro interno do sistema'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {
            'status': self.status_code,
            'error': self.error,
            'message': self.message,
        }


class ValidationError(KanbanError):
    """Entrada malformada (ex: título vazio)"""

    status_code = 400
    error = 'Bad Request'
    default_message = 'Dados inválidos'


class AuthenticationFailure(KanbanError):
    """Credenciais ou token inválidos"""

    status_code = 401
    error = 'Unauthorized'
    default_message = 'Email ou senha incorretos'


class Unauthorized(KanbanError):
    """Identidade válida, mas não é a dona do recurso"""

    status_code = 403
    error = 'Forbidden'
    default_message = 'Você não tem permissão sobre esta tarefa'


class NotFound(KanbanError):
    status_code = 404
    error = 'Not Found'
    default_message = 'Recurso não encontrado'


class TaskNotFound(NotFound):
    default_message = 'Tarefa não encontrada'


class UserNotFound(NotFound):
    default_message = 'Usuário não encontrado'


class Conflict(KanbanError):
    """Email já cadastrado"""

    status_code = 409
    error = 'Conflict'
    default_message = 'Email já cadastrado no sistema'


class MethodNotAllowed(KanbanError):
    status_code = 405
    error = 'Method Not Allowed'
    default_message = 'Método HTTP não permitido neste endpoint'
