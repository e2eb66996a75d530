# apps/core/permissions.py

from functools import wraps

from .exceptions import AuthenticationFailure
from .tokens import bearer_token, decode_token


class TaskPermissions:
    """
    Regras de permissão sobre tarefas

    Não há papéis nem compartilhamento: só o dono, comparado pelo id,
    pode alterar ou remover uma tarefa.
    """

    @staticmethod
    def is_owner(user_id, task):
        """Verifica se o usuário é o dono da tarefa"""
        return user_id is not None and task.is_owned_by(user_id)

    @staticmethod
    def pode_editar_tarefa(user_id, task):
        return TaskPermissions.is_owner(user_id, task)

    @staticmethod
    def pode_deletar_tarefa(user_id, task):
        return TaskPermissions.is_owner(user_id, task)


# Decoradores para views

def token_required(view_func):
    """
    Decorador que exige bearer token válido

    Injeta o id do usuário em `request.requester_id`. Sem token, ou com
    token inválido, levanta AuthenticationFailure (401).
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        token = bearer_token(request)
        if token is None:
            raise AuthenticationFailure('Autenticação necessária')

        request.requester_id = decode_token(token)
        return view_func(request, *args, **kwargs)

    return wrapped_view
