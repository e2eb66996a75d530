# apps/board/services.py

"""
Serviço de Tarefas - autorização e persistência do quadro

Cada operação recebe o id do usuário vindo do token (nunca do corpo da
requisição) e roda numa transação própria: ler tarefa, conferir dono e
gravar acontecem sem brecha entre a checagem e a escrita.
"""

import logging
from typing import List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.core.choices import TaskStatus, now_millis
from apps.core.exceptions import TaskNotFound, Unauthorized, UserNotFound, ValidationError
from apps.core.models import Task, User
from apps.core.permissions import TaskPermissions

from .ordering import (
    column_sequence,
    compute_new_position,
    fits_position,
    needs_rebalance,
    rebalance,
)

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = Task._meta.get_field('title').max_length


class TaskService:
    """
    Operações sobre as tarefas de um usuário

    Regras:
    - Só o dono (comparado pelo id) altera ou remove uma tarefa
    - Campos ausentes numa atualização ficam como estão
    - Remoção é definitiva; nenhuma outra tarefa é afetada
    """

    def list_tasks(self, requester_id) -> List[Task]:
        """Todas as tarefas do usuário, em ordem crescente de `order`"""
        with transaction.atomic():
            user = self._get_user(requester_id)
            return list(
                Task.objects.filter(owner=user)
                .select_related('owner')
                .order_by('order', 'id')
            )

    def create_task(self, requester_id, title, description=None) -> Task:
        """Cria tarefa em TODO, no fim da fila (order = agora)"""
        title = self._clean_title(title)

        with transaction.atomic():
            user = self._get_user(requester_id)
            task = Task.objects.create(
                owner=user,
                title=title,
                description=description,
                status=TaskStatus.TODO,
                order=now_millis(),
            )

        logger.info("Tarefa %s criada por usuário %s", task.pk, requester_id)
        return task

    def update_task(
        self,
        requester_id,
        task_id,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        order: Optional[float] = None,
    ) -> Task:
        """
        Atualização parcial; None significa "não alterar"

        A ordem/status enviados pelo cliente são gravados como vieram
        (normalizando status desconhecido para TODO).

        Raises:
            TaskNotFound: id inexistente
            Unauthorized: usuário não é o dono
            ValidationError: título vazio
        """
        if title is not None:
            title = self._clean_title(title)

        with transaction.atomic():
            task = self._get_owned_task(requester_id, task_id)

            if title is not None:
                task.title = title
            if description is not None:
                task.description = description
            if status is not None:
                task.status = TaskStatus.normalize(status)
            if order is not None:
                task.order = order

            task.save()

        logger.info("Tarefa %s atualizada por usuário %s", task.pk, requester_id)
        return task

    def delete_task(self, requester_id, task_id) -> None:
        """Remove a tarefa definitivamente"""
        with transaction.atomic():
            task = self._get_owned_task(
                requester_id, task_id, TaskPermissions.pode_deletar_tarefa
            )
            task.delete()

        logger.info("Tarefa %s removida por usuário %s", task_id, requester_id)

    def move_task(self, requester_id, task_id, target_status, before_task_id=None) -> Task:
        """
        Arrasto calculado no servidor

        Posiciona a tarefa imediatamente antes de `before_task_id` na coluna
        de destino (ou no fim, se None). Se a média das vizinhas não couber
        entre elas, ou se a coluna resultante ficar com vizinhas próximas
        demais, a coluna é renumerada na mesma transação.
        """
        target_status = TaskStatus.normalize(target_status)

        with transaction.atomic():
            task = self._get_owned_task(requester_id, task_id)
            column = column_sequence(
                self._column_queryset(requester_id, target_status).select_for_update(),
                moved_task_id=task.pk,
            )

            position = compute_new_position(
                column, task.pk, before_task_id, target_status,
                gap=settings.KANBAN_ORDER_GAP,
            )
            if not fits_position(column, task.pk, before_task_id, position.order):
                # Precisão esgotada entre as vizinhas: renumera e recalcula
                logger.info(
                    "Coluna %s do usuário %s renumerada antes de mover tarefa %s",
                    target_status, requester_id, task.pk
                )
                self._apply_rebalance(column)
                position = compute_new_position(
                    column, task.pk, before_task_id, target_status,
                    gap=settings.KANBAN_ORDER_GAP,
                )

            task.status = position.status
            task.order = position.order
            task.save()

            if needs_rebalance(column + [task], settings.KANBAN_ORDER_MIN_GAP):
                logger.info(
                    "Coluna %s do usuário %s renumerada após mover tarefa %s",
                    target_status, requester_id, task.pk
                )
                self._apply_rebalance(column + [task])
                task.refresh_from_db()

        logger.info(
            "Tarefa %s movida para %s (order=%s) por usuário %s",
            task.pk, task.status, task.order, requester_id
        )
        return task

    def rebalance_column(self, owner_id, status) -> int:
        """Renumera uma coluna inteira com espaçamento uniforme"""
        status = TaskStatus.normalize(status)

        with transaction.atomic():
            column = list(self._column_queryset(owner_id, status).select_for_update())
            changed = self._apply_rebalance(column)

        logger.info("Coluna %s do usuário %s renumerada (%s tarefas)", status, owner_id, changed)
        return changed

    # =================== MÉTODOS PRIVADOS ===================

    def _get_user(self, user_id) -> User:
        try:
            return User.objects.active().get(pk=user_id)
        except User.DoesNotExist:
            raise UserNotFound()

    def _get_owned_task(self, requester_id, task_id,
                        permission_check=TaskPermissions.pode_editar_tarefa) -> Task:
        """Busca com lock e confere o dono"""
        try:
            task = Task.objects.select_for_update().get(pk=task_id)
        except Task.DoesNotExist:
            raise TaskNotFound()

        if not permission_check(requester_id, task):
            logger.warning(
                "Usuário %s tentou alterar tarefa %s de outro dono", requester_id, task_id
            )
            raise Unauthorized()
        return task

    def _column_queryset(self, owner_id, status):
        """
        Tarefas de uma coluna do usuário

        Status fora do enum pertencem à coluna TODO.
        """
        tasks = Task.objects.filter(owner_id=owner_id)
        if status == TaskStatus.TODO:
            outros = [s for s in TaskStatus.values if s != TaskStatus.TODO]
            return tasks.filter(~Q(status__in=outros))
        return tasks.filter(status=status)

    def _apply_rebalance(self, column) -> int:
        novas_ordens = dict(rebalance(column, gap=settings.KANBAN_ORDER_GAP))
        agora = timezone.now()
        for task in column:
            task.order = novas_ordens[task.pk]
            task.updated_at = agora
        Task.objects.bulk_update(column, ['order', 'updated_at'])
        return len(column)

    def _clean_title(self, title) -> str:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError('Título é obrigatório')
        title = title.strip()
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f'Título deve ter no máximo {TITLE_MAX_LENGTH} caracteres')
        return title


# Instância global do serviço
task_service = TaskService()
