# apps/board/ordering.py

"""
Ordenação fracionária das tarefas do quadro

Ao arrastar um cartão, a nova posição é calculada só a partir das
vizinhas na coluna de destino: nenhuma outra tarefa é renumerada.

    tasks = [A(1000), B(3000)]
    compute_new_position(tasks, C, B.id, TODO)  -> order 2000
    compute_new_position(tasks, D, A.id, TODO)  -> order 0
    compute_new_position(tasks, E, None, TODO)  -> order 4000

Funções puras: não acessam banco nem alteram as tarefas recebidas.
Qualquer objeto com `id`, `order` e `status` serve como tarefa.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from apps.core.exceptions import ValidationError
from apps.core.choices import TaskStatus, now_millis

# Margem deixada antes da primeira / depois da última tarefa
GAP = 1000

# Intervalo mínimo entre vizinhas, em passos de float (ulp) da magnitude delas
PRECISION_MARGIN = 2 ** 10


@dataclass(frozen=True)
class Position:
    """Resultado de um arrasto: coluna e ordem a gravar"""

    status: TaskStatus
    order: float


def sort_key(task) -> Tuple[float, int]:
    """Ordem crescente; empate resolvido pelo id"""
    return (task.order, task.id)


def column_sequence(tasks: Iterable, moved_task_id=None) -> List:
    """Tarefas em ordem de exibição, sem a tarefa sendo movida"""
    return sorted(
        (t for t in tasks if t.id != moved_task_id),
        key=sort_key,
    )


def compute_new_position(
    column_tasks: Sequence,
    moved_task_id,
    target_neighbor_id,
    target_column,
    gap: float = GAP,
) -> Position:
    """
    Calcula (status, order) para soltar uma tarefa na coluna de destino

    Args:
        column_tasks: tarefas da coluna de destino, em ordem crescente
        moved_task_id: tarefa sendo arrastada (ignorada se estiver na lista)
        target_neighbor_id: tarefa que ficará logo depois da movida,
            ou None para soltar no fim da coluna
        target_column: status de destino (normalizado para o enum)

    Raises:
        ValidationError: vizinha não pertence à coluna de destino
    """
    status = TaskStatus.normalize(target_column)
    tasks = [t for t in column_tasks if t.id != moved_task_id]

    if target_neighbor_id is not None and target_neighbor_id == moved_task_id:
        raise ValidationError('Uma tarefa não pode ser posicionada relativa a si mesma')

    if not tasks:
        if target_neighbor_id is not None:
            raise ValidationError('Tarefa vizinha não está na coluna de destino')
        return Position(status, now_millis())

    if target_neighbor_id is None:
        return Position(status, tasks[-1].order + gap)

    index = _index_of(tasks, target_neighbor_id)
    if index == 0:
        return Position(status, tasks[0].order - gap)

    before, after = tasks[index - 1], tasks[index]
    return Position(status, (before.order + after.order) / 2)


def _index_of(tasks: Sequence, task_id) -> int:
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i
    raise ValidationError('Tarefa vizinha não está na coluna de destino')


def fits_position(column_tasks: Sequence, moved_task_id, target_neighbor_id, order: float) -> bool:
    """
    Confere se `order` cai estritamente entre as vizinhas pretendidas

    Falha quando a média das vizinhas já não é representável: com ordens
    do tamanho de timestamps em milissegundos, o float tem passo de ~2e-4.
    """
    tasks = column_sequence(column_tasks, moved_task_id)
    if not tasks:
        return True
    if target_neighbor_id is None:
        return order > tasks[-1].order

    index = _index_of(tasks, target_neighbor_id)
    if not order < tasks[index].order:
        return False
    return index == 0 or order > tasks[index - 1].order


def min_gap_for(order: float, min_gap: float) -> float:
    """Intervalo mínimo aceitável perto de `order` (absoluto ou relativo à magnitude)"""
    return max(min_gap, math.ulp(abs(order)) * PRECISION_MARGIN)


def needs_rebalance(column_tasks: Sequence, min_gap: float) -> bool:
    """
    Verifica se alguma dupla de vizinhas ficou próxima demais

    Inserções repetidas no mesmo ponto dividem o intervalo pela metade
    a cada vez, até esgotar a precisão do float. O limite cresce com a
    magnitude das ordens (ver `min_gap_for`).
    """
    tasks = column_sequence(column_tasks)
    for before, after in zip(tasks, tasks[1:]):
        limite = min_gap_for(max(abs(before.order), abs(after.order)), min_gap)
        if after.order - before.order < limite:
            return True
    return False


def rebalance(column_tasks: Sequence, gap: float = GAP) -> List[Tuple[int, float]]:
    """
    Renumera a coluna com espaçamento uniforme, mantendo a sequência

    Retorna pares (task_id, nova_ordem): gap, 2*gap, 3*gap...
    """
    tasks = column_sequence(column_tasks)
    return [(task.id, float((i + 1) * gap)) for i, task in enumerate(tasks)]


def group_by_status(tasks: Iterable) -> Dict[TaskStatus, List]:
    """Agrupa por coluna; status inválido cai em TODO"""
    grouped = {status: [] for status in TaskStatus}
    for task in tasks:
        grouped[TaskStatus.normalize(task.status)].append(task)
    for status in grouped:
        grouped[status].sort(key=sort_key)
    return grouped

