# apps/core/choices.py

import time

from django.db import models


def now_millis():
    """Timestamp atual em milissegundos, com fração (alta resolução)"""
    return time.time() * 1000


class TaskStatus(models.TextChoices):
    """Colunas do quadro"""

    TODO = 'TODO', 'A fazer'
    IN_PROGRESS = 'IN_PROGRESS', 'Em progresso'
    DONE = 'DONE', 'Concluído'

    @classmethod
    def normalize(cls, value):
        """
        Converte qualquer valor para um status válido

        Valores fora do enum (corrompidos ou enviados pelo cliente)
        viram TODO em vez de serem rejeitados.
        """
        if isinstance(value, str) and value in cls.values:
            return cls(value)
        return cls.TODO
