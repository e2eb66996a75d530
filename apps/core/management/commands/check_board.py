# apps/core/management/commands/check_board.py

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connection

from apps.core.choices import TaskStatus
from apps.core.models import Task, User


class Command(BaseCommand):
    help = 'Verifica integridade do sistema - NÃO cria dados'

    def handle(self, *args, **options):
        """
        Verifica conectividade e apresenta um resumo do quadro
        """

        self.stdout.write('🔍 Executando verificação de integridade do sistema...')

        try:
            self._testar_conectividade_banco()
            self._resumo_usuarios()
            self._resumo_tarefas()
        except DatabaseError as e:
            raise CommandError(f'❌ ERRO na verificação: {e}') from e

        self.stdout.write(self.style.SUCCESS('\n✅ SISTEMA VERIFICADO E FUNCIONANDO!'))

    def _testar_conectividade_banco(self):
        """Testa conectividade básica"""
        self.stdout.write('  🔗 Testando conectividade do banco...')

        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            result = cursor.fetchone()

        if result[0] != 1:
            raise CommandError("Banco não está respondendo corretamente")

    def _resumo_usuarios(self):
        total = User.objects.count()
        ativos = User.objects.active().count()
        self.stdout.write(f'  👤 Usuários: {total} ({ativos} ativos)')

    def _resumo_tarefas(self):
        self.stdout.write(f'  📋 Tarefas: {Task.objects.count()}')
        for status in TaskStatus:
            total = Task.objects.filter(status=status).count()
            self.stdout.write(f'     - {status.label}: {total}')

        invalidas = Task.objects.exclude(status__in=TaskStatus.values).count()
        if invalidas:
            self.stdout.write(
                self.style.WARNING(f'  ⚠️  {invalidas} tarefa(s) com status inválido (exibidas em TODO)')
            )
