# apps/core/management/commands/rebalance_orders.py

from django.core.management.base import BaseCommand, CommandError

from apps.board.ordering import group_by_status
from apps.board.services import task_service
from apps.core.choices import TaskStatus
from apps.core.models import User


class Command(BaseCommand):
    help = 'Renumera a ordem das tarefas com espaçamento uniforme por coluna'

    def add_arguments(self, parser):
        parser.add_argument('--user', help='Email do usuário (padrão: todos)')
        parser.add_argument(
            '--status',
            choices=TaskStatus.values,
            help='Coluna a renumerar (padrão: todas)'
        )

    def handle(self, *args, **options):
        usuarios = User.objects.all()
        if options['user']:
            usuarios = usuarios.filter(email=options['user'])
            if not usuarios.exists():
                raise CommandError(f"Usuário {options['user']} não encontrado")

        total = 0
        for usuario in usuarios.iterator():
            colunas = group_by_status(usuario.tasks.all())
            for status, tarefas in colunas.items():
                if not tarefas:
                    continue
                if options['status'] and status != options['status']:
                    continue
                total += task_service.rebalance_column(usuario.pk, status)

        self.stdout.write(self.style.SUCCESS(f'✅ {total} tarefa(s) renumerada(s)'))
