# apps/core/models.py

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models

from .choices import TaskStatus, now_millis


class UserManager(BaseUserManager):
    """
    Manager com email como identificador de login

    O email é guardado exatamente como recebido (sem normalizar caixa),
    então a unicidade também é sensível a maiúsculas.
    """

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('O email é obrigatório')
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superusuário precisa de is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superusuário precisa de is_superuser=True')

        return self._create_user(email, password, **extra_fields)

    def active(self):
        """Usuários que ainda podem autenticar e possuir tarefas"""
        return self.filter(deleted=False, is_active=True)


class User(AbstractUser):
    """
    Usuário do quadro

    O login é feito pelo email; a autorização sobre tarefas usa sempre o id,
    que é imutável. O campo `deleted` existe para soft-delete, mas nenhum
    endpoint o altera.
    """

    username = None
    first_name = None
    last_name = None

    # === INFORMAÇÕES PESSOAIS ===
    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)

    # === METADADOS ===
    deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    @property
    def is_enabled(self):
        return self.is_active and not self.deleted

    def __str__(self):
        return f"{self.name} <{self.email}>"


class Task(models.Model):
    """Tarefa do quadro - pertence a um único dono, para sempre"""

    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=TaskStatus.choices,
        default=TaskStatus.TODO
    )
    # Só tem significado comparado às irmãs da mesma coluna
    order = models.FloatField(default=now_millis, db_column='task_order')
    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        ordering = ['order', 'id']
        indexes = [
            models.Index(fields=['owner', 'status', 'order'], name='tasks_owner_status_order_idx'),
        ]

    @property
    def column(self):
        """Status normalizado, usado para agrupar no quadro"""
        return TaskStatus.normalize(self.status)

    def is_owned_by(self, user_id):
        return self.owner_id == user_id

    def __str__(self):
        return f"[{self.column}] {self.title}"
