# apps/core/admin.py

from django.contrib import admin
from django.utils.html import format_html

from .models import Task, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin para usuários - senha apenas leitura (hash)"""

    list_display = ['email', 'name', 'tasks_count', 'deleted', 'is_staff', 'created_at']
    list_filter = ['deleted', 'is_staff', 'is_active']
    search_fields = ['email', 'name']
    ordering = ['-created_at']
    readonly_fields = ['password', 'last_login', 'created_at']

    fieldsets = (
        ('Informações Básicas', {
            'fields': ('name', 'email', 'password')
        }),
        ('Status', {
            'fields': ('is_active', 'deleted', 'is_staff', 'is_superuser')
        }),
        ('Datas', {
            'fields': ('last_login', 'created_at'),
            'classes': ('collapse',)
        })
    )

    def tasks_count(self, obj):
        """Conta quantidade de tarefas"""
        return obj.tasks.count()

    tasks_count.short_description = 'Tarefas'


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin para tarefas"""

    list_display = ['title', 'status_badge', 'order', 'owner', 'updated_at']
    list_filter = ['status', 'created_at']
    search_fields = ['title', 'description', 'owner__email']
    list_select_related = ['owner']
    readonly_fields = ['owner', 'created_at', 'updated_at']

    fieldsets = (
        ('Informações Básicas', {
            'fields': ('title', 'description', 'owner')
        }),
        ('Quadro', {
            'fields': ('status', 'order')
        }),
        ('Datas', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )

    def status_badge(self, obj):
        """Exibe a coluna com badge colorido"""
        cores = {
            'TODO': '#6B7280',  # cinza
            'IN_PROGRESS': '#F59E0B',  # amarelo
            'DONE': '#10B981',  # verde
        }
        coluna = obj.column
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            cores[coluna.value], coluna.label
        )

    status_badge.short_description = 'Coluna'

    def has_add_permission(self, request):
        # Tarefas nascem pela API, sempre com um dono
        return False
