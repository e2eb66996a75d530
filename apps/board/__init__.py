# apps/board/__init__.py

"""
Board - Aplicação Kanban do Kanban Board

Funcionalidades:
- Ordenação fracionária para drag-and-drop (ordering)
- Serviço de tarefas com autorização por dono (services)
- API REST /api/tasks
"""
