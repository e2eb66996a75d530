# apps/__init__.py

"""
Kanban Board - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Models, autenticação JWT, permissões e erros da API
- board: Ordenação das tarefas e API REST do quadro
"""

__version__ = '0.1.0'
