# apps/core/__init__.py

"""
Core - Aplicação principal do Kanban Board

Contém:
- Models (User, Task) e o enum de status
- Autenticação por JWT e regras de permissão
- Hierarquia de erros da API e middleware que os converte em JSON
- Comandos de manutenção (verificação e renumeração)
"""
