# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

# Montado em /api/tasks (sem barra final, como o frontend espera)
urlpatterns = [
    path('', views.tasks_collection, name='tasks'),
    path('/<int:task_id>', views.task_detail, name='task_detail'),

    # Arrasto com ordem calculada no servidor
    path('/<int:task_id>/move', views.move_task, name='move_task'),
]
