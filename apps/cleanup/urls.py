from django.urls import path
from . import views

app_name = 'cleanup'

urlpatterns = [
    path('', views.archived_users, name='archived-user-list'),
    path('<uuid:user_id>/unarchive/', views.unarchive, name='archived-user-unarchive'),
]
