from django.urls import path
from . import views

app_name = 'cylinders'

urlpatterns = [
    path('', views.cylinder_sets, name='cylinder-set-list'),
    path('<uuid:cylinder_set_id>/archive/', views.archive_set, name='cylinder-set-archive'),
]
