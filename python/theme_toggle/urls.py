from django.urls import path

from . import views

app_name = "theme_toggle"

urlpatterns = [
    path("", views.current_theme, name="current"),
    path("toggle/", views.toggle_theme, name="toggle"),
]
