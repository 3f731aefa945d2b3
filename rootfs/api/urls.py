"""
URL routing patterns for the route store.
"""
from django.urls import re_path
from api import views


app_urlpatterns = [
    re_path(r'^httproute/(?P<path>.*)$', views.HTTPRouteView.as_view()),
]

urlpatterns = app_urlpatterns
