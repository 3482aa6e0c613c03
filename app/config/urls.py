from django.conf import settings
from django.urls import include, path, re_path

from reports.views import frontend

urlpatterns = [
    path('api/', include('reports.urls')),
]

if settings.PMS_FRONTEND_BUILD_DIR:
    urlpatterns += [
        re_path(r'^(?!api/)(?P<path>.*)$', frontend, name='frontend'),
    ]
