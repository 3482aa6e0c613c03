from django.urls import path

from ingest.schema import DOMAINS
from reports import views

urlpatterns = [
    path('dashboard/summary', views.dashboard_summary, name='dashboard_summary'),
]

# 'all' and 'add' must come before the <record_id> route.
for domain in DOMAINS:
    kwargs = {'domain_key': domain.key}
    urlpatterns += [
        path(domain.key, views.domain_detail, kwargs, name=f'{domain.key}-detail'),
        path(f'{domain.key}/all', views.record_list, kwargs, name=f'{domain.key}-all'),
        path(f'{domain.key}/add', views.record_add, kwargs, name=f'{domain.key}-add'),
        path(f'{domain.key}/<str:record_id>', views.record_delete, kwargs, name=f'{domain.key}-delete'),
    ]
