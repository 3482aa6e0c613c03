"""
Dashboard REST API.

- GET    /api/dashboard/summary     cross-domain KPIs
- GET    /api/<domain>              detail report (trends, breakdowns)
- GET    /api/<domain>/all          every stored row, newest first
- POST   /api/<domain>/add          create one row from a flat JSON field map
- DELETE /api/<domain>/<id>         delete one row (no error if it is already gone)

Any failure inside a view is logged and returned as HTTP 500 with a JSON error body.
"""

import json
import logging
import os
import traceback
from functools import wraps

from django.conf import settings
from django.http import Http404, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from django.views.static import serve

from ingest.schema import DOMAINS_BY_KEY
from reports.queries import DOMAIN_REPORTS, SUMMARY, run_report

logger = logging.getLogger(__name__)


def json_errors(message, include_details=False):
    """
    Turn any exception escaping the view into a 500 JSON response carrying `message`.
    `{label}` in the message is filled with the domain label of per-domain views.
    With include_details and DEBUG on, the exception text and stack are added.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                return view(request, *args, **kwargs)
            except Exception as e:
                domain = DOMAINS_BY_KEY.get(kwargs.get('domain_key'))
                text = message.format(label=domain.label) if domain else message
                logger.exception('%s (%s %s)', text, request.method, request.path)
                body = {'error': text}
                if include_details and settings.DEBUG:
                    body['details'] = str(e)
                    body['stack'] = traceback.format_exc()
                return JsonResponse(body, status=500)
        return wrapper
    return decorator


@require_http_methods(["GET"])
@json_errors('Internal server error', include_details=True)
def dashboard_summary(request):
    """The four headline KPI blocks shown on the dashboard landing page."""
    return JsonResponse(run_report(SUMMARY))


@require_http_methods(["GET"])
@json_errors('Internal server error')
def domain_detail(request, domain_key):
    return JsonResponse(run_report(DOMAIN_REPORTS[domain_key]))


@require_http_methods(["GET"])
@json_errors('Failed to fetch {label} data')
def record_list(request, domain_key):
    domain = DOMAINS_BY_KEY[domain_key]
    records = domain.model.objects.order_by('-created_at')
    return JsonResponse([record.to_dict() for record in records], safe=False)


@csrf_exempt
@require_http_methods(["POST"])
@json_errors('Failed to add {label} data')
def record_add(request, domain_key):
    """
    Create one row. The body is a flat field map; unknown keys are ignored and
    blank or missing fields take the same defaults as workbook ingestion.
    """
    domain = DOMAINS_BY_KEY[domain_key]
    payload = json.loads(request.body or b'{}')
    record = domain.model.objects.create(**domain.from_payload(payload))
    record.refresh_from_db()
    logger.info('Added %s record %s', domain.label, record.id)
    return JsonResponse(record.to_dict())


@csrf_exempt
@require_http_methods(["DELETE"])
@json_errors('Failed to delete record')
def record_delete(request, domain_key, record_id):
    domain = DOMAINS_BY_KEY[domain_key]
    deleted, _ = domain.model.objects.filter(id=record_id).delete()
    logger.info('Delete %s record %s: %s row(s) removed', domain.label, record_id, deleted)
    return JsonResponse({'message': 'Record deleted successfully'})


def frontend(request, path=''):
    """Serve the built dashboard; unknown paths fall back to index.html for client-side routing."""
    build_dir = settings.PMS_FRONTEND_BUILD_DIR
    if not build_dir:
        raise Http404('Front end is not configured')
    if path and os.path.isfile(os.path.join(build_dir, path)):
        return serve(request, path, document_root=build_dir)
    return serve(request, 'index.html', document_root=build_dir)
