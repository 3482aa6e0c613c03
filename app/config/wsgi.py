"""
WSGI entry point.

Checks the database once at startup; an unreachable database is logged but
does not stop the server from starting.
"""

import logging
import os

from django.core.wsgi import get_wsgi_application
from django.db import DatabaseError, connection

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()

logger = logging.getLogger('config.wsgi')

try:
    connection.ensure_connection()
    logger.info('Connected to %s database', connection.vendor)
except DatabaseError:
    logger.exception('Error connecting to database')
finally:
    connection.close()
