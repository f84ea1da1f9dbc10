# WSGI (Web Server Gateway Interface) configuration for production deployment
#
# Used by production servers like:
# - Gunicorn
# - uWSGI
# ==============================================================================

import os
from django.core.wsgi import get_wsgi_application

# Points to config/settings.py
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()


# GUNICORN (Recommended)
# =====================
# Install: pip install gunicorn
# Run: gunicorn config.wsgi:application --bind 0.0.0.0:8000 --workers 4
#
# Uploads are written synchronously inside the request, so give workers a
# timeout that covers the largest allowed document (DOCUMENT_MAX_UPLOAD_SIZE):
# gunicorn config.wsgi:application --timeout 60
#
# Set environment variables in production:
#    - DEBUG=False
#    - SECRET_KEY=<random-value>
#    - ALLOWED_HOSTS=yourdomain.com
#    - DB_ENGINE=django.db.backends.postgresql
