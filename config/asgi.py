# ASGI (Asynchronous Server Gateway Interface) configuration
#
# Production servers:
# - Uvicorn
# - Hypercorn
# ==============================================================================

import os
from django.core.asgi import get_asgi_application

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# The CRM only speaks HTTP, so the plain Django handler is enough
application = get_asgi_application()


# UVICORN
# =======
# Install: pip install uvicorn
# Run: uvicorn config.asgi:application --host 0.0.0.0 --port 8000 --workers 4
#
# With auto-reload (development):
# uvicorn config.asgi:application --reload
