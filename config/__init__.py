# ==============================================================================
# SMALL-BUSINESS CRM - CONFIG PACKAGE
# ==============================================================================
#
# settings.py  - environment driven settings (python-decouple)
# urls.py      - root URL configuration (/api/...)
# wsgi.py      - WSGI entry point
# asgi.py      - ASGI entry point
