"""
WSGI entry point. Socket.IO traffic under /socket.io/ is answered by the chat
server; everything else goes to Django.
"""

import socketio
from django.core.wsgi import get_wsgi_application

from taskpilot_project.settings.configure import configure_settings_module

configure_settings_module()

django_application = get_wsgi_application()

from taskpilot.socket.server import get_socket_server  # noqa: E402

application = socketio.WSGIApp(get_socket_server(), django_application)
