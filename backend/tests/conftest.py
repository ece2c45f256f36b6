import os, sys, pytest
# Ensure backend directory is on path so 'apidocs' and 'example' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from flask import Flask
from example import create_app
from apidocs import Info, RouteDescriptor, SpecDocument, apply_security_addon


@pytest.fixture(scope='session')
def app_instance():
    app = create_app({'TESTING': True})
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def bare_app():
    """Fresh Flask app without any registry or visualizers."""
    app = Flask('bare')
    app.config['TESTING'] = True
    return app


@pytest.fixture()
def album_base():
    """Base document: security schemes + GET /album requiring jwt_token."""
    doc = SpecDocument(Info(title='Album API', version='1.0.0'))
    apply_security_addon(doc)
    doc.add_route(RouteDescriptor('get', '/album', summary='List albums', security='jwt_token'))
    return doc
